"""Parse ``ghc-pkg field`` output."""

from __future__ import annotations


def parse_fields(text: str) -> dict[str, str]:
    """Return a mapping of field name to value from ``key: value`` lines.

    Lines indented with whitespace continue the previous field. Lines without a
    colon are skipped, fields without a value are left out and the first
    occurrence of a field wins.
    """
    fields: dict[str, list[str]] = {}
    current: list[str] | None = None

    for raw in text.splitlines():
        if not raw.strip():
            continue
        if raw[0].isspace():
            if current is not None:
                current.append(raw.strip())
            continue

        if ":" not in raw:
            current = None
            continue
        key, value = raw.split(":", 1)
        key = key.strip()
        if not key or key in fields:
            current = None
            continue
        current = [value.strip()] if value.strip() else []
        fields[key] = current

    return {key: " ".join(parts) for key, parts in fields.items() if parts}


def field_value(text: str, name: str) -> str | None:
    return parse_fields(text).get(name)
