"""Configuration loader for the cabal inventory.

Reads the ``cabal`` section of a licensed-style YAML file (default:
``.licensed.yml`` in the project root) and validates its structure against
``CONFIG_SCHEMA``. Every key is optional; a missing default file simply means
defaults apply.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from .parsers.cabal_file import DEFAULT_TARGETS

DEFAULT_CONFIG_NAME = ".licensed.yml"
CONFIG_PATH_ENV_VAR = "CABAL_INVENTORY_CONFIG"
DEFAULT_QUERY_WORKERS = 4

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "cabal": {
            "type": ["object", "null"],
            "properties": {
                "cabal_file_targets": {
                    "type": ["array", "string", "null"],
                    "items": {"type": "string", "minLength": 1},
                },
                "ghc_package_db": {
                    "type": ["array", "string", "null"],
                    "items": {"type": "string", "minLength": 1},
                },
                "query_workers": {"type": "integer", "minimum": 1},
                "query_timeout": {"type": ["number", "null"], "exclusiveMinimum": 0},
            },
            "additionalProperties": False,
        },
    },
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class CabalConfig:
    """Settings consumed by the cabal adapter."""

    root: Path
    targets: tuple[str, ...] = DEFAULT_TARGETS
    package_dbs: tuple[str, ...] = field(default_factory=tuple)
    query_workers: int = DEFAULT_QUERY_WORKERS
    query_timeout: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None, root: Path) -> CabalConfig:
        """Build a config from the ``cabal`` section of a loaded document."""
        section = data or {}
        targets = _as_tuple(section.get("cabal_file_targets")) or DEFAULT_TARGETS
        return cls(
            root=root,
            targets=targets,
            package_dbs=_as_tuple(section.get("ghc_package_db")),
            query_workers=section.get("query_workers", DEFAULT_QUERY_WORKERS),
            query_timeout=section.get("query_timeout"),
        )


def _as_tuple(value: str | Iterable[str] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_document(document: Any) -> None:
    """Raise ConfigError listing every schema violation in ``document``."""
    validator = Draft202012Validator(CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(document), key=lambda e: list(e.path))
    if errors:
        raise ConfigError("Invalid configuration:\n" + _format_errors(errors))


def _resolve_config_path(root: Path, path: Path | str | None) -> tuple[Path, bool]:
    """Resolve the configuration path and whether it was explicitly requested.

    Priority:
    1. Explicit path argument
    2. CABAL_INVENTORY_CONFIG environment variable
    3. .licensed.yml in the project root
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return root / DEFAULT_CONFIG_NAME, False


def load_config(root: Path | str, path: Path | str | None = None) -> CabalConfig:
    """Load and validate the cabal configuration for a project.

    Args:
        root: the project root containing the cabal files.
        path: optional config file. If not provided, uses the
            CABAL_INVENTORY_CONFIG env var or falls back to ``.licensed.yml``.

    Raises:
        ConfigError: If an explicitly requested file is missing, or a file
            cannot be read, parsed or validated.
    """
    root = Path(root).resolve()
    config_path, explicit = _resolve_config_path(root, path)

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return CabalConfig(root=root)

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc

    if document is None:
        return CabalConfig(root=root)
    if not isinstance(document, dict):
        raise ConfigError("Configuration must be a mapping")

    validate_document(document)
    return CabalConfig.from_dict(document.get("cabal"), root)
