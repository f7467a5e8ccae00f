"""Homepage URL normalisation."""

from __future__ import annotations

import re

_FRAGMENT = re.compile(r"#[^?]*\Z")


def sanitize_homepage(homepage: str | None) -> str | None:
    """Return a homepage url that enforces https and removes url fragments."""
    if homepage is None:
        return None
    return _FRAGMENT.sub("", homepage.replace("http:", "https:"))
