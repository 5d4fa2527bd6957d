"""Whitespace normalization shared by chapter and navigation text."""

import re

_LINE_BREAKS = re.compile(r"\r?\n+")
_SPACES = re.compile(r" {2,}")


def clean_text(value: str | None) -> str:
    """Flatten whitespace: NBSP to space, line breaks to one space, trim."""
    value = str(value or "").replace("\u00a0", " ")
    value = _LINE_BREAKS.sub(" ", value)
    return _SPACES.sub(" ", value).strip()
