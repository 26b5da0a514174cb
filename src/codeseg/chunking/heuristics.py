"""Cheap text heuristics used for chunk sizing and metadata."""
from __future__ import annotations

from typing import List, Optional

from ..settings import settings

DEPENDENCY_PREFIXES: tuple[str, ...] = (
    "import ",
    "from ",
    "use ",
    "require(",
    "#include ",
)


def estimate_tokens(text: str, chars_per_token: Optional[int] = None) -> int:
    """
    Approximate the token count of ``text``.

    Empty text counts as zero tokens; anything else is at least one token.
    """
    if not text:
        return 0
    divisor = chars_per_token or settings.chars_per_token
    return max(1, len(text) // divisor)


def scan_dependencies(text: str) -> List[str]:
    """Return every import-like line of ``text``, trimmed, in source order."""
    deps: List[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped.startswith(DEPENDENCY_PREFIXES):
            deps.append(stripped)
    return deps


def split_source_lines(text: str) -> List[str]:
    """
    Split source text into lines the way parsers number them.

    Only ``\\n`` separates lines, a trailing ``\\r`` is dropped, and a final
    newline does not produce an extra empty line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
