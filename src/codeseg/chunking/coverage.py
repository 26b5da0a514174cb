"""
Line bookkeeping for chunk assembly.

Tracks which source lines structural chunks have claimed, finds the leftover
runs, and decides how much leading commentary a construct takes with it.
"""
from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

COMMENT_PREFIXES: tuple[str, ...] = ("//", "*")
DEFAULT_LOOKBACK = 3


class CoverageTracker:
    """Boolean-per-line record of claimed source lines (0-indexed internally)."""

    def __init__(self, line_count: int) -> None:
        self._covered: List[bool] = [False] * line_count

    def mark_covered(self, start_line: int, end_line: int) -> None:
        """Claim 1-based inclusive ``[start_line, end_line]``, clamped to the record."""
        start_idx = max(start_line - 1, 0)
        end_idx = min(end_line, len(self._covered))
        for idx in range(start_idx, end_idx):
            self._covered[idx] = True

    def is_covered(self, line: int) -> bool:
        if not 1 <= line <= len(self._covered):
            raise IndexError(f"line {line} outside 1..{len(self._covered)}")
        return self._covered[line - 1]

    def uncovered_runs(self) -> Iterator[Tuple[int, int]]:
        """Yield maximal uncovered runs as 0-based half-open ``(start, end)`` pairs."""
        total = len(self._covered)
        idx = 0
        while idx < total:
            while idx < total and self._covered[idx]:
                idx += 1
            if idx >= total:
                break
            end = idx
            while end < total and not self._covered[end]:
                end += 1
            yield idx, end
            idx = end


def _is_context_line(line: str, comment_prefixes: Tuple[str, ...]) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(comment_prefixes)


def find_context_start(
    lines: Sequence[str],
    construct_start_idx: int,
    lookback: int = DEFAULT_LOOKBACK,
    comment_prefixes: Tuple[str, ...] = COMMENT_PREFIXES,
) -> int:
    """
    Return the 0-based index where a construct's chunk should begin.

    Walks upward from the line just above the construct, at most ``lookback``
    lines, taking blank lines and lines starting with one of
    ``comment_prefixes``. The first line that is neither ends
    the walk, even if qualifying lines lie beyond it.
    """
    context_start = construct_start_idx
    floor = max(construct_start_idx - lookback, 0)
    idx = construct_start_idx - 1
    while idx >= floor and idx < len(lines):
        if not _is_context_line(lines[idx], comment_prefixes):
            break
        context_start = idx
        idx -= 1
    return context_start
