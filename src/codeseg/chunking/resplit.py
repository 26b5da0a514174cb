"""
Size-based re-splitting of assembled chunks.

Fragments inherit every structural list of their parent unchanged, so a
fragment may name a function or class whose text lives in a sibling
fragment. Consumers that need per-fragment precision must recompute it.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from ..languages import config_for
from ..logger import get_logger
from ..models import Chunk, clone_all
from ..settings import settings
from .assembler import new_chunk_id
from .heuristics import estimate_tokens

log = get_logger(__name__)


def _fragment(
    parent: Chunk, lines: List[str], first: int, last: int, chars_per_token: int
) -> Chunk:
    """Build the fragment covering ``lines[first:last]`` of ``parent``."""
    text = "\n".join(lines[first:last])
    return Chunk(
        id=new_chunk_id(),
        text=text,
        start_line=parent.start_line + first,
        end_line=parent.start_line + last - 1,
        tokens=estimate_tokens(text, chars_per_token),
        language=parent.language,
        functions=clone_all(parent.functions),
        classes=clone_all(parent.classes),
        imports=clone_all(parent.imports),
        dependencies=list(parent.dependencies),
    )


def resplit(
    chunk: Chunk, target_token_budget: int, chars_per_token: Optional[int] = None
) -> List[Chunk]:
    """
    Split ``chunk`` into line-aligned fragments of at most the token budget.

    A chunk already within budget is returned as the only element. Otherwise
    lines are accumulated greedily; a single line larger than the budget still
    becomes its own fragment. Pass the ``chars_per_token`` ratio the chunk was
    estimated with when it differs from the configured one.
    """
    ratio = chars_per_token or settings.chars_per_token
    if chunk.tokens <= target_token_budget:
        return [chunk]

    lines = chunk.text.split("\n")
    fragments: List[Chunk] = []
    current_start = 0
    current_size = 0

    for idx, line in enumerate(lines):
        line_tokens = estimate_tokens(line, ratio)
        if current_size + line_tokens > target_token_budget and current_start < idx:
            fragments.append(_fragment(chunk, lines, current_start, idx, ratio))
            current_start = idx
            current_size = line_tokens
        else:
            current_size += line_tokens

    if current_start < len(lines):
        fragments.append(_fragment(chunk, lines, current_start, len(lines), ratio))

    log.debug(
        "chunk_resplit",
        start_line=chunk.start_line,
        end_line=chunk.end_line,
        tokens=chunk.tokens,
        budget=target_token_budget,
        fragments=len(fragments),
    )
    return fragments


def split_oversized(
    chunks: Iterable[Chunk],
    target_token_budget: Optional[int] = None,
    chars_per_token: Optional[int] = None,
) -> List[Chunk]:
    """
    Re-split every chunk over budget, preserving order.

    Without an explicit budget each chunk uses its language's preferred chunk
    size, capped by the configured maximum.
    """
    result: List[Chunk] = []
    for item in chunks:
        budget = target_token_budget
        if budget is None:
            preferred = config_for(item.language).preferred_chunk_size
            budget = min(preferred or settings.default_chunk_size, settings.max_chunk_size)
        result.extend(resplit(item, budget, chars_per_token))
    return result
