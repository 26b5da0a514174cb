from __future__ import annotations

from typing import Callable, List

import pytest

from codeseg.chunking.heuristics import estimate_tokens
from codeseg.models import Chunk


@pytest.fixture
def make_chunk() -> Callable[..., Chunk]:
    def _make(lines: List[str], start_line: int = 1, language: str = "typescript") -> Chunk:
        text = "\n".join(lines)
        return Chunk(
            id="parent",
            text=text,
            start_line=start_line,
            end_line=start_line + len(lines) - 1,
            tokens=estimate_tokens(text),
            language=language,
        )

    return _make
