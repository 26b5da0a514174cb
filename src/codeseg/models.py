"""
Data structures exchanged between the structural extractor and the chunker.

Descriptors are produced once per parse and treated as read-only afterwards;
every chunk receives its own copies so chunks can be serialized or mutated
independently.
"""
from __future__ import annotations

import copy
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class FunctionInfo:
    """A function or method with 1-based inclusive line bounds."""

    name: str
    start_line: int
    end_line: int
    signature: Optional[str] = None


@dataclass
class ClassInfo:
    """A class-like construct (class, struct, impl block, interface...)."""

    name: str
    start_line: int
    end_line: int
    methods: List[FunctionInfo] = field(default_factory=list)
    kind: str = "class"

    def encloses(self, func: FunctionInfo) -> bool:
        """True when ``func`` lies entirely within this construct's lines."""
        return self.start_line <= func.start_line and func.end_line <= self.end_line


@dataclass
class ImportInfo:
    """A single import/use statement of a source file."""

    statement: str
    line: int
    module: Optional[str] = None


@dataclass
class Chunk:
    """A contiguous span of source text selected for indexing."""

    id: str
    text: str
    start_line: int
    end_line: int
    tokens: int
    language: str
    functions: List[FunctionInfo] = field(default_factory=list)
    classes: List[ClassInfo] = field(default_factory=list)
    imports: List[ImportInfo] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def clone_all(items: List[Any]) -> List[Any]:
    """Deep-copy a descriptor list so no chunk shares backing storage."""
    return copy.deepcopy(items)
