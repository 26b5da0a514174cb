"""
Structural extractor interface.

The chunker never inspects syntax nodes itself; it asks an extractor for the
function, class and import descriptors of a parsed file. Any object with a
matching ``extract`` method can be plugged in.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable

from ..models import ClassInfo, FunctionInfo, ImportInfo, clone_all


@dataclass
class Extraction:
    """Descriptors extracted from one source file, in document order."""

    functions: List[FunctionInfo] = field(default_factory=list)
    classes: List[ClassInfo] = field(default_factory=list)
    imports: List[ImportInfo] = field(default_factory=list)


@runtime_checkable
class StructuralExtractor(Protocol):
    def extract(self, tree_root: Any, source_text: str, language_id: str) -> Extraction:
        ...


class StaticExtractor:
    """Extractor that replays a fixed set of descriptors, ignoring the tree."""

    def __init__(
        self,
        functions: Optional[Sequence[FunctionInfo]] = None,
        classes: Optional[Sequence[ClassInfo]] = None,
        imports: Optional[Sequence[ImportInfo]] = None,
    ) -> None:
        self.functions = list(functions or [])
        self.classes = list(classes or [])
        self.imports = list(imports or [])

    def extract(self, tree_root: Any, source_text: str, language_id: str) -> Extraction:
        return Extraction(
            functions=clone_all(self.functions),
            classes=clone_all(self.classes),
            imports=clone_all(self.imports),
        )
