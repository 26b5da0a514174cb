"""
Boundary-first chunk assembly.

Classes and standalone functions become one chunk each; source lines no
structural chunk claimed are swept into fixed-size filler windows. The
assembler never splits on size; see :mod:`codeseg.chunking.resplit`.
"""

from __future__ import annotations

import uuid
from typing import Any, List, Optional, Sequence

from ..extraction import Extraction, StructuralExtractor, TreeSitterExtractor
from ..languages import config_for
from ..logger import get_logger
from ..models import Chunk, ClassInfo, FunctionInfo, ImportInfo, clone_all
from ..settings import ChunkerSettings, settings as default_settings
from .coverage import CoverageTracker, find_context_start
from .heuristics import estimate_tokens, scan_dependencies, split_source_lines

log = get_logger(__name__)


def new_chunk_id() -> str:
    return str(uuid.uuid4())


class ChunkAssembler:
    """Segment one source file into class, function and filler chunks."""

    def __init__(
        self,
        extractor: Optional[StructuralExtractor] = None,
        settings: Optional[ChunkerSettings] = None,
    ) -> None:
        self.extractor = extractor or TreeSitterExtractor()
        self.settings = settings or default_settings

    def chunk(self, tree_root: Any, source_text: str, language_id: str) -> List[Chunk]:
        """
        Produce chunks for ``source_text``.

        Emission order is all class chunks, then standalone function chunks,
        then filler chunks; the result is not sorted by line.
        """
        lines = split_source_lines(source_text)
        if not lines:
            return []

        extraction = self._extract(tree_root, source_text, language_id)
        imports = extraction.imports
        coverage = CoverageTracker(len(lines))
        chunks: List[Chunk] = []

        for cls in extraction.classes:
            chunk = self._class_chunk(cls, lines, language_id, imports)
            if chunk is None:
                continue
            coverage.mark_covered(cls.start_line, cls.end_line)
            chunks.append(chunk)

        for func in extraction.functions:
            if any(cls.encloses(func) for cls in extraction.classes):
                continue
            chunk = self._function_chunk(func, lines, language_id, imports)
            if chunk is None:
                continue
            coverage.mark_covered(func.start_line, func.end_line)
            chunks.append(chunk)

        structural = len(chunks)
        chunks.extend(self._filler_chunks(coverage, lines, language_id, imports))

        log.info(
            "chunks_assembled",
            language=language_id,
            lines=len(lines),
            structural=structural,
            filler=len(chunks) - structural,
        )
        return chunks

    def _extract(self, tree_root: Any, source_text: str, language_id: str) -> Extraction:
        try:
            return self.extractor.extract(tree_root, source_text, language_id)
        except Exception as exc:
            log.warning(
                "structure_extraction_failed",
                language=language_id,
                error=str(exc),
            )
            return Extraction()

    def _build_chunk(
        self,
        lines: Sequence[str],
        start_idx: int,
        end_idx: int,
        language_id: str,
        imports: List[ImportInfo],
        functions: Optional[List[FunctionInfo]] = None,
        classes: Optional[List[ClassInfo]] = None,
    ) -> Chunk:
        """Build a chunk from 0-based half-open ``lines[start_idx:end_idx]``."""
        text = "\n".join(lines[start_idx:end_idx])
        return Chunk(
            id=new_chunk_id(),
            text=text,
            start_line=start_idx + 1,
            end_line=end_idx,
            tokens=estimate_tokens(text, self.settings.chars_per_token),
            language=language_id,
            functions=clone_all(functions or []),
            classes=clone_all(classes or []),
            imports=clone_all(imports),
            dependencies=scan_dependencies(text),
        )

    def _class_chunk(
        self,
        cls: ClassInfo,
        lines: Sequence[str],
        language_id: str,
        imports: List[ImportInfo],
    ) -> Optional[Chunk]:
        start_idx = max(cls.start_line - 1, 0)
        end_idx = min(cls.end_line, len(lines))
        if start_idx >= end_idx:
            log.debug("descriptor_out_of_range", name=cls.name, kind=cls.kind)
            return None
        return self._build_chunk(
            lines,
            start_idx,
            end_idx,
            language_id,
            imports,
            functions=cls.methods,
            classes=[cls],
        )

    def _function_chunk(
        self,
        func: FunctionInfo,
        lines: Sequence[str],
        language_id: str,
        imports: List[ImportInfo],
    ) -> Optional[Chunk]:
        start_idx = max(func.start_line - 1, 0)
        end_idx = min(func.end_line, len(lines))
        if start_idx >= end_idx:
            log.debug("descriptor_out_of_range", name=func.name, kind="function")
            return None
        context_start = find_context_start(
            lines,
            start_idx,
            self.settings.context_lookback_lines,
            config_for(language_id).comment_prefixes,
        )
        return self._build_chunk(
            lines,
            context_start,
            end_idx,
            language_id,
            imports,
            functions=[func],
        )

    def _filler_chunks(
        self,
        coverage: CoverageTracker,
        lines: Sequence[str],
        language_id: str,
        imports: List[ImportInfo],
    ) -> List[Chunk]:
        max_lines = config_for(language_id).max_lines
        min_lines = self.settings.min_lines_per_chunk
        min_chars = self.settings.min_chunk_chars

        chunks: List[Chunk] = []
        for start_idx, end_idx in coverage.uncovered_runs():
            if end_idx - start_idx < min_lines:
                continue
            for window_start in range(start_idx, end_idx, max_lines):
                window_end = min(window_start + max_lines, end_idx)
                text = "\n".join(lines[window_start:window_end])
                if len(text.strip()) < min_chars:
                    continue
                chunks.append(
                    self._build_chunk(
                        lines, window_start, window_end, language_id, imports
                    )
                )
        return chunks


def chunk(
    tree_root: Any,
    source_text: str,
    language_id: str,
    extractor: Optional[StructuralExtractor] = None,
) -> List[Chunk]:
    """Assemble chunks for one parsed source file."""
    return ChunkAssembler(extractor=extractor).chunk(tree_root, source_text, language_id)
