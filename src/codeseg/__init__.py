"""
Syntax-aware source chunking for embedding-based code search.

Public entry points:

- :func:`chunk` assembles class, function and filler chunks for a parsed file.
- :func:`resplit` divides a chunk that exceeds a token budget.
- :func:`config_for`, :func:`is_supported` and :func:`supported_languages`
  expose the per-language node configuration.
"""

from .chunking import (
    ChunkAssembler,
    TreeSitterChunker,
    chunk,
    chunk_file,
    chunk_source,
    estimate_tokens,
    resplit,
    scan_dependencies,
    split_oversized,
)
from .extraction import Extraction, StaticExtractor, StructuralExtractor, TreeSitterExtractor
from .languages import LanguageConfig, config_for, is_supported, supported_languages
from .models import Chunk, ClassInfo, FunctionInfo, ImportInfo
from .version import __version__

__all__ = [
    "Chunk",
    "ChunkAssembler",
    "ClassInfo",
    "Extraction",
    "FunctionInfo",
    "ImportInfo",
    "LanguageConfig",
    "StaticExtractor",
    "StructuralExtractor",
    "TreeSitterChunker",
    "TreeSitterExtractor",
    "__version__",
    "chunk",
    "chunk_file",
    "chunk_source",
    "config_for",
    "estimate_tokens",
    "is_supported",
    "resplit",
    "scan_dependencies",
    "split_oversized",
    "supported_languages",
]
