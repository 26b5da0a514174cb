"""
Chunking utilities for semantic code indexing.

Splits source files into function, class and filler chunks aligned to syntax
boundaries, with an optional token-budget re-split pass.
"""

from .assembler import ChunkAssembler, chunk
from .coverage import CoverageTracker, find_context_start
from .heuristics import estimate_tokens, scan_dependencies
from .resplit import resplit, split_oversized
from .tree_sitter_chunker import TreeSitterChunker, chunk_file, chunk_source

__all__ = [
    "ChunkAssembler",
    "CoverageTracker",
    "TreeSitterChunker",
    "chunk",
    "chunk_file",
    "chunk_source",
    "estimate_tokens",
    "find_context_start",
    "resplit",
    "scan_dependencies",
    "split_oversized",
]
