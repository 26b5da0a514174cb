"""
Structural extraction for chunk assembly.

Turns a parsed syntax tree into function, class and import descriptors.
"""

from .base import Extraction, StaticExtractor, StructuralExtractor
from .tree_sitter_extractor import TreeSitterExtractor

__all__ = ["Extraction", "StaticExtractor", "StructuralExtractor", "TreeSitterExtractor"]
