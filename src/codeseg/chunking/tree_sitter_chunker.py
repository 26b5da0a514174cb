"""
Tree-sitter front end for chunk assembly.

Loads grammars from ``tree_sitter_language_pack``, parses source text and
hands the tree to :class:`ChunkAssembler` together with the tree-sitter
structural extractor.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from tree_sitter import Parser, Tree  # type: ignore[import]

from ..extraction import TreeSitterExtractor
from ..logger import get_logger
from ..models import Chunk
from ..settings import ChunkerSettings
from .assembler import ChunkAssembler
from .resplit import split_oversized

log = get_logger(__name__)

# Registry language id -> grammar name in the language pack.
GRAMMARS: Dict[str, str] = {
    "typescript": "typescript",
    "javascript": "javascript",
    "python": "python",
    "rust": "rust",
    "go": "go",
    "java": "java",
    "cpp": "cpp",
    "c++": "cpp",
}

SUFFIX_LANGUAGES: Dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".py": "python",
    ".rs": "rust",
    ".go": "go",
    ".java": "java",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".cc": "cpp",
    ".hpp": "cpp",
    ".hxx": "cpp",
    ".hh": "cpp",
}

_PARSER_CACHE: Dict[str, Parser] = {}


def _load_parser(grammar: str) -> Parser:
    """
    Lazily load a parser for a prebuilt grammar.

    Users are expected to install `tree_sitter_language_pack`, which bundles a
    collection of compiled grammars.
    """
    if grammar in _PARSER_CACHE:
        return _PARSER_CACHE[grammar]

    try:
        from tree_sitter_language_pack import get_parser  # type: ignore
    except ImportError as exc:  # pragma: no cover - runtime configuration issue
        raise RuntimeError(
            "tree_sitter_language_pack is required for prebuilt grammars. "
            "Install it via `pip install tree-sitter-language-pack`."
        ) from exc

    parser = get_parser(grammar)
    _PARSER_CACHE[grammar] = parser
    return parser


def guess_language(path: Path) -> Optional[str]:
    return SUFFIX_LANGUAGES.get(path.suffix.lower())


def parse_source(source_text: str, language_id: str) -> Tree:
    """Parse ``source_text`` with the grammar registered for ``language_id``."""
    grammar = GRAMMARS.get(language_id)
    if not grammar:
        raise ValueError(f"No grammar available for language: {language_id}")
    return _load_parser(grammar).parse(source_text.encode("utf-8"))


class TreeSitterChunker:
    """Parse and chunk source files end to end."""

    def __init__(
        self,
        settings: Optional[ChunkerSettings] = None,
        resplit_oversized: bool = False,
        target_token_budget: Optional[int] = None,
    ) -> None:
        self.assembler = ChunkAssembler(extractor=TreeSitterExtractor(), settings=settings)
        self.resplit_oversized = resplit_oversized
        self.target_token_budget = target_token_budget

    def chunk_source(self, source_text: str, language_id: str) -> List[Chunk]:
        """
        Chunk in-memory source text.

        Syntax errors do not stop chunking; the tree-sitter tree still carries
        whatever structure could be recovered.
        """
        if not source_text:
            return []
        tree = parse_source(source_text, language_id)
        if tree.root_node.has_error:
            log.info("syntax_errors_present", language=language_id)
        chunks = self.assembler.chunk(tree.root_node, source_text, language_id)
        if self.resplit_oversized:
            chunks = split_oversized(
                chunks,
                self.target_token_budget,
                self.assembler.settings.chars_per_token,
            )
        return chunks

    def chunk_file(self, path: Path, language_id: Optional[str] = None) -> List[Chunk]:
        language = language_id or guess_language(path)
        if not language:
            raise ValueError(f"Unsupported language for chunking: {path}")
        text = path.read_text(encoding="utf-8", errors="ignore")
        chunks = self.chunk_source(text, language)
        log.info("file_chunked", file=str(path), language=language, chunks=len(chunks))
        return chunks

    def chunk_repository(
        self,
        files: Iterable[Path],
        progress_callback: Optional[Callable[[Path], None]] = None,
    ) -> Dict[Path, List[Chunk]]:
        """Chunk all provided files, skipping unsupported extensions."""
        results: Dict[Path, List[Chunk]] = {}
        for path in files:
            try:
                if guess_language(path):
                    results[path] = self.chunk_file(path)
            finally:
                if progress_callback:
                    progress_callback(path)
        return results


def chunk_source(source_text: str, language_id: str) -> List[Chunk]:
    return TreeSitterChunker().chunk_source(source_text, language_id)


def chunk_file(path: Path, language_id: Optional[str] = None) -> List[Chunk]:
    return TreeSitterChunker().chunk_file(path, language_id)
