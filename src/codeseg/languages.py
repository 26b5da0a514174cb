"""
Per-language structural node configuration.

Each supported language maps to the tree-sitter node kinds that stand for
functions, classes, interfaces and imports, plus its size preferences. The
table is built once at import and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Iterable, List, Mapping, Tuple

from .logger import get_logger
from .settings import DEFAULT_CHUNK_SIZE, MAX_LINES_PER_CHUNK, settings

log = get_logger(__name__)


@dataclass(frozen=True)
class LanguageConfig:
    """Immutable chunking preferences and node-kind sets for one language."""

    name: str
    preferred_chunk_size: int = DEFAULT_CHUNK_SIZE
    max_lines: int = MAX_LINES_PER_CHUNK
    include_docs: bool = True
    include_imports: bool = True
    # Line prefixes that mark comment lines worth keeping above a construct.
    comment_prefixes: Tuple[str, ...] = ("//", "*")
    function_kinds: FrozenSet[str] = frozenset()
    class_kinds: FrozenSet[str] = frozenset()
    interface_kinds: FrozenSet[str] = frozenset()
    import_kinds: FrozenSet[str] = frozenset()

    def is_function_kind(self, kind: str) -> bool:
        return kind in self.function_kinds

    def is_class_kind(self, kind: str) -> bool:
        return kind in self.class_kinds

    def is_interface_kind(self, kind: str) -> bool:
        return kind in self.interface_kinds

    def is_import_kind(self, kind: str) -> bool:
        return kind in self.import_kinds


def _config(
    name: str,
    functions: Iterable[str],
    classes: Iterable[str],
    interfaces: Iterable[str],
    imports: Iterable[str],
    comment_prefixes: Tuple[str, ...] = ("//", "*"),
) -> LanguageConfig:
    return LanguageConfig(
        name=name,
        comment_prefixes=comment_prefixes,
        function_kinds=frozenset(functions),
        class_kinds=frozenset(classes),
        interface_kinds=frozenset(interfaces),
        import_kinds=frozenset(imports),
    )


_TYPESCRIPT = _config(
    "typescript",
    functions=(
        "function_declaration",
        "function_expression",
        "arrow_function",
        "method_definition",
        "generator_function_declaration",
    ),
    classes=("class_declaration", "class_expression"),
    interfaces=(
        "interface_declaration",
        "type_alias_declaration",
        "enum_declaration",
    ),
    imports=("import_statement", "import_declaration", "export_statement"),
)

_PYTHON = _config(
    "python",
    functions=("function_definition", "lambda"),
    classes=("class_definition",),
    # Python has no formal interfaces.
    interfaces=(),
    imports=(
        "import_statement",
        "import_from_statement",
        "future_import_statement",
    ),
    comment_prefixes=("#",),
)

_RUST = _config(
    "rust",
    functions=("function_item", "function_signature_item", "closure_expression"),
    classes=("struct_item", "enum_item", "impl_item"),
    interfaces=("trait_item", "type_alias_item"),
    imports=("use_declaration", "mod_item", "use_wildcard"),
)

_GO = _config(
    "go",
    functions=("function_declaration", "method_declaration"),
    classes=("type_declaration", "type_spec"),
    interfaces=("interface_declaration", "interface_type"),
    imports=("import_declaration", "import_spec"),
)

_JAVA = _config(
    "java",
    functions=("method_declaration", "constructor_declaration", "lambda_expression"),
    classes=("class_declaration", "enum_declaration", "record_declaration"),
    interfaces=("interface_declaration", "annotation_declaration"),
    imports=("import_declaration",),
)

_CPP = _config(
    "cpp",
    functions=("function_definition", "function_declarator", "lambda_expression"),
    classes=("class_specifier", "struct_specifier", "union_specifier"),
    interfaces=(),
    imports=("include_declaration", "using_declaration"),
)

_REGISTRY: Mapping[str, LanguageConfig] = MappingProxyType(
    {
        "typescript": _TYPESCRIPT,
        "javascript": _TYPESCRIPT,
        "python": _PYTHON,
        "rust": _RUST,
        "go": _GO,
        "java": _JAVA,
        "cpp": _CPP,
    }
)

# Accepted by config_for but not advertised as supported ids.
_ALIASES: Mapping[str, str] = MappingProxyType({"c++": "cpp"})

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(_REGISTRY)


def config_for(language_id: str) -> LanguageConfig:
    """
    Return the configuration for ``language_id``.

    Matching is case-sensitive. Unknown ids resolve to the default language's
    configuration instead of raising.
    """
    key = _ALIASES.get(language_id, language_id)
    config = _REGISTRY.get(key)
    if config is not None:
        return config
    log.debug(
        "language_fallback",
        language=language_id,
        default=settings.default_language,
    )
    return _REGISTRY.get(settings.default_language, _TYPESCRIPT)


def is_supported(language_id: str) -> bool:
    return language_id in _REGISTRY


def supported_languages() -> List[str]:
    return list(SUPPORTED_LANGUAGES)
