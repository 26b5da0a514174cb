"""
Tree-sitter backed structural extraction.

Walks a concrete syntax tree and classifies nodes with the node-kind sets of
the language registry. Trees containing ERROR nodes are walked like any
other; whatever structure survives the parse is reported.
"""
from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node  # type: ignore[import]

from ..languages import LanguageConfig, config_for
from ..logger import get_logger
from ..models import ClassInfo, FunctionInfo, ImportInfo
from .base import Extraction

log = get_logger(__name__)

ANONYMOUS = "<anonymous>"

# Parents whose name field names an anonymous function assigned to them.
_NAMING_PARENTS = {
    "variable_declarator": "name",
    "assignment": "left",
    "pair": "key",
    "public_field_definition": "name",
    "let_declaration": "pattern",
}


def _text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def _first_line(node: Node, source: bytes) -> str:
    return _text(node, source).split("\n", 1)[0].strip()


def _lines(node: Node) -> tuple[int, int]:
    return node.start_point[0] + 1, node.end_point[0] + 1


class TreeSitterExtractor:
    """Produce function, class and import descriptors from a tree-sitter tree."""

    def extract(
        self, tree_root: Optional[Node], source_text: str, language_id: str
    ) -> Extraction:
        if tree_root is None:
            return Extraction()

        config = config_for(language_id)
        source = source_text.encode("utf-8")
        result = Extraction()

        stack: List[Node] = [tree_root]
        while stack:
            node = stack.pop()
            kind = node.type
            if config.is_class_kind(kind) or config.is_interface_kind(kind):
                info = self._class_info(node, config, source)
                result.classes.append(info)
                result.functions.extend(info.methods)
                continue
            if config.is_function_kind(kind):
                result.functions.append(self._function_info(node, source))
                continue
            if config.is_import_kind(kind) and self._is_import(node):
                result.imports.append(self._import_info(node, source))
                continue
            stack.extend(reversed(node.children))

        log.debug(
            "structure_extracted",
            language=language_id,
            functions=len(result.functions),
            classes=len(result.classes),
            imports=len(result.imports),
            has_error=bool(getattr(tree_root, "has_error", False)),
        )
        return result

    def _class_info(
        self, node: Node, config: LanguageConfig, source: bytes
    ) -> ClassInfo:
        start_line, end_line = _lines(node)
        kind = "interface" if config.is_interface_kind(node.type) else "class"
        return ClassInfo(
            name=self._node_name(node, source),
            start_line=start_line,
            end_line=end_line,
            methods=self._collect_methods(node, config, source),
            kind=kind,
        )

    def _collect_methods(
        self, class_node: Node, config: LanguageConfig, source: bytes
    ) -> List[FunctionInfo]:
        methods: List[FunctionInfo] = []
        stack: List[Node] = list(reversed(class_node.children))
        while stack:
            node = stack.pop()
            if config.is_function_kind(node.type):
                methods.append(self._function_info(node, source))
                continue
            stack.extend(reversed(node.children))
        return methods

    def _function_info(self, node: Node, source: bytes) -> FunctionInfo:
        start_line, end_line = _lines(node)
        return FunctionInfo(
            name=self._node_name(node, source),
            start_line=start_line,
            end_line=end_line,
            signature=_first_line(node, source),
        )

    def _node_name(self, node: Node, source: bytes) -> str:
        name = node.child_by_field_name("name")
        if name is not None:
            return _text(name, source)

        if node.type == "impl_item":
            target = node.child_by_field_name("type")
            if target is not None:
                return _text(target, source)

        declarator = node.child_by_field_name("declarator")
        if declarator is not None:
            if declarator.child_by_field_name("declarator") is None:
                return _text(declarator, source)
            return self._node_name(declarator, source)

        for child in node.named_children:
            if child.type == "type_spec":
                return self._node_name(child, source)

        parent = node.parent
        if parent is not None and parent.type in _NAMING_PARENTS:
            target = parent.child_by_field_name(_NAMING_PARENTS[parent.type])
            if target is not None:
                return _text(target, source)
        return ANONYMOUS

    @staticmethod
    def _is_import(node: Node) -> bool:
        # Only re-exports (`export ... from "x"`) pull in another module;
        # other exports and inline `mod x { ... }` blocks hold code.
        if node.type == "export_statement":
            return node.child_by_field_name("source") is not None
        if node.type == "mod_item":
            return node.child_by_field_name("body") is None
        return True

    @staticmethod
    def _import_info(node: Node, source: bytes) -> ImportInfo:
        module_node = node.child_by_field_name("source") or node.child_by_field_name(
            "module_name"
        )
        module = _text(module_node, source).strip("'\"") if module_node else None
        return ImportInfo(
            statement=_text(node, source).strip(),
            line=node.start_point[0] + 1,
            module=module,
        )
