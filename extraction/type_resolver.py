"""
Field type resolution.

Turns a tree-sitter-go type expression node into the canonical string used
in generated code, e.g. ``int``, ``sql.NullString``, ``[]byte``,
``*time.Time``, ``*[]byte`` or ``[]*sql.NullString``.

Only four shapes are understood: identifiers, qualified identifiers,
arrays/slices and pointers. Anything else resolves to ``None`` and the
caller drops the field.
"""

import enum
import logging
from typing import Optional

from tree_sitter import Node

from extraction.config import (
    ARRAY_TYPE_NODES,
    IDENTIFIER_TYPE_NODES,
    PACKAGE_IDENTIFIER_NODE,
    POINTER_TYPE_NODE,
    QUALIFIED_TYPE_NODE,
)

logger = logging.getLogger(__name__)


class TypeShape(enum.Enum):
    """Closed set of type expression shapes the resolver distinguishes."""

    IDENTIFIER = "identifier"
    QUALIFIED = "qualified"
    ARRAY = "array"
    POINTER = "pointer"
    OTHER = "other"


# Shapes allowed as the element of an array and as the target of a pointer.
_ARRAY_ELEMENT_SHAPES = frozenset({TypeShape.IDENTIFIER, TypeShape.QUALIFIED, TypeShape.POINTER})
_POINTER_TARGET_SHAPES = frozenset({TypeShape.IDENTIFIER, TypeShape.QUALIFIED, TypeShape.ARRAY})


def classify_type_node(node: Optional[Node]) -> TypeShape:
    """Map a type expression node onto a TypeShape."""
    if node is None:
        return TypeShape.OTHER
    if node.type in IDENTIFIER_TYPE_NODES:
        return TypeShape.IDENTIFIER
    if node.type == QUALIFIED_TYPE_NODE:
        return TypeShape.QUALIFIED
    if node.type in ARRAY_TYPE_NODES:
        return TypeShape.ARRAY
    if node.type == POINTER_TYPE_NODE:
        return TypeShape.POINTER
    return TypeShape.OTHER


def _node_text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text else ""


def _resolve_identifier(node: Node) -> Optional[str]:
    # byte, string, int, or a local named type
    return _node_text(node) or None


def _resolve_qualified(node: Node) -> Optional[str]:
    # time.Time, sql.NullString
    package = node.child_by_field_name("package")
    name = node.child_by_field_name("name")
    if package is None or name is None or package.type != PACKAGE_IDENTIFIER_NODE:
        return None
    return f"{_node_text(package)}.{_node_text(name)}"


def _resolve_array(node: Node) -> Optional[str]:
    # []byte, []time.Time, []*byte, []*sql.NullString
    element = node.child_by_field_name("element")
    element_type = _resolve_nested(element, _ARRAY_ELEMENT_SHAPES)
    if element_type is None:
        return None
    return f"[]{element_type}"


def _resolve_pointer(node: Node) -> Optional[str]:
    # *bool, *time.Time, *[]byte
    target = node.named_children[0] if node.named_child_count else None
    target_type = _resolve_nested(target, _POINTER_TARGET_SHAPES)
    if target_type is None:
        return None
    return f"*{target_type}"


def _resolve_nested(node: Optional[Node], allowed: frozenset) -> Optional[str]:
    shape = classify_type_node(node)
    if shape not in allowed:
        return None
    return resolve_type_expression(node)


def resolve_type_expression(node: Optional[Node]) -> Optional[str]:
    """Render a type expression node as its canonical string.

    Args:
        node: The ``type`` node of a field declaration.

    Returns:
        The canonical type string, or None when the shape (or any nested
        shape) is not supported.
    """
    shape = classify_type_node(node)
    if shape is TypeShape.IDENTIFIER:
        return _resolve_identifier(node)
    if shape is TypeShape.QUALIFIED:
        return _resolve_qualified(node)
    if shape is TypeShape.ARRAY:
        return _resolve_array(node)
    if shape is TypeShape.POINTER:
        return _resolve_pointer(node)
    if node is not None:
        logger.debug(
            "Unsupported type expression '%s' at line %d",
            node.type,
            node.start_point.row + 1,
        )
    return None
