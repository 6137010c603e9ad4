"""
AST traversal and struct extraction logic.

This module walks the top-level declarations of a parsed Go file and turns
every qualifying struct declaration into a StructRecord.
"""

import logging
from typing import Iterator, List, Optional, Tuple
from tree_sitter import Node, Tree

from extraction.config import (
    FIELD_DECLARATION_LIST_NODE,
    FIELD_DECLARATION_NODE,
    STRUCT_TYPE_NODE,
    TYPE_DECLARATION_NODE,
    TYPE_SPEC_NODES,
)
from extraction.models import FieldRecord, InclusionFilter, StructRecord
from extraction.type_resolver import resolve_type_expression

logger = logging.getLogger(__name__)


def extract_field_line(field_node: Node) -> List[FieldRecord]:
    """Extract the fields declared on one line of a struct body.

    ``x, y int`` yields two records sharing one resolved type. An embedded
    field declares no names and yields nothing.

    Args:
        field_node: A field_declaration node.

    Returns:
        One FieldRecord per declared name, or an empty list when the type
        cannot be resolved.
    """
    names = [
        name_node.text.decode("utf-8")
        for name_node in field_node.children_by_field_name("name")
        if name_node.text
    ]
    if not names:
        return []

    field_type = resolve_type_expression(field_node.child_by_field_name("type"))
    if field_type is None:
        logger.debug(
            "Dropping field(s) %s at line %d: unsupported type",
            ", ".join(names),
            field_node.start_point.row + 1,
        )
        return []

    return [FieldRecord(name=name, type=field_type) for name in names]


def extract_fields(struct_node: Node) -> Tuple[FieldRecord, ...]:
    """Extract every field of a struct_type node in source order."""
    fields: List[FieldRecord] = []
    for body in struct_node.named_children:
        if body.type != FIELD_DECLARATION_LIST_NODE:
            continue
        for field_node in body.named_children:
            # skip comments between fields
            if field_node.type != FIELD_DECLARATION_NODE:
                continue
            fields.extend(extract_field_line(field_node))
    return tuple(fields)


def iter_type_specs(root: Node) -> Iterator[Node]:
    """Yield type_spec/type_alias nodes of top-level type declarations.

    Grouped declarations (``type ( A struct{}; B int )``) are flattened.
    Declarations nested in function bodies are not visited.
    """
    for decl in root.named_children:
        if decl.type != TYPE_DECLARATION_NODE:
            continue
        for spec in decl.named_children:
            if spec.type in TYPE_SPEC_NODES:
                yield spec


def struct_body_of(spec_node: Node) -> Optional[Node]:
    """Return the struct_type of a type spec, or None if it is not a struct."""
    type_node = spec_node.child_by_field_name("type")
    if type_node is None or type_node.type != STRUCT_TYPE_NODE:
        return None
    return type_node


def extract_structs_from_tree(
    tree: Tree,
    namespace: str = "",
    inclusion_filter: Optional[InclusionFilter] = None,
    file_path: str = "<memory>",
) -> List[StructRecord]:
    """Collect the struct declarations of one parsed file.

    Args:
        tree: The parsed tree-sitter Tree.
        namespace: Import path the file belongs to ("" for same package).
        inclusion_filter: Allow-list of struct names; None accepts everything.
        file_path: Path used in log messages.

    Returns:
        StructRecords in declaration order.
    """
    if inclusion_filter is None:
        inclusion_filter = InclusionFilter()

    structs: List[StructRecord] = []
    for spec in iter_type_specs(tree.root_node):
        struct_node = struct_body_of(spec)
        if struct_node is None:
            continue

        name_node = spec.child_by_field_name("name")
        if name_node is None or not name_node.text:
            continue
        struct_name = name_node.text.decode("utf-8")

        if not inclusion_filter.accepts(struct_name):
            logger.debug("Skipping struct %s in %s: not in whitelist", struct_name, file_path)
            continue

        record = StructRecord.create(
            namespace=namespace,
            name=struct_name,
            fields=extract_fields(struct_node),
        )
        logger.debug(
            "Extracted struct %s with %d fields at %s:%d",
            record.qualified_name,
            len(record.fields),
            file_path,
            spec.start_point.row + 1,
        )
        structs.append(record)

    return structs
