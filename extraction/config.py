"""
Configuration constants for Go struct extraction.

Defines the tree-sitter-go node type strings the extractor relies on.
"""

from typing import Set

# Every Go file must open with one
PACKAGE_CLAUSE_NODE: str = "package_clause"

# Comments may precede the package clause
COMMENT_NODE: str = "comment"

# Top-level `type ...` declaration (single or grouped)
TYPE_DECLARATION_NODE: str = "type_declaration"

# Children of a type declaration that bind a name to a type.
# `type A struct{}` is a type_spec, `type A = struct{}` a type_alias.
TYPE_SPEC_NODES: Set[str] = {
    "type_spec",
    "type_alias",
}

# Struct body nodes
STRUCT_TYPE_NODE: str = "struct_type"
FIELD_DECLARATION_LIST_NODE: str = "field_declaration_list"
FIELD_DECLARATION_NODE: str = "field_declaration"

# Type expression nodes, grouped by the shape they resolve as
IDENTIFIER_TYPE_NODES: Set[str] = {
    "type_identifier",
}
QUALIFIED_TYPE_NODE: str = "qualified_type"
PACKAGE_IDENTIFIER_NODE: str = "package_identifier"
ARRAY_TYPE_NODES: Set[str] = {
    "slice_type",
    "array_type",
}
POINTER_TYPE_NODE: str = "pointer_type"

# Go file extension
GO_EXTENSIONS: Set[str] = {
    ".go",
}

# Separators used by targets, namespaces and the inclusion filter
TARGET_SEPARATOR: str = "="
NAMESPACE_SEPARATOR: str = "/"
FILTER_SEPARATOR: str = ","
