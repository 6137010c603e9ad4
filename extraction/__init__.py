"""
Extraction layer

Tree-sitter-based Go source parser and struct extractor.
Resolves field types and collects struct declarations in source order.
"""

from extraction.models import FieldRecord, InclusionFilter, StructRecord
from extraction.parser import create_parser, parse_file, parse_bytes, count_error_nodes
from extraction.type_resolver import TypeShape, classify_type_node, resolve_type_expression
from extraction.traversal import extract_field_line, extract_fields, extract_structs_from_tree
from extraction.extractor import (
    ExtractionStats,
    ImportMap,
    discover_go_files,
    extract_file,
    extract_import_map,
    find_files,
    split_target,
)

__all__ = [
    # Data models
    "FieldRecord",
    "InclusionFilter",
    "StructRecord",
    "ExtractionStats",
    "ImportMap",
    # Low-level parsing
    "create_parser",
    "parse_file",
    "parse_bytes",
    "count_error_nodes",
    # Type resolution
    "TypeShape",
    "classify_type_node",
    "resolve_type_expression",
    # Mid-level extraction
    "extract_field_line",
    "extract_fields",
    "extract_structs_from_tree",
    # High-level orchestration
    "discover_go_files",
    "extract_file",
    "extract_import_map",
    "find_files",
    "split_target",
]
