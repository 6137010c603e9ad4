"""
Go source parsing on top of tree-sitter.

Syntax problems are not reported here; callers inspect the returned tree.
"""

import logging
from typing import Tuple

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tsgo.language())


def create_parser() -> Parser:
    return Parser(GO_LANGUAGE)


def parse_bytes(source: bytes) -> Tree:
    """Parse Go source bytes into a concrete syntax tree.

    tree-sitter always produces a tree; malformed input shows up as ERROR
    or MISSING nodes and ``root_node.has_error``.

    Raises:
        TypeError: If ``source`` is not ``bytes``.
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")
    return create_parser().parse(source)


def parse_file(file_path: str) -> Tuple[Tree, bytes]:
    """Read and parse one ``.go`` file.

    Returns:
        ``(tree, source_bytes)``. Node text slices index into ``source_bytes``.

    Raises:
        OSError: If the file cannot be read (``FileNotFoundError`` included).
    """
    with open(file_path, "rb") as f:
        source_bytes = f.read()

    tree = parse_bytes(source_bytes)
    logger.debug("Parsed %s (%d bytes)", file_path, len(source_bytes))
    return tree, source_bytes


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree."""
    count = 0
    stack: list[Node] = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        stack.extend(node.children)
    return count
