"""
High-level orchestrator for Go struct extraction.

This module resolves user targets into source files and extracts struct
records from single files or whole import maps.
"""

import logging
import os
from typing import Dict, Iterable, List, Optional
from tree_sitter import Tree

from core.errors import GoSyntaxError, TargetError
from extraction.config import (
    COMMENT_NODE,
    GO_EXTENSIONS,
    PACKAGE_CLAUSE_NODE,
    TARGET_SEPARATOR,
)
from extraction.models import InclusionFilter, StructRecord
from extraction.parser import count_error_nodes, parse_file
from extraction.traversal import extract_structs_from_tree

logger = logging.getLogger(__name__)

# import path -> sorted source file paths
ImportMap = Dict[str, List[str]]


class ExtractionStats:
    """Statistics for an extraction operation."""

    def __init__(self):
        self.files_processed = 0
        self.structs_extracted = 0
        self.fields_extracted = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "structs_extracted": self.structs_extracted,
            "fields_extracted": self.fields_extracted,
        }

    def __str__(self) -> str:
        return (
            f"ExtractionStats(processed={self.files_processed}, "
            f"structs={self.structs_extracted}, fields={self.fields_extracted})"
        )


def split_target(target: str) -> tuple[str, str]:
    """Split ``import_path=fs_path`` into its two components.

    Raises:
        TargetError: If the target does not contain exactly one ``=``.
    """
    components = target.split(TARGET_SEPARATOR)
    if len(components) != 2:
        raise TargetError(
            "broken target, expected <golang_import_path=golang_source_package_or_file>, "
            f"you provided: {target}"
        )
    return components[0], components[1]


def discover_go_files(directory: str) -> List[str]:
    """Recursively discover Go source files below a directory.

    Hidden files are skipped. Hidden directories are still entered.

    Args:
        directory: Root directory to search.

    Returns:
        Sorted list of file paths.
    """
    go_files = []

    for root, _, files in os.walk(directory):
        for file in files:
            if file.startswith('.'):
                continue
            if os.path.splitext(file)[1] in GO_EXTENSIONS:
                go_files.append(os.path.join(root, file))

    logger.debug("Found %d Go files in %s", len(go_files), directory)
    return sorted(go_files)


def find_files(targets: Iterable[str]) -> ImportMap:
    """Resolve ``import_path=fs_path`` targets into an import map.

    A file path is taken as is; a directory is walked for ``.go`` files.
    Paths are deduplicated and sorted per import path. Import paths keep the
    order in which they first appear.

    Raises:
        TargetError: If there are no targets, a target is malformed, or a
            path does not exist.
    """
    targets = list(targets)
    if not targets:
        raise TargetError("no starting paths")

    files: Dict[str, set] = {}
    for target in targets:
        target_import, target_path = split_target(target)
        if not os.path.exists(target_path):
            raise TargetError(f"no such file or directory: {target_path}")

        bucket = files.setdefault(target_import, set())
        if os.path.isdir(target_path):
            bucket.update(discover_go_files(target_path))
        else:
            bucket.add(target_path)

    import_map: ImportMap = {
        target_import: sorted(paths) for target_import, paths in files.items()
    }
    for target_import, paths in import_map.items():
        logger.info("Import path %r: %d files", target_import, len(paths))
    return import_map


def check_syntax(tree: Tree, file_path: str) -> None:
    """Reject trees with error nodes or without a leading package clause.

    Raises:
        GoSyntaxError: Naming ``file_path``.
    """
    error: Optional[GoSyntaxError] = None
    if tree.root_node.has_error:
        error = GoSyntaxError(file_path, count_error_nodes(tree))
    else:
        first = next(
            (n for n in tree.root_node.named_children if n.type != COMMENT_NODE),
            None,
        )
        if first is None or first.type != PACKAGE_CLAUSE_NODE:
            error = GoSyntaxError(file_path, 0, reason="expected 'package' clause")

    if error is not None:
        logger.error("%s", error)
        raise error


def extract_file(
    file_path: str,
    namespace: str = "",
    inclusion_filter: Optional[InclusionFilter] = None,
) -> List[StructRecord]:
    """Extract struct records from a single Go source file.

    Args:
        file_path: Path to the Go file.
        namespace: Import path the file belongs to.
        inclusion_filter: Allow-list of struct names; None accepts everything.

    Returns:
        StructRecords in declaration order.

    Raises:
        FileNotFoundError: If the file does not exist.
        GoSyntaxError: If the file does not parse cleanly.
    """
    tree, _ = parse_file(file_path)
    check_syntax(tree, file_path)

    structs = extract_structs_from_tree(
        tree,
        namespace=namespace,
        inclusion_filter=inclusion_filter,
        file_path=file_path,
    )
    logger.info("Extracted %d structs from %s", len(structs), file_path)
    return structs


def extract_import_map(
    import_map: ImportMap,
    whitelist: Optional[str] = None,
    stats: Optional[ExtractionStats] = None,
) -> List[StructRecord]:
    """Extract struct records from every file of an import map.

    Records are returned in discovery order: import paths in map order,
    files in the order listed, structs in declaration order. The first
    syntax error aborts the whole extraction.

    Args:
        import_map: Mapping produced by :func:`find_files`.
        whitelist: Comma-delimited struct names to keep; empty keeps all.
        stats: Optional stats object updated in place.
    """
    if stats is None:
        stats = ExtractionStats()

    all_structs: List[StructRecord] = []
    for namespace, paths in import_map.items():
        for file_path in paths:
            structs = extract_file(
                file_path,
                namespace=namespace,
                inclusion_filter=InclusionFilter.from_spec(whitelist),
            )
            all_structs.extend(structs)
            stats.files_processed += 1
            stats.structs_extracted += len(structs)
            stats.fields_extracted += sum(len(s.fields) for s in structs)

    logger.info("Extraction complete: %s", stats)
    return all_structs
