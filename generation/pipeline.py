"""End-to-end scan generation: import map in, Go file out."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.structured_logging import phase_scope
from extraction.extractor import ExtractionStats, ImportMap, extract_import_map
from extraction.models import StructRecord
from generation.namespaces import aggregate_namespaces
from generation.writer import write_scans

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Summary of one generation run."""

    output_path: str
    structs: tuple[StructRecord, ...]
    namespaces: tuple[str, ...]
    stats: ExtractionStats


def generate_scans(
    output_path: str,
    package_name: str,
    unexport: bool,
    whitelist: Optional[str],
    import_map: ImportMap,
) -> GenerationResult:
    """Extract structs from ``import_map`` and write their scan functions.

    Args:
        output_path: Path of the generated Go file.
        package_name: Package clause of the generated file.
        unexport: Generate unexported function names.
        whitelist: Comma-delimited struct names to keep; empty keeps all.
        import_map: Import path to sorted file paths, see ``find_files``.

    Raises:
        GoSyntaxError: If any source file fails to parse.
        NothingToGenerateError: If no struct survives extraction.
    """
    stats = ExtractionStats()
    with phase_scope("extract"):
        structs = extract_import_map(import_map, whitelist=whitelist, stats=stats)

    with phase_scope("generate"):
        written = write_scans(output_path, package_name, unexport, structs)

    return GenerationResult(
        output_path=written,
        structs=tuple(structs),
        namespaces=aggregate_namespaces(structs),
        stats=stats,
    )
