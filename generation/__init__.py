"""
Generation layer

Renders Go row scan functions for extracted structs and writes the
generated file.
"""

from generation.namespaces import aggregate_namespaces
from generation.renderer import (
    render_scans,
    title_case,
    visibility_prefix,
)
from generation.writer import write_scans
from generation.pipeline import GenerationResult, generate_scans

__all__ = [
    "aggregate_namespaces",
    "render_scans",
    "title_case",
    "visibility_prefix",
    "write_scans",
    "GenerationResult",
    "generate_scans",
]
