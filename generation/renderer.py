"""
Go source rendering for row scan functions.

The generated file comes from ``templates/scans.go.j2`` and is made of
fixed sections, in order:

1. a "do not edit" header comment
2. the ``package`` clause
3. the import block: ``database/sql`` then every struct namespace
4. for each struct, ``<v>can<Name>`` over ``*sql.Row`` and
   ``<v>can<Name>s`` over ``*sql.Rows``

``<v>`` is ``S`` for exported functions and ``s`` for unexported ones.
Scan arguments follow field declaration order, which is the positional
contract with the query's column order.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from extraction.models import StructRecord
from generation.namespaces import aggregate_namespaces

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
SCANS_TEMPLATE = "scans.go.j2"
IMPORTS_TEMPLATE = "imports.go.j2"

SQL_IMPORT = "database/sql"
EXPORTED_PREFIX = "S"
UNEXPORTED_PREFIX = "s"


def title_case(name: str) -> str:
    """Upper-case the first letter of an identifier, leaving the rest as is."""
    return name[:1].upper() + name[1:]


def visibility_prefix(unexport: bool) -> str:
    return UNEXPORTED_PREFIX if unexport else EXPORTED_PREFIX


@lru_cache(maxsize=1)
def template_environment() -> Environment:
    """Jinja environment for the Go templates; Go text is never escaped."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(enabled_extensions=()),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["title_case"] = title_case
    return env


def render_imports(namespaces: Sequence[str]) -> str:
    """Render the import block for ``database/sql`` plus ``namespaces``."""
    template = template_environment().get_template(IMPORTS_TEMPLATE)
    return template.render(sql_import=SQL_IMPORT, namespaces=list(namespaces))


def render_scans(
    package_name: str,
    structs: Sequence[StructRecord],
    unexport: bool = False,
) -> str:
    """Render the complete generated Go file.

    Args:
        package_name: Package clause of the generated file.
        structs: Records in discovery order; rendered in that order.
        unexport: Generate ``scanX`` instead of ``ScanX``.

    Returns:
        Go source text ending with a newline.
    """
    template = template_environment().get_template(SCANS_TEMPLATE)
    text = template.render(
        package_name=package_name,
        sql_import=SQL_IMPORT,
        namespaces=aggregate_namespaces(structs),
        structs=list(structs),
        visibility=visibility_prefix(unexport),
    )
    logger.debug("Rendered %d scan function pairs", len(structs))
    return text
