"""Artifact writing for generated scan functions."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Sequence

from core.errors import NothingToGenerateError
from extraction.models import StructRecord
from generation.renderer import render_scans

logger = logging.getLogger(__name__)


def write_scans(
    output_path: str,
    package_name: str,
    unexport: bool,
    structs: Sequence[StructRecord],
) -> str:
    """Render ``structs`` and write them to ``output_path``.

    The file is written to a temporary sibling and moved into place, so an
    existing artifact is either fully replaced or left untouched.

    Returns:
        The absolute path of the written file.

    Raises:
        NothingToGenerateError: If ``structs`` is empty. Nothing is written.
    """
    if not structs:
        raise NothingToGenerateError("no structs found")

    text = render_scans(package_name, structs, unexport=unexport)

    output_path = os.path.abspath(output_path)
    out_dir = os.path.dirname(output_path)
    os.makedirs(out_dir, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=".scaneo-", suffix=".tmp", dir=out_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp_path, output_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

    logger.info("Wrote %d structs to %s", len(structs), output_path)
    return output_path
