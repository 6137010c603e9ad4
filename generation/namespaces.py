"""Import list aggregation for the generated file."""

from typing import Iterable, Tuple

from extraction.models import StructRecord


def aggregate_namespaces(structs: Iterable[StructRecord]) -> Tuple[str, ...]:
    """Return the distinct non-empty namespaces of ``structs``, sorted.

    Structs discovered without a namespace live in the generated package
    itself and need no import.
    """
    return tuple(sorted({s.namespace for s in structs if s.namespace}))
