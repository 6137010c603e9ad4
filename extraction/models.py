"""
Data models for extracted Go structs.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

from extraction.config import FILTER_SEPARATOR, NAMESPACE_SEPARATOR


@dataclass(frozen=True)
class FieldRecord:
    """One struct field in declaration order.

    Attributes:
        name: Field name as declared.
        type: Canonical rendering of the field's type expression.
    """

    name: str
    type: str


@dataclass(frozen=True)
class StructRecord:
    """A struct declaration that survived filtering.
    
    Attributes:
        namespace: Import path the struct was discovered under ("" for the
            package being generated into).
        namespace_alias: Last path segment of ``namespace``, used as the
            selector in generated code.
        name: Struct name as declared.
        fields: Fields in declaration order. May be empty.
    """

    namespace: str
    namespace_alias: str
    name: str
    fields: Tuple[FieldRecord, ...] = ()

    @classmethod
    def create(
        cls,
        namespace: str,
        name: str,
        fields: Tuple[FieldRecord, ...] = (),
    ) -> "StructRecord":
        """Build a record, deriving the alias from ``namespace``."""
        return cls(
            namespace=namespace,
            namespace_alias=namespace_alias(namespace),
            name=name,
            fields=tuple(fields),
        )

    @property
    def qualified_name(self) -> str:
        """Type reference as seen from the generated file (``alias.Name``)."""
        if self.namespace_alias:
            return f"{self.namespace_alias}.{self.name}"
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a dictionary suitable for JSON serialization."""
        return asdict(self)


@dataclass(frozen=True)
class InclusionFilter:
    """Allow-list of struct names.

    An inactive filter accepts everything. Matching is exact and
    case-sensitive.
    """

    active: bool = False
    names: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_spec(cls, spec: Optional[str]) -> "InclusionFilter":
        """Build a filter from a comma-delimited list such as ``"Post,User"``."""
        if not spec:
            return cls()
        return cls(active=True, names=frozenset(spec.split(FILTER_SEPARATOR)))

    def accepts(self, struct_name: str) -> bool:
        return not self.active or struct_name in self.names


def namespace_alias(namespace: str) -> str:
    """Return the final ``/`` segment of an import path."""
    return namespace.split(NAMESPACE_SEPARATOR)[-1]
