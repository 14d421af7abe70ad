"""Declarative table descriptors for DDL generation.

These plain dataclasses describe the tables a scheduler needs without any
database or dialect knowledge. They are consumed by schema_builder.build(),
which validates them and turns them into a SchemaGraph.

Features:
- Closed ColumnType enumeration
- ColumnSpec / IndexSpec / TableSpec dataclasses
- Small factory helpers (string_column, decimal_column, ...) to keep
  static table lists readable
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# =============================================================================
# Column types
# =============================================================================


class ColumnType(str, Enum):
    """Closed set of column types a table spec may declare."""

    BIGINT = "BIGINT"
    BLOB = "BLOB"
    BOOLEAN = "BOOLEAN"
    INTEGER = "INTEGER"
    SMALLINT = "SMALLINT"
    DECIMAL = "DECIMAL"
    STRING = "STRING"

    @property
    def needs_length(self) -> bool:
        return self is ColumnType.STRING

    @property
    def needs_precision(self) -> bool:
        return self is ColumnType.DECIMAL


# =============================================================================
# Dataclasses for declarative specs
# =============================================================================


@dataclass(frozen=True)
class ColumnSpec:
    """A column as declared in a table spec.

    length applies to STRING columns; precision and scale apply to DECIMAL.
    Attribute checks happen at build time so the error can name the table.
    """

    name: str
    type: ColumnType = ColumnType.STRING
    nullable: bool = True
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None

    def attribute_errors(self) -> list[str]:
        """Return the attribute problems of this column (empty when valid)."""
        errors: list[str] = []
        if self.type.needs_length:
            if self.length is None or self.length <= 0:
                errors.append(f"STRING column requires length > 0 (got {self.length})")
        if self.type.needs_precision:
            if self.precision is None or self.precision <= 0:
                errors.append(f"DECIMAL column requires precision > 0 (got {self.precision})")
            elif self.scale is None or not 0 <= self.scale <= self.precision:
                errors.append(
                    f"DECIMAL column requires 0 <= scale <= precision "
                    f"(got scale={self.scale}, precision={self.precision})"
                )
        return errors


@dataclass(frozen=True)
class IndexSpec:
    """A named index over columns of the owning table."""

    name: str
    column_names: tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any sequence but store a tuple so specs stay hashable
        object.__setattr__(self, "column_names", tuple(self.column_names))


@dataclass(frozen=True)
class TableSpec:
    """A table as declared, before prefixing and validation.

    pk columns are always built as string keys of their declared length.
    fk is the logical (unprefixed) name of a table declared earlier; the
    foreign key mirrors that table's primary key columns.
    """

    name: str
    pk: tuple[ColumnSpec, ...]
    columns: tuple[ColumnSpec, ...] = ()
    fk: Optional[str] = None
    indexes: tuple[IndexSpec, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "pk", tuple(self.pk))
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "indexes", tuple(self.indexes))

    @property
    def column_names(self) -> list[str]:
        """All column names, primary key first."""
        return [col.name for col in self.pk] + [col.name for col in self.columns]


# =============================================================================
# Factory helpers
# =============================================================================


def key_column(name: str, length: int) -> ColumnSpec:
    """Primary key column (string identifier)."""
    return ColumnSpec(name, ColumnType.STRING, nullable=False, length=length)


def string_column(name: str, length: int, nullable: bool = True) -> ColumnSpec:
    return ColumnSpec(name, ColumnType.STRING, nullable=nullable, length=length)


def decimal_column(name: str, precision: int, scale: int, nullable: bool = True) -> ColumnSpec:
    return ColumnSpec(
        name, ColumnType.DECIMAL, nullable=nullable, precision=precision, scale=scale
    )


def simple_column(name: str, column_type: ColumnType, nullable: bool = True) -> ColumnSpec:
    """Column whose type carries no extra attributes (numbers, booleans, blobs)."""
    if column_type.needs_length or column_type.needs_precision:
        raise ValueError(f"{column_type.value} column {name!r} needs type attributes")
    return ColumnSpec(name, column_type, nullable=nullable)
