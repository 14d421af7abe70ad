"""Supported SQL dialects and dialect selector resolution.

All dialect names and aliases are defined here to ensure consistency across
the emitter, the parser and the command line.
"""

from __future__ import annotations

import importlib
import re
from typing import Optional

from sqlalchemy.engine import Dialect


class DialectUnsupportedError(ValueError):
    """The requested dialect has no type-name mapping."""

    def __init__(self, dialect: str):
        super().__init__(
            f"Unsupported dialect: {dialect!r} "
            f"(supported: {', '.join(SUPPORTED_DIALECTS)})"
        )
        self.dialect = dialect


# ============================================================================
# Supported dialects
# ============================================================================
# Canonical names are SQLAlchemy dialect module names, see:
# https://docs.sqlalchemy.org/en/20/dialects/
SUPPORTED_DIALECTS = [
    "postgresql",
    "mysql",
    "mssql",
    "oracle",
    "sqlite",
]

DEFAULT_DIALECT = "postgresql"

# ============================================================================
# Aliases
# ============================================================================
# User-friendly names mapped to canonical dialects.
DIALECT_ALIASES = {
    "postgres": "postgresql",
    "pg": "postgresql",
    "pgsql": "postgresql",
    "mariadb": "mysql",
    "sqlserver": "mssql",
    "tsql": "mssql",
    "azuresql": "mssql",
    "sqlite3": "sqlite",
}

# Hibernate dialect class names (org.hibernate.dialect.PostgreSQL95Dialect,
# ...) are matched on their simple name; first match wins.
HIBERNATE_DIALECT_PATTERNS = [
    (re.compile(r"^postgres(ql|plus)"), "postgresql"),
    (re.compile(r"^(mysql|mariadb)"), "mysql"),
    (re.compile(r"^sqlserver"), "mssql"),
    (re.compile(r"^oracle"), "oracle"),
    (re.compile(r"^sqlite"), "sqlite"),
]

# ============================================================================
# sqlglot dialect names
# ============================================================================
# Used when parsing emitted scripts back for verification.
SQLGLOT_DIALECTS = {
    "postgresql": "postgres",
    "mysql": "mysql",
    "mssql": "tsql",
    "oracle": "oracle",
    "sqlite": "sqlite",
}

# Dialect settings normally detected from the server version on connect.
# SQL Server 2005+ uses VARBINARY(max) / VARCHAR(max) instead of IMAGE / TEXT.
DIALECT_OPTIONS = {
    "mssql": {"deprecate_large_types": True},
}


def _hibernate_dialect(selector: str) -> Optional[str]:
    simple_name = selector.rsplit(".", 1)[-1]
    if not simple_name.endswith("dialect"):
        return None
    for pattern, dialect in HIBERNATE_DIALECT_PATTERNS:
        if pattern.match(simple_name):
            return dialect
    return None


def resolve_dialect(selector: Optional[str]) -> str:
    """Resolve a dialect selector to a canonical dialect name.

    Accepts canonical names, aliases, SQLAlchemy URLs
    (postgresql+psycopg://host/db) and Hibernate dialect class names.

    Raises:
        DialectUnsupportedError: If the selector does not name a supported dialect
    """
    if not selector or not selector.strip():
        raise DialectUnsupportedError(selector or "")

    value = selector.strip().lower()

    # SQLAlchemy URL or driver-qualified name: "postgresql+psycopg://..."
    if "://" in value or "+" in value:
        value = re.split(r"[+:]", value, maxsplit=1)[0]

    if value in SUPPORTED_DIALECTS:
        return value
    if value in DIALECT_ALIASES:
        return DIALECT_ALIASES[value]

    hibernate = _hibernate_dialect(value)
    if hibernate:
        return hibernate

    raise DialectUnsupportedError(selector)


def get_sqlalchemy_dialect(name: str) -> Dialect:
    """Instantiate the SQLAlchemy dialect used to compile DDL.

    Only the dialect object is created; no DBAPI driver is imported and no
    connection is made.
    """
    dialect_name = resolve_dialect(name)
    module = importlib.import_module(f"sqlalchemy.dialects.{dialect_name}")
    return module.dialect(**DIALECT_OPTIONS.get(dialect_name, {}))


def sqlglot_dialect(name: str) -> str:
    """Return sqlglot's name for a dialect."""
    return SQLGLOT_DIALECTS[resolve_dialect(name)]
