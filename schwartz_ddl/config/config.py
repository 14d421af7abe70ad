"""Configuration for Quartz table DDL generation.

Single source of truth for generator settings. Reads from environment
variables which can be set directly or loaded from a .env file; see
.env.example for details.

Configuration precedence:
1. Command line arguments (handled by schwartz_ddl.generate_ddl)
2. Environment variables
3. .env file in the working directory (or a parent of it)
4. Defaults defined here (lowest priority)

The getters read the environment on every call; the module-level constants
are snapshots taken at import time for convenience.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

# Lazy-loaded flag to avoid loading .env multiple times
_config_loaded = False


def load_config(env_file: Optional[Path] = None) -> None:
    """Load configuration from .env file.

    Safe to call multiple times (subsequent calls are no-ops). Existing
    environment variables are never overridden.

    Args:
        env_file: Path to .env file. Defaults to the nearest .env at or
            above the working directory
    """
    global _config_loaded
    if _config_loaded:
        return

    if env_file is None:
        found = find_dotenv(usecwd=True)
        env_file = Path(found) if found else None

    if env_file is not None and env_file.exists():
        load_dotenv(env_file, override=False)

    _config_loaded = True


# Auto-load config on import (safe - uses override=False)
load_config()


# =============================================================================
# Helper Functions
# =============================================================================

def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with fallback."""
    return os.environ.get(key, default)


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    val = os.environ.get(key)
    if val is None or val == "":
        return default
    return val.lower() in ("true", "1", "yes", "on")


# =============================================================================
# Generator Configuration
# =============================================================================

def get_dialect() -> str:
    """Dialect selector: a dialect name, alias, SQLAlchemy URL or Hibernate dialect class."""
    return _get_env("SCHWARTZ_DIALECT") or "postgresql"


def get_table_prefix() -> str:
    """Table name prefix (org.quartz.jobStore.tablePrefix in Quartz terms).

    An explicitly empty SCHWARTZ_TABLE_PREFIX means no prefix.
    """
    prefix = _get_env("SCHWARTZ_TABLE_PREFIX")
    return "QRTZ_" if prefix is None else prefix


def get_output_file() -> Path:
    """Default destination for the generated script."""
    return Path(_get_env("SCHWARTZ_DDL_OUTPUT") or "quartz_tables.sql")


def get_include_drops() -> bool:
    """Whether scripts start with DROP TABLE statements."""
    return _get_env_bool("SCHWARTZ_DDL_DROPS", False)


DIALECT = get_dialect()
TABLE_PREFIX = get_table_prefix()
OUTPUT_FILE = get_output_file()
INCLUDE_DROPS = get_include_drops()
