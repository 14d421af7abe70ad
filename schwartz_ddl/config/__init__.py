"""Unified configuration module for Quartz table DDL generation.

Reads from environment variables which can be set directly or loaded from a
.env file; see .env.example for details.

Usage:
    from schwartz_ddl.config import get_dialect, get_table_prefix
    from schwartz_ddl.config import load_config  # Call once at startup to load .env
"""

from .config import (
    # Snapshot values
    DIALECT,
    TABLE_PREFIX,
    OUTPUT_FILE,
    INCLUDE_DROPS,
    # Getters
    get_dialect,
    get_table_prefix,
    get_output_file,
    get_include_drops,
    # Helpers
    load_config,
)

__all__ = [
    # Snapshot values
    "DIALECT",
    "TABLE_PREFIX",
    "OUTPUT_FILE",
    "INCLUDE_DROPS",
    # Getters
    "get_dialect",
    "get_table_prefix",
    "get_output_file",
    "get_include_drops",
    # Helpers
    "load_config",
]
