"""Schema module for AgentDesk.

schema.sql is the source of truth for the persisted data model.
"""

from pathlib import Path

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def load_schema() -> str:
    """Return the schema DDL as a string."""
    return SCHEMA_PATH.read_text()


__all__ = ["SCHEMA_PATH", "load_schema"]
