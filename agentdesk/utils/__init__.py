"""Utility functions for AgentDesk.

This package provides centralized utilities for common operations.
Import convention: use module-level imports for clarity.

    from agentdesk.utils import isodatetime, uid
    timestamp = isodatetime.now()
    uuid = uid.generate_uuid()
"""

from . import isodatetime, uid

__all__ = ["isodatetime", "uid"]
