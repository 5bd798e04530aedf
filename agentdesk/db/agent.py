"""Agent operations (owner-scoped)."""

import json
from typing import Any

from .owned import OwnedOperations


class AgentOperations(OwnedOperations):
    """Agents belonging to a single owner."""

    table = "agents"
    resource_name = "Agent"
    writable_columns = frozenset({"name", "description", "instructions", "model", "status", "settings"})
    filter_columns = frozenset({"status", "model"})

    def _to_db(self, values: dict[str, Any]) -> dict[str, Any]:
        # settings is stored as a JSON document
        if values.get("settings") is not None:
            values = {**values, "settings": json.dumps(values["settings"])}
        return values
