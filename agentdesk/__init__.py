"""AgentDesk: multi-tenant API for agents, conversations and chat."""

__version__ = "2.0.0"
