"""HTTP API for AgentDesk resources.

Resource blueprints (all behind @auth_required):
- agents: /agents
- conversations: /conversations
- chat: /chat
"""

from flask import Flask

from .agents import agents_bp
from .chat import chat_bp
from .conversations import conversations_bp

RESOURCE_BLUEPRINTS = (agents_bp, conversations_bp, chat_bp)


def register_blueprints(app: Flask) -> None:
    for blueprint in RESOURCE_BLUEPRINTS:
        app.register_blueprint(blueprint)


__all__ = ["register_blueprints", "agents_bp", "conversations_bp", "chat_bp"]
