"""Conversation endpoints.

- GET  /conversations                - List the caller's conversations
- POST /conversations                - Start a conversation
- GET  /conversations/<id>           - Get one conversation
- GET  /conversations/<id>/messages  - List its messages, oldest first
"""

import logging

from flask import Blueprint, jsonify, request

from ..auth.gate import auth_required, current_identity
from ..extensions import get_core
from .schemas import ConversationCreate, ConversationResponse, MessageResponse
from .validation import parse_pagination, validate_request

logger = logging.getLogger(__name__)

conversations_bp = Blueprint("conversations", __name__, url_prefix="/conversations")


@conversations_bp.get("")
@auth_required
def list_conversations():
    """
    List the caller's conversations, newest first.

    Query Parameters:
        - status: open | closed | archived
        - agent_id: only conversations with this agent
        - limit, offset: pagination

    Returns:
        200: {"success": true, "data": [ConversationResponse, ...]}
    """
    limit, offset = parse_pagination()
    filters = {
        "status": request.args.get("status"),
        "agent_id": request.args.get("agent_id"),
    }

    rows = get_core().conversation.list(
        current_identity().user_id, filters, limit=limit, offset=offset
    )

    return jsonify({
        "success": True,
        "data": [ConversationResponse.from_row(row).model_dump() for row in rows],
    })


@conversations_bp.post("")
@auth_required
@validate_request
def create_conversation(data: ConversationCreate):
    """
    Start a conversation, optionally with one of the caller's agents.

    Returns:
        201: {"success": true, "data": ConversationResponse}
        404: agent_id is not one of the caller's agents
    """
    owner_id = current_identity().user_id
    row = get_core().conversation.create(owner_id, data.model_dump())
    logger.info(f"Conversation {row['id']} created by {owner_id}")

    return jsonify({
        "success": True,
        "message": "Conversation created successfully",
        "data": ConversationResponse.from_row(row).model_dump(),
    }), 201


@conversations_bp.get("/<conversation_id>")
@auth_required
def get_conversation(conversation_id: str):
    row = get_core().conversation.get(current_identity().user_id, conversation_id)
    return jsonify({"success": True, "data": ConversationResponse.from_row(row).model_dump()})


@conversations_bp.get("/<conversation_id>/messages")
@auth_required
def list_messages(conversation_id: str):
    """
    Returns:
        200: {"success": true, "data": [MessageResponse, ...]}
        404: Conversation not found
    """
    owner_id = current_identity().user_id
    core = get_core()
    core.conversation.get(owner_id, conversation_id)

    limit, offset = parse_pagination()
    rows = core.message.list_for_conversation(owner_id, conversation_id, limit=limit, offset=offset)

    return jsonify({
        "success": True,
        "data": [MessageResponse.from_row(row).model_dump() for row in rows],
    })
