"""Chat endpoint.

- POST /chat/send - Append a user message to one of the caller's conversations
"""

import logging

from flask import Blueprint, jsonify

from ..auth.gate import auth_required, current_identity
from ..extensions import get_services
from .schemas import ChatSend, MessageResponse
from .validation import validate_request

logger = logging.getLogger(__name__)

chat_bp = Blueprint("chat", __name__, url_prefix="/chat")


@chat_bp.post("/send")
@auth_required
@validate_request
def send_message(data: ChatSend):
    """
    Append a message to a conversation.

    Example request:
    ```json
    {"conversationId": "6f1c...", "message": "Hello"}
    ```

    Returns:
        200: {"success": true, "data": MessageResponse}
        404: Conversation not found (or not owned by the caller)
    """
    owner_id = current_identity().user_id

    with get_services().database.get_core(atomic=True) as core:
        row = core.message.append(owner_id, data.conversation_id, data.message, sender="user")
        core.conversation.touch(owner_id, data.conversation_id)

    return jsonify({"success": True, "data": MessageResponse.from_row(row).model_dump()})
