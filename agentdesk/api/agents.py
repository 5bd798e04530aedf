"""Agent CRUD endpoints.

- GET    /agents          - List the caller's agents, newest first
- POST   /agents          - Create an agent owned by the caller
- GET    /agents/<id>     - Get one of the caller's agents
- PUT    /agents/<id>     - Update one of the caller's agents
- DELETE /agents/<id>     - Delete one of the caller's agents

Every handler sits behind @auth_required and passes the caller's id to the
owner-scoped operations in db/owned.py. An agent owned by someone else
behaves exactly like one that does not exist.
"""

import logging

from flask import Blueprint, jsonify, request

from ..auth.gate import auth_required, current_identity
from ..extensions import get_core
from .schemas import AgentCreate, AgentResponse, AgentUpdate
from .validation import parse_pagination, validate_request

logger = logging.getLogger(__name__)

agents_bp = Blueprint("agents", __name__, url_prefix="/agents")


@agents_bp.get("")
@auth_required
def list_agents():
    """
    List the caller's agents.

    Query Parameters:
        - status: active | inactive
        - model: str
        - limit, offset: pagination

    Returns:
        200: {"success": true, "data": [AgentResponse, ...]}
    """
    limit, offset = parse_pagination()
    filters = {
        "status": request.args.get("status"),
        "model": request.args.get("model"),
    }

    rows = get_core().agent.list(current_identity().user_id, filters, limit=limit, offset=offset)

    return jsonify({
        "success": True,
        "data": [AgentResponse.from_row(row).model_dump() for row in rows],
    })


@agents_bp.post("")
@auth_required
@validate_request
def create_agent(data: AgentCreate):
    """
    Create an agent. The owner is always the caller.

    Returns:
        201: {"success": true, "message", "data": AgentResponse}
        400: Validation error
    """
    owner_id = current_identity().user_id
    row = get_core().agent.create(owner_id, data.model_dump())
    logger.info(f"Agent {row['id']} created by {owner_id}")

    return jsonify({
        "success": True,
        "message": "Agent created successfully",
        "data": AgentResponse.from_row(row).model_dump(),
    }), 201


@agents_bp.get("/<agent_id>")
@auth_required
def get_agent(agent_id: str):
    """
    Returns:
        200: {"success": true, "data": AgentResponse}
        404: Agent not found
    """
    row = get_core().agent.get(current_identity().user_id, agent_id)
    return jsonify({"success": True, "data": AgentResponse.from_row(row).model_dump()})


@agents_bp.put("/<agent_id>")
@auth_required
@validate_request
def update_agent(agent_id: str, data: AgentUpdate):
    """
    Update an agent (partial update).

    Returns:
        200: {"success": true, "message", "data": AgentResponse}
        400: Validation error
        404: Agent not found
    """
    row = get_core().agent.update(
        current_identity().user_id,
        agent_id,
        data.model_dump(exclude_unset=True),
    )

    return jsonify({
        "success": True,
        "message": "Agent updated successfully",
        "data": AgentResponse.from_row(row).model_dump(),
    })


@agents_bp.delete("/<agent_id>")
@auth_required
def delete_agent(agent_id: str):
    """
    Delete an agent. Idempotent: deleting a missing agent also succeeds.

    Returns:
        200: {"success": true, "message"}
    """
    owner_id = current_identity().user_id
    if get_core().agent.delete(owner_id, agent_id):
        logger.info(f"Agent {agent_id} deleted by {owner_id}")

    return jsonify({"success": True, "message": "Agent deleted successfully"})
