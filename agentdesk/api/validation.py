"""Request body validation decorator.

@validate_request inspects the view's signature:
- parameters that Flask passes as URL path variables are forwarded unchanged
- the remaining parameter must be annotated with a Pydantic model and is
  built from the JSON request body

    @agents_bp.put("/<agent_id>")
    @auth_required
    @validate_request
    def update_agent(agent_id: str, data: AgentUpdate):
        ...

Validation failures raise ValidationError with details:
    {"model": ..., "received": {...}, "errors": [{"field", "message", "expected_type"}]}
Password values are redacted from ``received``.
"""

import inspect
from functools import wraps
from typing import Any

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

REDACTED = "***"


def _redact(data: dict[str, Any]) -> dict[str, Any]:
    return {
        k: (REDACTED if "password" in k.lower() else v)
        for k, v in data.items()
    }


def _format_errors(exc: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in exc.errors()
    ]


def validate_request(f):
    """Validate the JSON body against the view's Pydantic model parameter.

    Raises:
        TypeError: At decoration time if the view has no parameters or a
            parameter lacks a type annotation; at request time if the body
            parameter is not annotated with a BaseModel subclass
        ValidationError: At request time if the body does not validate
    """
    signature = inspect.signature(f)
    params = list(signature.parameters.values())

    if not params:
        raise TypeError(f"{f.__name__} has no parameters to validate")

    for param in params:
        if param.annotation is inspect.Parameter.empty:
            raise TypeError(
                f"Parameter '{param.name}' of {f.__name__} lacks a type annotation"
            )

    @wraps(f)
    def wrapper(*args, **kwargs):
        view_args = request.view_args or {}

        for param in params:
            if param.name in kwargs or param.name in view_args:
                continue

            model = param.annotation
            if not (inspect.isclass(model) and issubclass(model, BaseModel)):
                raise TypeError(
                    f"Parameter '{param.name}' of {f.__name__} must be annotated "
                    f"with a Pydantic BaseModel subclass"
                )

            body = request.get_json(silent=True)
            if body is None:
                body = {}
            if not isinstance(body, dict):
                raise ValidationError(
                    "Request body must be a JSON object",
                    {"model": model.__name__}
                )

            try:
                kwargs[param.name] = model.model_validate(body)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid request data",
                    {
                        "model": model.__name__,
                        "received": _redact(body),
                        "errors": _format_errors(e),
                    }
                ) from e

        return f(*args, **kwargs)

    return wrapper


def parse_pagination(default_limit: int = 100, max_limit: int = 500) -> tuple[int, int]:
    """Read ``limit`` and ``offset`` from the query string.

    Raises:
        ValidationError: If either is not a non-negative integer
    """
    try:
        limit = int(request.args.get("limit", default_limit))
        offset = int(request.args.get("offset", 0))
    except ValueError as e:
        raise ValidationError(
            "limit and offset must be integers",
            {"limit": request.args.get("limit"), "offset": request.args.get("offset")}
        ) from e

    if limit < 1 or offset < 0:
        raise ValidationError(
            "limit must be positive and offset must not be negative",
            {"limit": limit, "offset": offset}
        )

    return min(limit, max_limit), offset
