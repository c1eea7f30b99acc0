"""Helpers for reading API Gateway proxy events."""

import json
from typing import Any


def get_owner_id(event: dict[str, Any]) -> str | None:
    """Return the authenticated owner id placed in the authorizer context.

    Supports both the REST API (``authorizer.user_id``) and HTTP API JWT
    (``authorizer.jwt.claims.sub``) shapes.
    """
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}

    owner_id = authorizer.get("user_id")
    if owner_id is None:
        claims = (authorizer.get("jwt") or {}).get("claims") or {}
        owner_id = claims.get("sub")

    if owner_id is None:
        return None

    owner_id = str(owner_id).strip()
    return owner_id or None


def parse_json_body(event: dict[str, Any]) -> Any:
    """Decode the JSON body of an event; an empty body decodes to ``{}``.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON
    """
    return json.loads(event.get("body") or "{}")
