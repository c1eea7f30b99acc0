import base64
import json
from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import pytest

HANDLER_MODULES = (
    "handlers.get_landing.handler",
    "handlers.upsert_landing.handler",
    "handlers.upload_landing_image.handler",
)


@pytest.fixture
def use_landing_service():
    """
    Route every handler to the given service instead of the process-wide one.

    Usage:
        use_landing_service(landing_service)
    """
    patchers: list[Any] = []

    def _use(service: Any) -> Any:
        for module in HANDLER_MODULES:
            patcher = patch(f"{module}.get_landing_service", return_value=service)
            patcher.start()
            patchers.append(patcher)
        return service

    yield _use

    for patcher in patchers:
        patcher.stop()


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    """Build an API Gateway proxy event for an authenticated owner."""

    def _make(
        *,
        method: str = "GET",
        path: str = "/landing",
        body: Any = None,
        owner_id: str | None = "owner_1",
        raw_body: str | None = None,
    ) -> dict[str, Any]:
        event: dict[str, Any] = {
            "httpMethod": method,
            "path": path,
            "headers": {"Content-Type": "application/json"},
            "requestContext": {"authorizer": {"user_id": owner_id} if owner_id else {}},
        }
        if raw_body is not None:
            event["body"] = raw_body
        elif body is not None:
            event["body"] = json.dumps(body)
        return event

    return _make


@pytest.fixture
def upload_body(sample_png_binary) -> dict[str, Any]:
    return {
        "file": base64.b64encode(sample_png_binary).decode("utf-8"),
        "file_name": "hero.png",
        "content_type": "image/png",
    }
