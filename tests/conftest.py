"""
Pytest configuration and fixtures for landing service tests.
Provides AWS mocking, a DynamoDB landing table and in-memory collaborators.
"""

import os
import threading
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("LANDING_TABLE_NAME", "landing-pages-test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "LandingServiceTests")
os.environ.pop("AWS_ENDPOINT_URL", None)
os.environ.pop("UPLOADTHING_TOKEN", None)

from core.infrastructure.memory.in_memory_image_store import InMemoryImageStore  # noqa: E402
from core.infrastructure.memory.in_memory_landing_repository import (  # noqa: E402
    InMemoryLandingRepository,
)
from core.models.landing import LandingUpsert  # noqa: E402
from core.services.landing_service import LandingService  # noqa: E402


class RecordingCleaner:
    """Cleaner double that records scheduled keys instead of deleting them."""

    def __init__(self) -> None:
        self.scheduled: list[str] = []

    def schedule(self, key: str | None) -> threading.Thread | None:
        if key:
            self.scheduled.append(key)
        return None


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def landing_table(dynamodb_resource):
    """
    Create the landing table keyed by owner_id.

    moto discards the table when the mock context exits.
    """
    table_name = os.getenv("LANDING_TABLE_NAME")

    try:
        table = dynamodb_resource.Table(table_name)
        table.load()
    except ClientError:
        table = dynamodb_resource.create_table(
            TableName=table_name,
            BillingMode="PAY_PER_REQUEST",
            KeySchema=[{"AttributeName": "owner_id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "owner_id", "AttributeType": "S"}],
        )
        table.wait_until_exists()

    return table


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def landing_repository() -> InMemoryLandingRepository:
    return InMemoryLandingRepository()


@pytest.fixture
def image_store() -> InMemoryImageStore:
    return InMemoryImageStore()


@pytest.fixture
def recording_cleaner() -> RecordingCleaner:
    return RecordingCleaner()


@pytest.fixture
def landing_service(landing_repository, image_store, recording_cleaner) -> LandingService:
    return LandingService(landing_repository, image_store, cleaner=recording_cleaner)


@pytest.fixture
def seed_landing(landing_repository) -> Callable[..., Any]:
    """
    Helper to store a landing page directly, bypassing the service.

    Usage:
        seed_landing("owner_1", image_url="https://cdn/a.png", image_key="k1")
    """

    def _seed(owner_id: str, **fields: str | None) -> Any:
        return landing_repository.upsert_by_owner(
            owner_id=owner_id,
            data=LandingUpsert(**fields),
        )

    return _seed


@pytest.fixture
def sample_png_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    import base64

    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_webp_binary() -> bytes:
    return b"RIFF\x1a\x00\x00\x00WEBPVP8 fake-webp-data"
