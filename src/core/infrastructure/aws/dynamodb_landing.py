"""DynamoDB-backed implementation of LandingRepository."""

import uuid
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import DynamoDBError
from core.models.landing import LandingPage, LandingUpsert
from core.repositories.landing_repository import LandingRepository
from core.utils.constants import (
    ERROR_CODE_LANDING_FETCH_FAILED,
    ERROR_CODE_LANDING_UPSERT_FAILED,
    LANDING_TEXT_FIELDS,
)
from core.utils.time import utc_now_iso

Item = dict[str, Any]

logger = Logger(UTC=True)


def build_upsert_expression(
    data: LandingUpsert,
    *,
    now: str,
    landing_id: str,
) -> tuple[str, dict[str, str], dict[str, Any]]:
    """Build an UpdateItem expression replacing every landing field.

    Present values are SET, ``None`` values are REMOVEd. The landing id and
    creation timestamp are only written when the item does not exist yet.
    """
    names: dict[str, str] = {
        "#landing_id": "landing_id",
        "#created_at": "created_at",
        "#updated_at": "updated_at",
    }
    values: dict[str, Any] = {":now": now, ":landing_id": landing_id}
    set_clauses = [
        "#landing_id = if_not_exists(#landing_id, :landing_id)",
        "#created_at = if_not_exists(#created_at, :now)",
        "#updated_at = :now",
    ]
    remove_clauses: list[str] = []

    for field in LANDING_TEXT_FIELDS:
        value = getattr(data, field)
        names[f"#{field}"] = field
        if value is None:
            remove_clauses.append(f"#{field}")
        else:
            values[f":{field}"] = value
            set_clauses.append(f"#{field} = :{field}")

    expression = "SET " + ", ".join(set_clauses)
    if remove_clauses:
        expression += " REMOVE " + ", ".join(remove_clauses)

    return expression, names, values


def item_to_landing(item: Item) -> LandingPage:
    """Convert a stored DynamoDB item into a LandingPage."""
    fields = {name: item.get(name) for name in LANDING_TEXT_FIELDS}
    return LandingPage(
        id=item.get("landing_id"),
        owner_id=item["owner_id"],
        created_at=item.get("created_at"),
        updated_at=item.get("updated_at"),
        **fields,
    )


class DynamoDBLanding(LandingRepository):
    """DynamoDB-backed landing storage keyed by ``owner_id``.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        """Initialize with DynamoDB adapter."""
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()

    def get_by_owner(self, *, owner_id: str) -> LandingPage | None:
        """Fetch the landing page of an owner.

        Raises:
            DynamoDBError: If fetch fails
        """
        logger.debug("Fetching landing", extra={"owner_id": owner_id})

        try:
            response = self._db.get_item(key={"owner_id": owner_id})
            item = response.get("Item")

            if item is None:
                return None

            return item_to_landing(item)

        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"owner_id": owner_id})
            raise DynamoDBError(
                message="Unable to retrieve landing page",
                error_code=ERROR_CODE_LANDING_FETCH_FAILED,
                details={"owner_id": owner_id},
            ) from exc

        except (KeyError, PydanticValidationError) as exc:
            logger.exception("Stored landing item is malformed")
            raise DynamoDBError(
                message="Invalid landing page format",
                error_code=ERROR_CODE_LANDING_FETCH_FAILED,
                details={"owner_id": owner_id},
            ) from exc

    def upsert_by_owner(self, *, owner_id: str, data: LandingUpsert) -> LandingPage:
        """Create or replace the landing page of an owner in one UpdateItem.

        Raises:
            DynamoDBError: If the write fails
        """
        expression, names, values = build_upsert_expression(
            data,
            now=utc_now_iso(),
            landing_id=f"lnd_{uuid.uuid4().hex}",
        )

        logger.debug("Upserting landing", extra={"owner_id": owner_id})

        try:
            response = self._db.update_item(
                key={"owner_id": owner_id},
                update_expression=expression,
                expression_attribute_names=names,
                expression_attribute_values=values,
            )
            landing = item_to_landing(response["Attributes"])

        except ClientError as exc:
            logger.error("DynamoDB update_item failed", extra={"owner_id": owner_id})
            raise DynamoDBError(
                message="Unable to save landing page at this time",
                error_code=ERROR_CODE_LANDING_UPSERT_FAILED,
                details={"owner_id": owner_id},
            ) from exc

        except (KeyError, PydanticValidationError) as exc:
            logger.exception("DynamoDB returned a malformed landing item")
            raise DynamoDBError(
                message="Unable to save landing page at this time",
                error_code=ERROR_CODE_LANDING_UPSERT_FAILED,
                details={"owner_id": owner_id},
            ) from exc

        logger.info("Landing upserted", extra={"owner_id": owner_id, "landing_id": landing.id})
        return landing
