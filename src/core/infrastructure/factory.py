"""Process-wide construction of the landing service graph.

The image store variant is chosen once from configuration:
- no ``UPLOADTHING_TOKEN``: uploads disabled, deletes are no-ops
- a valid token: UploadThing
- an undecodable token: logged once at cold start, uploads disabled
"""

from functools import lru_cache

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_landing import DynamoDBLanding
from core.infrastructure.uploadthing.credentials import load_credentials_from_env
from core.infrastructure.uploadthing.uploadthing_image_store import UploadThingImageStore
from core.models.errors import ConfigurationError
from core.repositories.image_store import DisabledImageStore, ImageStore
from core.services.landing_service import LandingService

logger = Logger(UTC=True)


def build_image_store() -> ImageStore:
    """Select the image store implementation from the environment.

    Raises:
        ConfigurationError: If the UploadThing token is set but invalid
    """
    credentials = load_credentials_from_env()
    if credentials is None:
        return DisabledImageStore()

    return UploadThingImageStore(credentials)


@lru_cache(maxsize=1)
def get_landing_service() -> LandingService:
    """Return the landing service shared by every invocation of this process.

    A bad token only disables uploads; reads and updates keep working.
    """
    try:
        image_store = build_image_store()
    except ConfigurationError as exc:
        logger.error(
            "UploadThing not configured, image uploads disabled",
            extra={"error_code": exc.error_code, "error": exc.message, "details": exc.details},
        )
        image_store = DisabledImageStore()

    logger.info(
        "Landing service initialized",
        extra={"image_store": type(image_store).__name__},
    )
    return LandingService(DynamoDBLanding(), image_store)
