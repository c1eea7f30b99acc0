"""Detached deletion of landing images that are no longer referenced."""

import threading
from collections.abc import Callable

from aws_lambda_powertools import Logger

from core.repositories.image_store import ImageStore

logger = Logger(UTC=True)

ErrorSink = Callable[[str, Exception], None]


def log_delete_failure(key: str, exc: Exception) -> None:
    """Default error sink: record the failure for operators."""
    logger.warning(
        "Failed to delete orphaned landing image",
        extra={
            "image_key": key,
            "error": str(exc),
            "error_type": type(exc).__name__,
        },
    )


class OrphanImageCleaner:
    """Deletes orphaned image keys on daemon threads.

    Each deletion runs outside the caller's request: the caller never waits
    for it and never sees its outcome. Failures go to ``error_sink``. There
    is no retry and no durable queue; a crash before the thread finishes
    leaves the remote object behind.
    """

    def __init__(self, image_store: ImageStore, *, error_sink: ErrorSink = log_delete_failure) -> None:
        self._image_store = image_store
        self._error_sink = error_sink

    def schedule(self, key: str | None) -> threading.Thread | None:
        """Start deleting ``key`` in the background.

        Returns the started thread, or None when there is nothing to delete.
        """
        key = (key or "").strip()
        if not key:
            return None

        thread = threading.Thread(
            target=self._delete,
            args=(key,),
            name=f"orphan-image-{key[:16]}",
            daemon=True,
        )
        thread.start()
        logger.debug("Scheduled orphaned image deletion", extra={"image_key": key})
        return thread

    def _delete(self, key: str) -> None:
        try:
            self._image_store.delete(key=key)
        except Exception as exc:
            self._error_sink(key, exc)
            return

        logger.info("Deleted orphaned landing image", extra={"image_key": key})
