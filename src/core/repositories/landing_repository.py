"""Abstract contract for landing page persistence."""

from abc import ABC, abstractmethod

from core.models.landing import LandingPage, LandingUpsert


class LandingRepository(ABC):
    """Contract for storing and retrieving one landing page per owner.

    Implementations could be DynamoDB, PostgreSQL, in-memory, etc.
    The service depends on this interface, not the implementation.
    """

    @abstractmethod
    def get_by_owner(self, *, owner_id: str) -> LandingPage | None:
        """Fetch the landing page of an owner.

        Args:
            owner_id: Owning account identifier

        Returns:
            The stored landing page or None if the owner has none yet

        Raises:
            DynamoDBError: If the fetch fails
        """

    @abstractmethod
    def upsert_by_owner(self, *, owner_id: str, data: LandingUpsert) -> LandingPage:
        """Atomically create or replace the landing page of an owner.

        Every field of ``data`` is written; ``None`` clears the stored value.
        The landing id and creation timestamp are assigned on first write
        and preserved afterwards.

        Args:
            owner_id: Owning account identifier
            data: Fully resolved landing content

        Returns:
            The landing page as stored after the write

        Raises:
            DynamoDBError: If the write fails
        """
