"""Abstract base class for DNS providers."""

from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class DNSRecord(BaseModel):
    """A record as the provider reports it."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    type: str
    name: str
    content: str
    proxied: bool = False
    ttl: int = 1
    modified_on: datetime


class DNSProvider(ABC):
    """Abstract DNS provider interface."""

    @abstractmethod
    def resolve_zone(self, name: str) -> str:
        """Resolve a zone name to the provider's zone ID.

        Args:
            name: The zone name (e.g., "example.com")

        Returns:
            The opaque zone identifier.

        Raises:
            ZoneNotFoundError: No zone with that name is visible.
        """
        pass

    @abstractmethod
    def list_records(self, zone_id: str, record_type: str, name: str) -> list[DNSRecord]:
        """List records matching an exact type and fully-qualified name.

        Args:
            zone_id: The zone identifier from resolve_zone()
            record_type: The record type (e.g., "A")
            name: The fully-qualified record name (e.g., "home.example.com")

        Raises:
            RecordListError: The listing failed.
        """
        pass

    @abstractmethod
    def create_record(
        self,
        zone_id: str,
        *,
        record_type: str,
        name: str,
        content: str,
        proxied: bool,
    ) -> DNSRecord:
        """Create a record and return it.

        Raises:
            CreateError: The provider rejected the record.
        """
        pass

    @abstractmethod
    def update_record(
        self,
        zone_id: str,
        record_id: str,
        *,
        record_type: str,
        name: str,
        content: str,
        proxied: bool,
    ) -> None:
        """Replace the contents of an existing record.

        Raises:
            UpdateError: The provider rejected the update.
        """
        pass

    @abstractmethod
    def delete_record(self, zone_id: str, record_id: str) -> None:
        """Delete a record.

        Raises:
            DeleteError: The provider rejected the deletion.
        """
        pass
