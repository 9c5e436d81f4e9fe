"""Abstract base class for public IP resolvers."""

from abc import ABC, abstractmethod


class IPResolver(ABC):
    """Abstract public IP resolver interface."""

    @abstractmethod
    def current_public_address(self) -> str:
        """Return the caller's current public address.

        Raises:
            IPResolutionError: The address could not be determined.
        """
        pass
