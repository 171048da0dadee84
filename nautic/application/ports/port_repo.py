"""Port interface for port-association lookups."""

from abc import ABC, abstractmethod
from collections.abc import Set


class PortRepository(ABC):
    @abstractmethod
    async def get_ports_for_client(self, client_id: int) -> frozenset[int]:
        """Ports the client is attached to. Empty when none."""
        ...

    @abstractmethod
    async def get_ports_for_boat(self, boat_id: int) -> frozenset[int]:
        """The boat's home port as a one-element set, or empty.

        Empty for an unknown boat or a boat without a home port.
        """
        ...

    @abstractmethod
    async def get_handlers_for_ports(self, port_ids: Set[int]) -> frozenset[int]:
        """Identities attached to any of the ports.

        The association table is shared with clients, so the result may
        contain non-handlers; see ``HandlerRepository.filter_to_handler_profile``.
        """
        ...
