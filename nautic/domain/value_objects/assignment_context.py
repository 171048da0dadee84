"""Assignment contexts — which port lookup the resolver should use."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClientContext:
    """Resolve against every port the client is attached to."""

    client_id: int


@dataclass(frozen=True)
class BoatContext:
    """Resolve against the boat's home port, with the owner's history."""

    boat_id: int
    client_id: int


AssignmentContext = ClientContext | BoatContext
