"""ServiceCategory entity — the kind of work a request asks for."""

from dataclasses import dataclass


@dataclass
class ServiceCategory:
    id: int
    label: str

    def matches(self, label: str) -> bool:
        """Case-insensitive exact match on the label."""
        return self.label.strip().casefold() == label.strip().casefold()
