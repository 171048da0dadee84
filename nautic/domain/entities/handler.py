"""Handler entity — a boat manager who can be assigned to requests."""

from dataclasses import dataclass, field

from nautic.domain.value_objects.enums import Profile


@dataclass
class Handler:
    id: int
    first_name: str
    last_name: str
    profile: Profile = Profile.BOAT_MANAGER
    port_ids: set[int] = field(default_factory=set)
    skill_ids: set[int] = field(default_factory=set)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def is_handler(self) -> bool:
        return self.profile == Profile.BOAT_MANAGER
