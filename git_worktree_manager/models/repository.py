"""Repository model"""
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class RepositoryInfo:
    """A repository opened by the user."""
    path: str
    name: str
    is_bare: bool

    def to_dict(self) -> dict:
        return asdict(self)
