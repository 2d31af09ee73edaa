"""Branch model"""
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class BranchInfo:
    """A local or remote-tracking branch."""
    name: str  # Remote branches keep their remote prefix, e.g. "origin/main"
    is_remote: bool
    is_current: bool  # Only ever True for the local branch HEAD points to

    def to_dict(self) -> dict:
        return asdict(self)
