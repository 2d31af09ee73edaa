"""Configuration handling for git-worktree-manager"""

from dataclasses import asdict, dataclass, fields


@dataclass
class Config:
    """Configuration for git-worktree-manager with validation."""

    # Remote used for the ahead/behind fallback when a branch has no upstream
    remote_name: str = "origin"

    # Execution modes
    verbose: bool = False
    debug: bool = False

    # TUI status polling, in seconds
    refresh_interval: float = 5.0

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote_name()
        self._validate_refresh_interval()

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_refresh_interval(self):
        """Validate refresh_interval is positive."""
        if self.refresh_interval <= 0:
            raise ValueError(f"refresh_interval must be positive, got {self.refresh_interval}")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return asdict(self)

    def get(self, key: str, default=None):
        """Get config value by key, dict style."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
