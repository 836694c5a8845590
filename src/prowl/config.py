"""Prowl configuration.

ProwlConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ProwlConfig:
    """Configuration for a Prowl application.

    Attributes:
        root: Project root directory.  Always resolved to an absolute path on
              construction.
        controllers_dir: Directory containing controller modules, relative to
            root (or absolute).
        host: Bind address for ``serve``.
        port: Bind port for ``serve``.
        debug: Run the Chirp app in debug mode.
        max_events: Size of the discovery event log.

    """

    root: Path = field(default_factory=Path.cwd)
    controllers_dir: str = "controllers"
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    max_events: int = 10_000

    def __post_init__(self) -> None:
        # Controller discovery only accepts absolute roots.
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

    @property
    def controllers_path(self) -> Path:
        """Absolute path to the controllers directory."""
        path = Path(self.controllers_dir)
        if path.is_absolute():
            return path
        return self.root / path
