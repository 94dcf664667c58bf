"""Directory service clients that supply raw phone number assignments."""

from .base import DirectoryClient, DirectoryQueryError  # noqa: F401
from .powershell import PowerShellDirectoryClient  # noqa: F401
from .snapshot import SnapshotDirectoryClient  # noqa: F401

__all__ = [
    "DirectoryClient",
    "DirectoryQueryError",
    "PowerShellDirectoryClient",
    "SnapshotDirectoryClient",
]
