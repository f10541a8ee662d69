"""modrepo - management commands for a server's module repository.

Builds ``module add`` management commands and submits them through an
existing management client.
"""

from modrepo.__version__ import __version__

# Convenience imports for common classes
from modrepo.core.commands.add_module import DEFAULT_SLOT, AddModule, AddModuleBuilder
from modrepo.infrastructure.client import ManagementClient, RecordingClient
from modrepo.infrastructure.command import (
    Batch,
    OnlineCommand,
    OnlineCommandContext,
    OnlineOptions,
)
from modrepo.infrastructure.errors import (
    CommandFailedError,
    InvalidArgumentError,
    ManagementClientError,
    ModrepoError,
    NotSupportedError,
)
from modrepo.infrastructure.version import VERSION_2_0_0, ManagementVersion

__all__ = [
    "__version__",
    "DEFAULT_SLOT",
    "AddModule",
    "AddModuleBuilder",
    "Batch",
    "CommandFailedError",
    "InvalidArgumentError",
    "ManagementClient",
    "ManagementClientError",
    "ManagementVersion",
    "ModrepoError",
    "NotSupportedError",
    "OnlineCommand",
    "OnlineCommandContext",
    "OnlineOptions",
    "RecordingClient",
    "VERSION_2_0_0",
]
