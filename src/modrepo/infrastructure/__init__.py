"""Infrastructure shared by all management commands.

This package provides the command base class and its execution context, the
management client interface, protocol versions, errors and configuration.
"""

from modrepo.infrastructure.client import ManagementClient
from modrepo.infrastructure.command import OnlineCommand, OnlineCommandContext

__all__ = [
    "ManagementClient",
    "OnlineCommand",
    "OnlineCommandContext",
]
