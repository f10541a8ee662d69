import logging
from abc import ABC, abstractmethod

from attrs import define, field

logger = logging.getLogger(__name__)


class ManagementClient(ABC):
    """Handle to an already connected management client.

    Implementations submit one textual management command per call and raise a
    :class:`~modrepo.infrastructure.errors.ManagementClientError` (or a
    client-specific exception) when the server rejects it.
    """

    @abstractmethod
    def execute_cli(self, command: str) -> None:
        """Submit a single management command."""
        ...


@define
class RecordingClient(ManagementClient):
    """Client that records commands instead of sending them to a server."""

    commands: list[str] = field(factory=list)

    def execute_cli(self, command: str) -> None:
        logger.info(f"RecordingClient:Recording command:{command}")
        self.commands.append(command)

    @property
    def last_command(self) -> str | None:
        return self.commands[-1] if self.commands else None
