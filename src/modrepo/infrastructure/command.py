import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from attrs import field, frozen

from modrepo.infrastructure.client import ManagementClient
from modrepo.infrastructure.version import VERSION_2_0_0, ManagementVersion, to_version

logger = logging.getLogger(__name__)


@frozen
class OnlineOptions:
    """Options describing the topology of the server a command is applied to."""

    is_domain: bool = False


@frozen
class OnlineCommandContext:
    """Everything an online command needs to talk to a running server.

    The context is borrowed by :meth:`OnlineCommand.apply` for the duration of
    the call and never retained.
    """

    client: ManagementClient
    options: OnlineOptions = field(factory=OnlineOptions)
    server_version: ManagementVersion = field(default=VERSION_2_0_0, converter=to_version)


@frozen
class OnlineCommand(ABC):
    @abstractmethod
    def apply(self, ctx: OnlineCommandContext) -> None:
        """Apply the command to the server described by `ctx`."""
        ...


def make_tuple(it: Iterable[OnlineCommand]) -> tuple[OnlineCommand, ...]:
    return tuple(it)


@frozen
class Batch(OnlineCommand):
    """Apply several commands, in order, against the same context.

    The first failing command stops the batch; its error propagates.
    """

    commands: tuple[OnlineCommand, ...] = field(converter=make_tuple)

    def apply(self, ctx: OnlineCommandContext) -> None:
        for command in self.commands:
            logger.debug(f"Batch:Applying {command}")
            command.apply(ctx)

    def __attrs_pre_init__(self):
        super().__init__()
