r"""Register a new module in the module repository of a running server.

The server side of ``module add`` creates the module directory, copies the
resource files into it and, unless a ``module.xml`` is supplied, generates the
module descriptor. This module only renders the management command, e.g.::

    module add --name=org.foo --slot=main --resource-delimiter=: --resources=/a/b.jar:/c\ d.jar
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from attrs import field, frozen

from modrepo.infrastructure.command import OnlineCommand, OnlineCommandContext
from modrepo.infrastructure.errors import InvalidArgumentError, NotSupportedError
from modrepo.infrastructure.version import VERSION_2_0_0, ManagementVersion, to_version

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "main"


def _require(parameter: str, value):
    if value is None:
        raise InvalidArgumentError(parameter, f"{parameter} cannot be None")
    return value


def _require_text(parameter: str, value: str) -> str:
    _require(parameter, value)
    if not value:
        raise InvalidArgumentError(parameter, f"{parameter} cannot be empty")
    return value


# Characters str.isspace() accepts that are still valid delimiters: the
# non-breaking spaces and NEL
_NON_BREAKING_SPACES = frozenset("\xa0\u2007\u202f\x85")


def _is_whitespace(char: str) -> bool:
    return char.isspace() and char not in _NON_BREAKING_SPACES


def _check_delimiter(delimiter: str) -> str:
    _require("resource_delimiter", delimiter)
    if len(delimiter) != 1:
        raise InvalidArgumentError(
            "resource_delimiter",
            f"resource delimiter length was {len(delimiter)}, "
            f"but only strings of length 1 are allowed",
        )
    if _is_whitespace(delimiter):
        raise InvalidArgumentError("resource_delimiter", "resource delimiter cannot be whitespace")
    return delimiter


def _absolute_path(parameter: str, file: "str | os.PathLike[str]") -> str:
    _require(parameter, file)
    return str(Path(file).absolute())


def _property_entry(name: str, value: str) -> str:
    _require("property_name", name)
    _require("property_value", value)
    return f"{name}={value}"


def _validate_text(instance, attribute, value):
    _require_text(attribute.name, value)


def _validate_delimiter(instance, attribute, value):
    _check_delimiter(value)


def _sequence(parameter: str, it: Iterable) -> tuple:
    # A bare string or path would otherwise be split into characters
    if isinstance(it, (str, bytes, os.PathLike)):
        raise InvalidArgumentError(
            parameter, f"{parameter} must be a sequence, got {type(it).__name__}"
        )
    return tuple(_require(parameter, item) for item in _require(parameter, it))


def _to_resources(it: Iterable["str | os.PathLike[str]"]) -> tuple[str, ...]:
    return tuple(_absolute_path("resources", file) for file in _sequence("resources", it))


def _to_dependencies(it: Iterable[str]) -> tuple[str, ...]:
    return _sequence("dependencies", it)


def _to_properties(it: Iterable[str]) -> tuple[str, ...]:
    properties = _sequence("properties", it)
    for entry in properties:
        if not isinstance(entry, str) or "=" not in entry:
            raise InvalidArgumentError("properties", f"expected name=value, got {entry!r}")
    return properties


def _to_optional_path(file: "str | os.PathLike[str] | None") -> str | None:
    return None if file is None else _absolute_path("module_xml", file)


@frozen
class AddModule(OnlineCommand):
    """Add a module (in the JBoss Modules sense) to the server's module repository.

    Instances are immutable snapshots; use :class:`AddModuleBuilder` (or
    :meth:`AddModule.builder`) to assemble one. A command can be applied any
    number of times, against different contexts.

    Only standalone servers are supported. ``dependencies``, ``properties``
    and ``main_class`` are ignored by the server when ``module_xml`` is given,
    but they are still rendered.
    """

    module_name: str = field(validator=_validate_text)
    slot: str = field(default=DEFAULT_SLOT, validator=_validate_text)
    module_xml: str | None = field(default=None, converter=_to_optional_path)
    main_class: str | None = None
    resources: tuple[str, ...] = field(default=(), converter=_to_resources)
    dependencies: tuple[str, ...] = field(default=(), converter=_to_dependencies)
    properties: tuple[str, ...] = field(default=(), converter=_to_properties)
    resource_delimiter: str = field(default=os.pathsep, validator=_validate_delimiter)

    @staticmethod
    def builder(module_name: str, slot: str = DEFAULT_SLOT) -> "AddModuleBuilder":
        return AddModuleBuilder(module_name, slot)

    def apply(self, ctx: OnlineCommandContext) -> None:
        if ctx.options.is_domain:
            logger.warning(f"Refusing to apply {self} to a server in domain mode")
            raise NotSupportedError("AddModule command isn't supported in domain mode")

        command = self.render(ctx.server_version)
        logger.debug(f"Submitting management command: {command}")
        ctx.client.execute_cli(command)

    def render(self, server_version: "ManagementVersion | str") -> str:
        """Render the ``module add`` command for a server of the given version.

        ``--resource-delimiter`` is only understood from management version
        2.0.0 on. Older servers always split ``--resources`` on the platform
        path separator, so the configured delimiter is ignored for them.
        """
        parts = ["module add", f"--name={self.module_name}", f"--slot={self.slot}"]

        if self.module_xml is not None:
            parts.append(f"--module-xml={self.module_xml}")

        if self.main_class is not None:
            parts.append(f"--main-class={self.main_class}")

        delimiter = os.pathsep
        if to_version(server_version) >= VERSION_2_0_0:
            parts.append(f"--resource-delimiter={self.resource_delimiter}")
            delimiter = self.resource_delimiter

        if self.resources:
            # Spaces are the only characters escaped
            escaped = delimiter.join(self.resources).replace(" ", "\\ ")
            parts.append(f"--resources={escaped}")

        if self.dependencies:
            parts.append(f"--dependencies={','.join(self.dependencies)}")

        if self.properties:
            parts.append(f"--properties={','.join(self.properties)}")

        return " ".join(parts)

    def __str__(self) -> str:
        return f"AddModule {self.module_name}"


class AddModuleBuilder:
    """Accumulates the arguments of an :class:`AddModule` command.

    Every setter validates its input immediately and returns the builder, so
    calls can be chained::

        command = (
            AddModuleBuilder("org.foo")
            .resource("/opt/jars/foo.jar")
            .dependency("javax.api")
            .build()
        )

    A rejected argument leaves the builder unchanged. :meth:`build` cannot fail.
    """

    def __init__(self, module_name: str, slot: str = DEFAULT_SLOT):
        self._module_name = _require_text("module_name", module_name)
        self._slot = _require_text("slot", slot)
        self._resource_delimiter = os.pathsep
        self._module_xml: str | None = None
        self._main_class: str | None = None
        self._resources: list[str] = []
        self._dependencies: list[str] = []
        self._properties: list[str] = []

    def resource(self, file: "str | os.PathLike[str]") -> "AddModuleBuilder":
        """Add a resource (usually a JAR); the server copies it into the module."""
        self._resources.append(_absolute_path("resource", file))
        return self

    def resource_delimiter(self, delimiter: str) -> "AddModuleBuilder":
        """Character separating resources; defaults to ``os.pathsep``.

        Must be a single non-whitespace character. Ignored for servers older
        than management version 2.0.0.
        """
        self._resource_delimiter = _check_delimiter(delimiter)
        return self

    def dependency(self, name: str) -> "AddModuleBuilder":
        """Name of a module the new module depends on.

        Only meaningful when the ``module.xml`` is generated by the server.
        """
        self._dependencies.append(_require("dependency", name))
        return self

    def module_xml(self, file: "str | os.PathLike[str]") -> "AddModuleBuilder":
        """Descriptor to copy instead of letting the server generate one."""
        self._module_xml = _absolute_path("module_xml", file)
        return self

    def property(self, name: str, value: str) -> "AddModuleBuilder":
        self._properties.append(_property_entry(name, value))
        return self

    def main_class(self, name: str) -> "AddModuleBuilder":
        """Fully qualified name of the class declaring the module's ``main`` method."""
        self._main_class = _require("main_class", name)
        return self

    def build(self) -> AddModule:
        return AddModule(
            module_name=self._module_name,
            slot=self._slot,
            module_xml=self._module_xml,
            main_class=self._main_class,
            resources=tuple(self._resources),
            dependencies=tuple(self._dependencies),
            properties=tuple(self._properties),
            resource_delimiter=self._resource_delimiter,
        )
