import re

from attrs import field, frozen

from modrepo.infrastructure.errors import InvalidArgumentError

_VERSION_RE = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?$")


def _non_negative(instance, attribute, value):
    if value < 0:
        raise InvalidArgumentError(
            attribute.name, f"{attribute.name} must not be negative, got {value}"
        )


@frozen(order=True)
class ManagementVersion:
    """Version of the management protocol exposed by a server.

    Versions are ordered by ``(major, minor, micro)``.
    """

    major: int = field(validator=_non_negative)
    minor: int = field(default=0, validator=_non_negative)
    micro: int = field(default=0, validator=_non_negative)

    @classmethod
    def parse(cls, text: str) -> "ManagementVersion":
        """Parse ``"X"``, ``"X.Y"`` or ``"X.Y.Z"``; missing parts default to 0."""
        if not isinstance(text, str):
            raise InvalidArgumentError(
                "version", f"version must be a string, got {type(text).__name__}"
            )
        match = _VERSION_RE.match(text.strip())
        if not match:
            raise InvalidArgumentError("version", f"Not a management version: {text!r}")
        major, minor, micro = (int(part) if part else 0 for part in match.groups())
        return cls(major, minor, micro)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.micro}"


def to_version(value: "ManagementVersion | str") -> ManagementVersion:
    if isinstance(value, ManagementVersion):
        return value
    return ManagementVersion.parse(value)


# Last protocol version without --resource-delimiter
VERSION_1_7_0 = ManagementVersion(1, 7, 0)
# First protocol version accepting --resource-delimiter
VERSION_2_0_0 = ManagementVersion(2, 0, 0)
