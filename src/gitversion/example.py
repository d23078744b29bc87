"""Example programs printing the version information of a build."""

import sys
from typing import TextIO

from gitversion.provider import VersionInfoProvider

FIELDS = (
    "version_string",
    "version_branch",
    "version_fullhash",
    "version_shorthash",
    "version_isdirty",
    "version_distance",
    "version_flag",
)


def _format(value: str | int | bool) -> str:
    # booleans print as 1/0, like a C++ output stream
    if isinstance(value, bool):
        return str(int(value))
    return str(value)


def version_lines(provider: VersionInfoProvider, prefix: str = "") -> list[str]:
    """One '- <field>: <value>' line per field, in fixed order."""
    return [
        f"{prefix}- {field}: {_format(getattr(provider, field)())}" for field in FIELDS
    ]


def print_version(provider: VersionInfoProvider, out: TextIO | None = None) -> None:
    out = out or sys.stdout
    print("GitVersion example", file=out)
    for line in version_lines(provider):
        print(line, file=out)


def print_version_of_lib(
    provider: VersionInfoProvider, out: TextIO | None = None
) -> None:
    out = out or sys.stdout
    print("| GitVersion library version", file=out)
    for line in version_lines(provider, prefix="| "):
        print(line, file=out)
