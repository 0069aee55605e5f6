"""Format and emit workflow commands.

A workflow command is a single stdout line the runner recognizes:

    ::<command>[ key1=value1,key2=value2]::<message>

Property values and the message are escaped so that a command always stays
on one line and property delimiters cannot be injected.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TextIO


CMD_STRING = "::"
MISSING_COMMAND = "missing.command"


def escape_data(value: Any) -> str:
    """Escape a command message."""
    if value is None:
        return ""
    return (
        str(value)
        .replace("%", "%25")
        .replace("\r", "%0D")
        .replace("\n", "%0A")
    )


def escape_property(value: Any) -> str:
    """Escape a property value. Adds ':' and ',' to the message rules."""
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


@dataclass(frozen=True)
class Command:
    """A single workflow command, rendered with str()."""

    command: str
    properties: Mapping[str, Any] = field(default_factory=dict)
    message: str = ""

    def __post_init__(self) -> None:
        if _is_blank(self.command):
            object.__setattr__(self, "command", MISSING_COMMAND)
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties or {})))
        if self.message is None:
            object.__setattr__(self, "message", "")

    def __str__(self) -> str:
        cmd_str = CMD_STRING + self.command

        props = self._properties_string()
        if props:
            cmd_str += " " + props

        cmd_str += CMD_STRING + escape_data(self.message)
        return cmd_str

    def _properties_string(self) -> str:
        return ",".join(
            f"{key}={escape_property(value)}"
            for key, value in sorted(self.properties.items())
            if not _is_blank(value)
        )


def issue_command(
    command: str,
    properties: Mapping[str, Any] | None = None,
    message: Any = "",
    stream: TextIO | None = None,
) -> None:
    """Write a workflow command line to stream (stdout by default)."""
    msg = "" if message is None else str(message)
    cmd = Command(command, properties or {}, msg)
    out = stream if stream is not None else sys.stdout
    out.write(f"{cmd}\n")
