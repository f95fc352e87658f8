# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core

_ALIAS_SEPARATOR = re.compile(r"\s*,\s*")


class AliasedTyperGroup(typer.core.TyperGroup):
    """Group whose command names may list aliases, e.g. ``"status, st"``."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.canonical_name(cmd_name))

    def canonical_name(self, typed_name: str) -> str:
        for registered in self.commands:
            if typed_name in _ALIAS_SEPARATOR.split(registered):
                return registered
        return typed_name


class OrderedAliasedTyperGroup(AliasedTyperGroup):
    """Lists commands in workflow order instead of alphabetically"""

    desired_order = [
        "start",
        "stop",
        "status, st",
        "resume",
        "switch, sw",
        "cancel",
        "log",
        "edit",
        "delete, rm",
        "list, ls",
        "report",
        "export",
        "project, p",
        "config, c",
    ]

    def list_commands(self, ctx: click.Context) -> list[str]:
        ordered = [name for name in self.desired_order if name in self.commands]
        return ordered + [name for name in self.commands if name not in ordered]
