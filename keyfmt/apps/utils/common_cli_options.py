#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI helper for Click."""

import logging
from gettext import gettext
from typing import Any, Callable, Optional, Sequence, Type, TypeVar, Union

import click
from click_command_tree import _build_command_tree, _CommandWrapper

from keyfmt import __version__ as keyfmt_version
from keyfmt.utils.keyfmt_enum import KeyfmtEnum

FC = TypeVar("FC", bound=Union[Callable[..., Any], click.Command])
logger = logging.getLogger(__name__)

_DEFAULT_OUTPUT_HELP = "Path to a file, where to store the output. Printed to console when omitted."


class EnumChoice(click.Choice):
    """Click choice of keyfmt enumeration labels, converted into the enum member."""

    name = "enum_choice"

    def __init__(self, enum_cls: Type[KeyfmtEnum], labels: Optional[Sequence[str]] = None) -> None:
        """Constructor of enum choice click type.

        :param enum_cls: Keyfmt enumeration to choose from.
        :param labels: Subset of labels offered, all labels when None.
        """
        self.enum_cls = enum_cls
        super().__init__(list(labels or enum_cls.labels()), case_sensitive=False)

    def convert(
        self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]
    ) -> Any:
        """Convert label into enumeration member."""
        if isinstance(value, self.enum_cls):
            return value
        return self.enum_cls.from_label(super().convert(value, param, ctx))


def keyfmt_apps_common_options(options: FC) -> FC:
    """Common click options.

    Sets --help, --version; provides: `log_level: int` for logging.

    :return: click decorator
    """
    options = click.help_option("--help")(options)
    options = click.version_option(keyfmt_version, "--version")(options)
    options = click.option(
        "-vv",
        "--debug",
        "log_level",
        flag_value=logging.DEBUG,
        help="Display more debugging information.",
    )(options)
    options = click.option(
        "-v",
        "--verbose",
        "log_level",
        flag_value=logging.INFO,
        help="Print more detailed information",
    )(options)
    return options


def keyfmt_output_option(
    required: bool = False,
    param_decls: Sequence[str] = ("-o", "--output"),
    help: Optional[str] = None,  # pylint: disable=redefined-builtin
) -> Callable:
    """Click decorator handling output file.

    Provides: `output: str` a full path to a file (named after the last declaration).

    :param required: Output option is required, defaults to False
    :param param_decls: Option declarations, defaults to ('-o', '--output')
    :param help: Customized help message, defaults to None
    :return: Click decorator
    """

    def decorator(func: Callable[[FC], FC]) -> Callable[[FC], FC]:
        func = click.option(
            *param_decls,
            type=click.Path(resolve_path=True, dir_okay=False),
            required=required,
            help=help or _DEFAULT_OUTPUT_HELP,
        )(func)
        return func

    return decorator


class CommandsTreeGroup(click.Group):
    """Click group listing its commands, including nested groups, as a tree in help."""

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Write the command tree after the options.

        :param ctx: click Context
        :param formatter: click HelpFormatter
        """
        root = _build_command_tree(ctx.find_root().command)
        rows = [(root.name, _summary(root))]
        rows.extend(_tree_rows(root.children))
        with formatter.section(gettext("Commands")):
            formatter.width = 160
            formatter.write_dl(rows, col_max=80)


def _summary(command: _CommandWrapper, width: int = 78) -> str:
    """First line of command docstring shortened to given width."""
    line = (command.command.__doc__ or "").strip().partition("\n")[0]
    return line if len(line) <= width else line[:width] + ".."


def _tree_rows(children: Sequence[_CommandWrapper], indent: str = "") -> list[tuple[str, str]]:
    """Get definition list rows of commands drawn as tree branches.

    :param children: Commands on one tree level.
    :param indent: Prefix drawn by the parent levels.
    :return: Rows of (tree item, summary).
    """
    rows: list[tuple[str, str]] = []
    ordered = sorted(children, key=lambda child: child.name)
    for index, child in enumerate(ordered):
        last = index == len(ordered) - 1
        branch = "└── " if last else "├── "
        rows.append((f"{indent}{branch}{child.name}", _summary(child)))
        rows.extend(_tree_rows(child.children, indent + ("    " if last else "│   ")))
    return rows
