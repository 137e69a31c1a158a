"""Command line front end for the engine's tools."""

from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence

from . import embed, fuse, nest
from .optparse import LongOption, OptionError, Parser


def _default_log(text: str) -> None:
    sys.stdout.write(text)


def title() -> str:
    """Return the banner printed above help text."""
    return "DOME - game engine tools\n"


def usage() -> str:
    """Return the general usage text."""
    return (
        "\nUsage: \n"
        "  dome <command> [<args>...]\n"
        "  dome help <command>\n"
        "\nCommands: \n"
        "  embed    Convert a source file into an embeddable include file.\n"
        "  fuse     Fuse a bundle into the engine binary.\n"
        "  help     Show help for a command.\n"
        "  nest     Bundle files into an archive.\n"
        "\n"
    )


def help_usage() -> str:
    """Return the help text of the help command."""
    return (
        "\nUsage: \n"
        "  dome help (-h | --help) | (<command>)\n"
        "\nOptions: \n"
        "  -h --help    Show this help message.\n"
        "\n"
    )


_COMMAND_USAGE = {
    "help": help_usage,
    "fuse": fuse.usage,
    "embed": embed.usage,
    "nest": nest.usage,
}


def help_command(argv: Sequence[str], log: Optional[Callable[[str], object]] = None) -> int:
    """Show help for a command; ``argv[0]`` is the command name. Returns an exit code."""
    log = log or _default_log
    argv = list(argv)
    parser = Parser(argv, permute=False)
    try:
        while (opt := parser.parse_long([LongOption("help", "h")])) is not None:
            if opt.shortname == "h":
                log(title())
                log(help_usage())
                return 0
    except OptionError as exc:
        log(f"dome: {argv[0]}: {exc.message}\n")
        log(usage())
        return 1

    command = parser.arg()
    if command is None:
        log("dome: command is missing.\n")
        log(help_usage())
        return 1
    text = _COMMAND_USAGE.get(command)
    if text is None:
        log(f"dome: command {command} was invalid.\n")
        log(usage())
        return 1
    log(title())
    log(text())
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Dispatch to a tool command and return its exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    log = _default_log
    if not args:
        log(title())
        log(usage())
        return 1
    commands = {
        "help": help_command,
        "embed": embed.run,
        "nest": nest.run,
        "fuse": fuse.run,
    }
    command = commands.get(args[0])
    if command is None:
        log(f"dome: command {args[0]} was invalid.\n")
        log(usage())
        return 1
    return command(args, log)