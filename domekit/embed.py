"""Turn a script source file into an embeddable C-style include file."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .optparse import LongOption, OptionError, Parser

DEFAULT_MODULE_NAME = "wren_module_test"
_BANNER = b"// auto-generated file, do not modify\n"


def _default_log(text: str) -> None:
    sys.stdout.write(text)


def encode(source: Union[str, bytes], module_name: str) -> bytes:
    """Return the include-file text declaring ``module_name`` as a char array."""
    data = source.encode("utf-8") if isinstance(source, str) else bytes(source)
    out = bytearray(_BANNER)
    out += f"const char {module_name}[{len(data) + 1}] = {{".encode("utf-8")
    for byte in data:
        if byte == 0x0A:
            out += b"'\\n',\n"
            continue
        out += b"'"
        if byte == 0x27:
            out += b"\\'"
        elif byte == 0x5C:
            out += b"\\\\"
        else:
            out.append(byte)
        out += b"', "
    out += b" };\n"
    return bytes(out)


def write_embedded(source: Union[str, bytes], module_name: str, destination) -> None:
    """Encode the source and write it to ``destination``."""
    Path(destination).write_bytes(encode(source, module_name))


def usage() -> str:
    """Return the help text of the embed command."""
    return (
        "\nUsage: \n"
        "  dome embed <source file> [<variable>] [<output file>] \n"
        "  dome embed [options] \n"
        "\nOptions: \n"
        "  -h --help    Show this help message.\n"
        "\n"
    )


def run(argv: Sequence[str], log: Optional[Callable[[str], object]] = None) -> int:
    """Run the embed command; ``argv[0]`` is the command name. Returns an exit code."""
    log = log or _default_log
    argv = list(argv)
    parser = Parser(argv, permute=False)
    longopts = [LongOption("help", "h")]
    try:
        while (opt := parser.parse_long(longopts)) is not None:
            if opt.shortname == "h":
                from .cli import title

                log(title())
                log(usage())
                return 0
    except OptionError as exc:
        log(f"dome: {argv[0]}: {exc.message}\n")
        log(usage())
        return 1

    file_name = parser.arg()
    if file_name is None:
        log("dome: Missing file name.\n")
        log(usage())
        return 1
    try:
        data = Path(file_name).read_bytes()
    except OSError as exc:
        log(f"dome: Error reading file: {exc.strerror}\n")
        return 1
    module_name = parser.arg() or DEFAULT_MODULE_NAME
    destination = parser.arg() or f"{file_name}.inc"
    write_embedded(data, module_name, destination)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Standalone entry point: ``sourceFile [moduleName] [destinationFile]``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("./embed sourceFile [moduleName] [destinationFile]")
        print("Not enough arguments.")
        return 1
    file_name = args[0]
    try:
        data = Path(file_name).read_bytes()
    except OSError:
        sys.stderr.write("Error reading file\n")
        return 1
    module_name = args[1] if len(args) > 1 else DEFAULT_MODULE_NAME
    destination = args[2] if len(args) > 2 else f"{file_name}.inc"
    write_embedded(data, module_name, destination)
    return 0