"""Append a game bundle to the engine binary and find it again later."""

from __future__ import annotations

import os
import struct
import sys
import tarfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ClassVar, Optional, Sequence

from .optparse import LongOption, OptionError, Parser

MAGIC = b"DOME"
VERSION = 1
_LAYOUT = struct.Struct("<4sBQ4s")


def _default_log(text: str) -> None:
    sys.stdout.write(text)


class FuseError(RuntimeError):
    """Raised when a bundle cannot be fused or a fused binary cannot be read."""


@dataclass(frozen=True)
class FusedHeader:
    """Trailer placed at the end of a fused binary.

    ``offset`` counts the bytes from the start of the bundle to the end
    of the file, trailer included.
    """

    offset: int
    version: int = VERSION
    magic1: bytes = MAGIC
    magic2: bytes = MAGIC

    SIZE: ClassVar[int] = _LAYOUT.size

    def pack(self) -> bytes:
        return _LAYOUT.pack(self.magic1, self.version, self.offset, self.magic2)

    @classmethod
    def unpack(cls, data: bytes) -> "FusedHeader":
        if len(data) != _LAYOUT.size:
            raise FuseError("Could not introspect binary: truncated header")
        magic1, version, offset, magic2 = _LAYOUT.unpack(data)
        return cls(offset=offset, version=version, magic1=magic1, magic2=magic2)

    @property
    def has_magic(self) -> bool:
        return self.magic1 == MAGIC and self.magic2 == MAGIC


def fuse(binary_path, egg_path, output_path) -> FusedHeader:
    """Write the binary followed by the bundle and a trailer; make it executable."""
    try:
        binary = Path(binary_path).read_bytes()
    except OSError as exc:
        raise FuseError(f"Error loading DOME binary: {exc.strerror} ") from exc
    try:
        with tarfile.open(egg_path, "r:") as archive:
            if not archive.getmembers():
                raise tarfile.ReadError("empty archive")
        egg = Path(egg_path).read_bytes()
    except (OSError, tarfile.TarError) as exc:
        raise FuseError(f"Could not fuse: {egg_path} is not a valid EGG file.") from exc

    header = FusedHeader(offset=len(egg) + FusedHeader.SIZE)
    try:
        Path(output_path).write_bytes(binary + egg + header.pack())
    except OSError as exc:
        raise FuseError(f"Error loading DOME binary: {exc.strerror} ") from exc
    try:
        os.chmod(output_path, 0o755)
    except OSError as exc:
        raise FuseError(f"Couldn't set permissions on the fused file: {exc.strerror}") from exc
    return header


def read_fused(binary_path) -> Optional[bytes]:
    """Return the bundle appended to a fused binary, or None if it is not fused."""
    try:
        data = Path(binary_path).read_bytes()
    except OSError as exc:
        raise FuseError(f"Could not read binary: {exc.strerror}") from exc
    size = FusedHeader.SIZE
    if len(data) < size:
        raise FuseError("Could not introspect binary: file too short")
    header = FusedHeader.unpack(data[-size:])
    if not header.has_magic:
        return None
    if header.version != VERSION or not size <= header.offset <= len(data):
        raise FuseError("Fused mode data is in the wrong format.")
    return data[len(data) - header.offset:len(data) - size]


def usage() -> str:
    """Return the help text of the fuse command."""
    return (
        "\nUsage: \n"
        "  dome fuse <source file> [<output file>] \n"
        "  dome fuse [options] \n"
        "\nOptions: \n"
        "  -h --help    Show this help message.\n"
        "\n"
    )


def run(argv: Sequence[str], log: Optional[Callable[[str], object]] = None,
        binary_path=None) -> int:
    """Run the fuse command; ``argv[0]`` is the command name. Returns an exit code."""
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
    output = parser.arg()
    if output is None:
        output = "game.exe" if os.name == "nt" else "game"
    binary = binary_path if binary_path is not None else sys.executable
    try:
        fuse(binary, file_name, output)
    except FuseError as exc:
        log(f"dome: {exc}\n")
        return 1
    log(f"Fused '{file_name}' into DOME successfully as '{output}'")
    return 0