"""Bundle files and directories into a tar archive for the engine."""

from __future__ import annotations

import io
import os
import stat
import sys
import tarfile
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence

from .optparse import ArgType, LongOption, OptionError, Parser

DEFAULT_OUTPUT = "game.egg"
_INCLUDE_DOT_FILES = 128


class _Mode(Enum):
    CREATE = "create"
    EXTRACT = "extract"


def _default_log(text: str) -> None:
    sys.stdout.write(text)


def _write_file(tar, file_path: str, tar_path: Optional[str], log, archived) -> bool:
    try:
        with open(file_path, "rb") as handle:
            data = handle.read()
    except OSError:
        return False
    name = tar_path if tar_path is not None else file_path
    log(f"Bundling: {file_path}\n")
    info = tarfile.TarInfo(name)
    info.size = len(data)
    info.mode = 0o664
    tar.addfile(info, io.BytesIO(data))
    archived.append(name)
    return True


def _pack_directory(tar, directory: str, start: int, include_dot_files: bool,
                    log, archived) -> bool:
    try:
        names = sorted(os.listdir(directory))
    except OSError:
        return True
    for name in names:
        path = f"{directory}/{name}"
        if not include_dot_files and name.startswith("."):
            continue
        if os.path.islink(path):
            log(f"Skipping symlink: {path}\n")
            continue
        if os.path.isdir(path):
            ok = _pack_directory(tar, path, start, include_dot_files, log, archived)
        else:
            ok = _write_file(tar, path, path[start:], log, archived)
        if not ok:
            return False
    return True


def create_bundle(paths: Iterable[str], output=DEFAULT_OUTPUT,
                  include_dot_files: bool = False,
                  log: Optional[Callable[[str], object]] = None) -> List[str]:
    """Write the given files and directories into a tar bundle.

    A single directory is stored relative to itself; with several
    arguments, directory entries keep their paths. Returns the names
    stored in the archive, in order.
    """
    log = log or _default_log
    paths = list(paths)
    single = len(paths) == 1
    archived: List[str] = []
    with tarfile.open(output, "w", format=tarfile.USTAR_FORMAT) as tar:
        for path in paths:
            info = os.lstat(path)
            if stat.S_ISLNK(info.st_mode):
                log(f"Ignoring symlink: {path}\n")
                continue
            if stat.S_ISREG(info.st_mode):
                if not include_dot_files and path.startswith(".") and not path.startswith(".."):
                    continue
                _write_file(tar, path, None, log, archived)
            elif stat.S_ISDIR(info.st_mode):
                if path.endswith("/"):
                    path = path[:-1]
                start = len(path) + 1 if single else 0
                _pack_directory(tar, path, start, include_dot_files, log, archived)
    log(f"Created bundle {output}.\n")
    return archived


def usage() -> str:
    """Return the help text of the nest command."""
    return (
        "\nUsage: \n"
        "  dome nest [options] [--] (<file> | <directory>) ... \n"
        "\nOptions: \n"
        "  -c --create               Create a bundle from files.\n"
        "  -h --help                 Show this help message.\n"
        "  -o FILE, --output=FILE    The file to bundle into.\n"
        "  --include-dot-files       Include dot-prefixed files in bundle.\n"
        "\n"
    )


def run(argv: Sequence[str], log: Optional[Callable[[str], object]] = None) -> int:
    """Run the nest command; ``argv[0]`` is the command name. Returns an exit code."""
    log = log or _default_log
    argv = list(argv)
    parser = Parser(argv, permute=False)
    longopts = [
        LongOption("create", "c"),
        LongOption("output", "o", ArgType.REQUIRED),
        LongOption("extract", "x"),
        LongOption("help", "h"),
        LongOption("include-dot-files", _INCLUDE_DOT_FILES),
    ]
    mode: Optional[_Mode] = None
    output = DEFAULT_OUTPUT
    include_dot_files = False
    try:
        while (opt := parser.parse_long(longopts)) is not None:
            key = opt.shortname
            if key == _INCLUDE_DOT_FILES:
                include_dot_files = True
            elif key == "h":
                from .cli import title

                log(title())
                log(usage())
                return 0
            elif key in ("c", "x"):
                if mode is not None:
                    return 1
                mode = _Mode.CREATE if key == "c" else _Mode.EXTRACT
            elif key == "o":
                output = parser.optarg
    except OptionError as exc:
        log(f"{argv[0]}: {exc.message}\n")
        return 1

    paths = []
    while (path := parser.arg()) is not None:
        paths.append(path)

    if mode is None:
        mode = _Mode.CREATE
    if mode is _Mode.CREATE:
        create_bundle(paths, output, include_dot_files, log)
    return 0