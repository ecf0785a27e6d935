"""
Scripting environment and interactive shell.

Scripts are ordinary Python run against a prepared set of globals. The
``wad`` name in those globals exposes the container API:

    lumps, kind = wad.read_container("doom2.wad")
    pos = lumps.find("MAP01")
    lumps.insert(pos, "TITLE", b"hello")
    wad.write_container(lumps, "out.wad")

Directories are handed to scripts as the objects themselves, so every name
bound to one sees the same lumps.
"""

from __future__ import annotations

import code
import runpy
import sys
import types
from typing import Any, Dict

from .directory import Directory, Lump, create_directory
from .errors import WadError, FormatError, EncodeError, ArgumentError
from .reader import read_container, parse_container
from .writer import pack_container, write_container


BANNER = (
    "WADmake shell\n"
    "Press Ctrl-C to discard the current line.\n"
    "Press Ctrl-D on an empty line to quit the shell."
)


def _check_directory(lumps: Any) -> Directory:
    if not isinstance(lumps, Directory):
        raise ArgumentError("lumps", f"must be a Directory, not {type(lumps).__name__}")
    return lumps


def _pack_container(lumps: Directory) -> bytes:
    return pack_container(_check_directory(lumps))


def _write_container(lumps: Directory, path) -> None:
    write_container(_check_directory(lumps), path)


def _parse_container(data):
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise ArgumentError("data", f"must be bytes, not {type(data).__name__}")
    return parse_container(data)


def wad_namespace() -> types.SimpleNamespace:
    return types.SimpleNamespace(
        create_directory=create_directory,
        read_container=read_container,
        parse_container=_parse_container,
        pack_container=_pack_container,
        write_container=_write_container,
        Directory=Directory,
        Lump=Lump,
        WadError=WadError,
        FormatError=FormatError,
        EncodeError=EncodeError,
        ArgumentError=ArgumentError,
    )


def new_environment() -> Dict[str, Any]:
    return {"__name__": "__wadmake__", "wad": wad_namespace()}


def run_source(env: Dict[str, Any], source: str, filename: str = "<script>") -> None:
    exec(compile(source, filename, "exec"), env)


def run_script(env: Dict[str, Any], path: str) -> None:
    """Run a script file, or standard input when ``path`` is ``-``.

    Names the script binds are copied back into ``env`` once it finishes.
    """
    if path == "-":
        run_source(env, sys.stdin.read(), "<stdin>")
        return
    env.update(runpy.run_path(path, init_globals=env, run_name=env.get("__name__", "__wadmake__")))


def interact(env: Dict[str, Any]) -> None:
    try:
        import readline  # noqa: F401  line editing and history for input()
    except ImportError:
        pass
    console = code.InteractiveConsole(locals=env, filename="<wadmake>")
    console.interact(banner=BANNER, exitmsg="")
