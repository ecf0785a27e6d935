from __future__ import annotations

import io
import os
from typing import BinaryIO, Union

from .constants import (
    WAD_TYPE_PWAD,
    WAD_TYPE_MAGIC,
    HEADER_STRUCT,
    HEADER_SIZE,
    ENTRY_STRUCT,
    NAME_LENGTH,
    NAME_ENCODING,
    INT32_MAX,
)
from .directory import Directory
from .errors import EncodeError
from .wad import Wad


def encode_name(name: str) -> bytes:
    """Lump names are at most 8 bytes; shorter names are zero padded by the
    entry struct. Longer names are rejected, never truncated."""
    if not isinstance(name, str):
        raise EncodeError(f"lump name {name!r} must be a string, not {type(name).__name__}")
    try:
        raw = name.encode(NAME_ENCODING)
    except UnicodeEncodeError as exc:
        raise EncodeError(f"lump name {name!r} is not representable: {exc}") from exc
    if len(raw) > NAME_LENGTH:
        raise EncodeError(f"lump name {name!r} is too long: {len(raw)} bytes, maximum {NAME_LENGTH}")
    return raw


def _write_all(f: BinaryIO, data: bytes, what: str) -> None:
    try:
        n = f.write(data)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"could not write {what}: {exc}") from exc
    # Raw (unbuffered) streams may report a short write.
    if n is not None and n < len(data):
        raise EncodeError(f"could not write {what}: wrote {n} of {len(data)} bytes")


def encode(f: BinaryIO, wad: Wad) -> None:
    """Encode ``wad`` to ``f``.

    Layout: 12-byte header, every lump's data back to back in directory
    order, then one 16-byte infotable entry per lump. The infotable offset
    depends on the total data size, so data and infotable are buffered
    separately and written after the header once both are known.
    """
    magic = WAD_TYPE_MAGIC.get(wad.wad_type)
    if magic is None:
        raise EncodeError(f"could not write header of unknown wad type: {wad.wad_type!r}")

    numlumps = len(wad.lumps)
    if numlumps > INT32_MAX:
        raise EncodeError(f"too many lumps: {numlumps}")

    alldata = io.BytesIO()
    infotable = io.BytesIO()
    for i, lump in enumerate(wad.lumps):
        filepos = HEADER_SIZE + alldata.tell()
        if filepos > INT32_MAX:
            raise EncodeError(f"position of lump {i} ({lump.name!r}) out of range: {filepos}")
        if not isinstance(lump.data, (bytes, bytearray, memoryview)):
            raise EncodeError(f"data of lump {i} ({lump.name!r}) must be bytes, not {type(lump.data).__name__}")
        size = len(lump.data)
        if size > INT32_MAX:
            raise EncodeError(f"size of lump {i} ({lump.name!r}) out of range: {size}")
        name = encode_name(lump.name)

        alldata.write(lump.data)
        infotable.write(ENTRY_STRUCT.pack(filepos, size, name))

    infotableofs = HEADER_SIZE + alldata.tell()
    if infotableofs > INT32_MAX:
        raise EncodeError(f"infotable offset out of range: {infotableofs}")

    _write_all(f, HEADER_STRUCT.pack(magic, numlumps, infotableofs), "header")
    _write_all(f, alldata.getvalue(), "lump data")
    _write_all(f, infotable.getvalue(), "infotable")


def pack_container(lumps: Directory) -> bytes:
    """Encode a directory as PWAD bytes."""
    buf = io.BytesIO()
    encode(buf, Wad(WAD_TYPE_PWAD, lumps))
    return buf.getvalue()


def save_wad(wad: Wad, path: Union[str, os.PathLike]) -> None:
    """Encode ``wad`` to a file at ``path``, replacing any existing file."""
    # Encoded before the file is opened; an EncodeError leaves no output.
    buf = io.BytesIO()
    encode(buf, wad)
    what = f"container to {os.fspath(path)}"
    with open(path, "wb") as f:
        _write_all(f, buf.getvalue(), what)
        try:
            f.flush()
        except OSError as exc:
            raise EncodeError(f"could not write {what}: {exc}") from exc


def write_container(lumps: Directory, path: Union[str, os.PathLike]) -> None:
    """Encode a directory as a PWAD file at ``path``, replacing any existing file."""
    save_wad(Wad(WAD_TYPE_PWAD, lumps), path)
