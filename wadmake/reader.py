from __future__ import annotations

import io
import os
from typing import BinaryIO, Tuple, Union

from .constants import (
    IWAD_MAGIC,
    PWAD_MAGIC,
    WAD_TYPE_IWAD,
    WAD_TYPE_PWAD,
    INT32_STRUCT,
    NAME_LENGTH,
    NAME_ENCODING,
)
from .directory import Directory
from .errors import FormatError
from .wad import Wad


def read_exact(f: BinaryIO, n: int, what: str) -> bytes:
    b = f.read(n)
    if len(b) != n:
        raise FormatError(f"truncated file: expected {n} bytes for {what}, got {len(b)}")
    return b


def _read_int32(f: BinaryIO, what: str) -> int:
    return INT32_STRUCT.unpack(read_exact(f, INT32_STRUCT.size, what))[0]


def _seek(f: BinaryIO, offset: int, what: str) -> None:
    try:
        f.seek(offset, io.SEEK_SET)
    except (OSError, ValueError, OverflowError) as exc:
        raise FormatError(f"could not seek to {what} at offset {offset}: {exc}") from exc


def decode_name(raw: bytes) -> str:
    """Names shorter than 8 bytes are zero terminated; an 8-byte name has
    no terminator at all."""
    end = raw.find(b"\x00")
    if end != -1:
        raw = raw[:end]
    return raw.decode(NAME_ENCODING)


def decode(f: BinaryIO) -> Wad:
    """Decode a container from a seekable binary stream.

    The infotable is read front to back. Each entry's data is fetched with an
    independent seek, after which the stream returns to the infotable cursor,
    so data and infotable may sit anywhere in the file relative to each other.
    """
    ident = f.read(4)
    if len(ident) < 4:
        raise FormatError(f"could not read WAD identifier: got {len(ident)} of 4 bytes")
    if ident == IWAD_MAGIC:
        wad = Wad(WAD_TYPE_IWAD)
    elif ident == PWAD_MAGIC:
        wad = Wad(WAD_TYPE_PWAD)
    else:
        raise FormatError(f"invalid WAD identifier: {ident!r}, expected b'IWAD' or b'PWAD'")

    numlumps = _read_int32(f, "lump count")
    if numlumps < 0:
        raise FormatError(f"invalid lump count: {numlumps}")

    infotableofs = _read_int32(f, "infotable offset")
    if infotableofs < 0:
        raise FormatError(f"infotable offset out of range: {infotableofs}")
    _seek(f, infotableofs, "infotable")

    lumps = wad.lumps
    for i in range(numlumps):
        filepos = _read_int32(f, f"filepos of infotable entry {i}")
        size = _read_int32(f, f"size of infotable entry {i}")
        name = decode_name(read_exact(f, NAME_LENGTH, f"name of infotable entry {i}"))

        # A zero-sized lump (e.g. a map marker) may carry any filepos at all.
        # Negative sizes are read the same way.
        data = b""
        if size > 0:
            if filepos < 0:
                raise FormatError(f"filepos out of range for lump {i} ({name!r}): {filepos}")
            cursor = f.tell()
            _seek(f, filepos, f"data of lump {i} ({name!r})")
            data = f.read(size)
            if len(data) != size:
                raise FormatError(
                    f"truncated data for lump {i} ({name!r}): expected {size} bytes, got {len(data)}"
                )
            _seek(f, cursor, "infotable")

        lumps.append(name, data)

    return wad


def parse_container(data: Union[bytes, bytearray, memoryview]) -> Tuple[Directory, str]:
    """Decode container bytes held in memory. Returns ``(lumps, "iwad"|"pwad")``."""
    wad = decode(io.BytesIO(bytes(data)))
    return wad.lumps, wad.type_name


def read_container(path: Union[str, os.PathLike]) -> Tuple[Directory, str]:
    """Decode a container file from disk. Returns ``(lumps, "iwad"|"pwad")``."""
    with open(path, "rb") as f:
        wad = decode(f)
    return wad.lumps, wad.type_name
