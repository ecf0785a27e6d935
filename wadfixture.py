from __future__ import annotations

import struct
from pathlib import Path
from typing import List, Tuple


# One Doom-format map: a zero-sized marker followed by its ten data lumps.
MAP_LUMPS: List[Tuple[str, int]] = [
    ("MAP01", 0),
    ("THINGS", 30),  # 10 bytes per thing
    ("LINEDEFS", 56),
    ("SIDEDEFS", 120),
    ("VERTEXES", 16),
    ("SEGS", 48),
    ("SSECTORS", 8),
    ("NODES", 28),
    ("SECTORS", 26),
    ("REJECT", 1),
    ("BLOCKMAP", 40),  # exactly 8 characters, stored without a terminator
]

# Junk filepos for the MAP01 marker; zero-sized lumps never dereference it.
MARKER_FILEPOS = 0x7FFFFFF0

EXPECTED_TWO_LUMPS = bytes(
    [
        # "PWAD"
        0x50, 0x57, 0x41, 0x44,
        # Number of lumps
        0x2, 0x0, 0x0, 0x0,
        # Location of infotable
        0x1F, 0x0, 0x0, 0x0,
        # "hissy" (Data start)
        0x68, 0x69, 0x73, 0x73, 0x79,
        # "god only knows"
        0x67, 0x6F, 0x64, 0x20, 0x6F, 0x6E, 0x6C, 0x79, 0x20, 0x6B, 0x6E, 0x6F, 0x77, 0x73,
        # Lump location (Infotable start)
        0xC, 0x0, 0x0, 0x0,
        # Lump size
        0x5, 0x0, 0x0, 0x0,
        # "TEST"
        0x54, 0x45, 0x53, 0x54, 0x0, 0x0, 0x0, 0x0,
        # Lump location
        0x11, 0x0, 0x0, 0x0,
        # Lump size
        0xE, 0x0, 0x0, 0x0,
        # "TESTTWO"
        0x54, 0x45, 0x53, 0x54, 0x54, 0x57, 0x4F, 0x0,
    ]
)


def lump_bytes(index: int, size: int) -> bytes:
    return bytes((index * 31 + k) & 0xFF for k in range(size))


def build_map_wad(ident: bytes = b"PWAD") -> bytes:
    """Hand-assemble the map container.

    The infotable sits directly after the header and the lump data follows
    it in reverse directory order, so file order and infotable order differ.
    """
    count = len(MAP_LUMPS)
    data_start = 12 + 16 * count

    positions = {}
    blob = bytearray()
    for i in reversed(range(count)):
        name, size = MAP_LUMPS[i]
        positions[i] = data_start + len(blob)
        blob += lump_bytes(i, size)

    entries = bytearray()
    for i, (name, size) in enumerate(MAP_LUMPS):
        filepos = positions[i] if size else MARKER_FILEPOS
        entries += struct.pack("<ii8s", filepos, size, name.encode("ascii"))

    return struct.pack("<4sii", ident, count, 12) + bytes(entries) + bytes(blob)


def write_map_wad(path: Path, ident: bytes = b"PWAD") -> Path:
    path.write_bytes(build_map_wad(ident))
    return path


def raw_wad(ident: bytes, entries: List[Tuple[int, int, bytes]], data: bytes = b"", infotableofs: int | None = None) -> bytes:
    """Assemble a container from raw (filepos, size, name) entries placed
    after ``data``; nothing is validated."""
    if infotableofs is None:
        infotableofs = 12 + len(data)
    table = b"".join(struct.pack("<ii8s", filepos, size, name) for filepos, size, name in entries)
    return struct.pack("<4sii", ident, len(entries), infotableofs) + data + table
