"""
WADmake — read, write, and script WAD containers.

A WAD bundles named binary resources ("lumps") into one file: a 12-byte
header, the lump data, and an infotable of (filepos, size, name) entries.

- Decoder and encoder for IWAD and PWAD containers with strict validation
  of untrusted input (wadmake.reader / wadmake.writer)
- In-memory lump directory with 1-based find/get/insert/remove/set
  (wadmake.directory)
- Scripting environment and interactive shell (wadmake.shell)
- Listing, info, extraction, and packing via CLI (wadmake.cli)
"""

__version__ = "0.1"

__all__ = [
    "constants",
    "errors",
    "directory",
    "wad",
    "reader",
    "writer",
    "pathutil",
    "shell",
    "cli",
]
