from __future__ import annotations

_UNSAFE = set('/\\:*?"<>|')


def lump_filename(name: str, ext: str = ".lmp") -> str:
    """Map a lump name to a single safe file name.

    Rules:
    - Replace path separators, characters Windows rejects, and control
      characters with '_'
    - An empty name, '.' or '..' becomes underscores
    """
    safe = "".join("_" if (c in _UNSAFE or ord(c) < 32) else c for c in name)
    if safe in ("", ".", ".."):
        safe = "_" * max(len(safe), 1)
    return safe + ext
