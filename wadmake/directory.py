from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import ArgumentError


@dataclass
class Lump:
    name: str
    data: bytes = b""


def _check_name(name) -> str:
    if not isinstance(name, str):
        raise ArgumentError("name", f"must be a string, not {type(name).__name__}")
    return name


def _check_data(data) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise ArgumentError("data", f"must be bytes, not {type(data).__name__}")
    return bytes(data)


def _check_index(index) -> int:
    # bool is an int subclass; reject it so True/False never address a lump
    if not isinstance(index, int) or isinstance(index, bool):
        raise ArgumentError("index", f"must be an integer, not {type(index).__name__}")
    return index


class Directory:
    """Ordered sequence of lumps, in on-disk order.

    Storage is 0-based. The caller-facing methods (find, get, insert, remove,
    set) take 1-based positions and bounds-check every one of them; only
    ``get`` and ``find`` are tolerant of out-of-range positions.

    Names may repeat; lookups return the first match from the starting point.
    """

    def __init__(self, lumps: Optional[Iterable[Lump]] = None):
        self._lumps: List[Lump] = []
        for lump in lumps if lumps is not None else ():
            if not isinstance(lump, Lump):
                raise ArgumentError("lumps", f"must contain Lump objects, not {type(lump).__name__}")
            self._lumps.append(Lump(_check_name(lump.name), _check_data(lump.data)))

    def __len__(self) -> int:
        return len(self._lumps)

    def __iter__(self) -> Iterator[Lump]:
        return iter(self._lumps)

    def __getitem__(self, i: int) -> Lump:
        return self._lumps[i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Directory):
            return NotImplemented
        return self._lumps == other._lumps

    def __repr__(self) -> str:
        return f"Directory({self._lumps!r})"

    def __str__(self) -> str:
        return self.to_display_string()

    def length(self) -> int:
        return len(self._lumps)

    def search(self, name: str, start: int = 0) -> Optional[int]:
        """Return the 0-based index of the first lump called ``name`` at or
        after ``start``, or None. Comparison is exact and case-sensitive."""
        if start < 0:
            raise ArgumentError("start", "must not be negative")
        for i in range(start, len(self._lumps)):
            if self._lumps[i].name == name:
                return i
        return None

    def find(self, name: str, start: int = 1) -> Optional[int]:
        """Find a lump by name, optionally starting in the middle.

        ``start`` is 1-based; 0 means the beginning and negative values count
        back from the end (-1 is the last lump). A start past the end is not
        an error, the lump is simply not found.

        Returns:
            The 1-based position of the lump, or None.
        """
        _check_name(name)
        start = _check_index(start)
        if start == 0:
            start = 1
        elif start < 0:
            start = len(self._lumps) + start + 1
            # Counting back past the first lump searches everything.
            if start < 1:
                start = 1

        if start > len(self._lumps):
            return None

        index = self.search(name, start - 1)
        if index is None:
            return None
        return index + 1

    def get(self, index: int) -> Optional[Tuple[str, bytes]]:
        """Return ``(name, data)`` at 1-based ``index``, or None if there is
        no lump there."""
        index = _check_index(index)
        if index < 1 or index > len(self._lumps):
            return None
        lump = self._lumps[index - 1]
        return lump.name, lump.data

    def insert(self, *args) -> None:
        """Insert a lump.

        ``insert(index, name, data)`` places the lump before the 1-based
        position ``index``, which must name an existing lump.
        ``insert(name, data)`` appends to the end and always succeeds.
        """
        if len(args) == 3:
            index, name, data = args
            index = _check_index(index)
            if index < 1 or index > len(self._lumps):
                raise ArgumentError("index", "index out of range")
            self._lumps.insert(index - 1, Lump(_check_name(name), _check_data(data)))
        elif len(args) == 2:
            self.append(*args)
        else:
            raise TypeError(f"insert() takes 2 or 3 arguments ({len(args)} given)")

    def append(self, name: str, data: bytes) -> None:
        self._lumps.append(Lump(_check_name(name), _check_data(data)))

    def remove(self, index: int) -> None:
        index = _check_index(index)
        if index < 1 or index > len(self._lumps):
            raise ArgumentError("index", "index out of range")
        del self._lumps[index - 1]

    def set(self, index: int, name: Optional[str] = None, data: Optional[bytes] = None) -> None:
        """Replace the lump at 1-based ``index``.

        Either field may be omitted (None) to keep the existing value, which
        is how a lump is renamed or has only its data swapped out. Omitting
        both is an error.
        """
        index = _check_index(index)
        if index < 1 or index > len(self._lumps):
            raise ArgumentError("index", "index out of range")
        if name is None and data is None:
            raise ArgumentError("name", "name or data is required")

        if name is not None and data is not None:
            self._lumps[index - 1] = Lump(_check_name(name), _check_data(data))
            return

        current = self._lumps[index - 1]
        self._lumps[index - 1] = Lump(
            _check_name(name) if name is not None else current.name,
            _check_data(data) if data is not None else current.data,
        )

    def to_display_string(self) -> str:
        count = len(self._lumps)
        return f"Lumps: {id(self):#x}, {count} {'lump' if count == 1 else 'lumps'}"


def create_directory() -> Directory:
    return Directory()
