from __future__ import annotations

from dataclasses import dataclass, field

from .constants import WAD_TYPE_PWAD, WAD_TYPE_NAMES
from .directory import Directory


@dataclass
class Wad:
    """A container: its kind (IWAD/PWAD) and exactly one directory.

    The kind is metadata only; nothing here merges a PWAD over an IWAD.
    """

    wad_type: int = WAD_TYPE_PWAD
    lumps: Directory = field(default_factory=Directory)

    @property
    def type_name(self) -> str:
        """``"iwad"`` or ``"pwad"``."""
        try:
            return WAD_TYPE_NAMES[self.wad_type]
        except KeyError:
            raise ValueError(f"unknown wad type: {self.wad_type}")
