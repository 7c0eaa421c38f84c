"""Description result value."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Dict

DIRTY_SUFFIX = "-dirty"

DESCRIPTION_PATTERN = re.compile(
    r"^(?P<tag>.*)-(?P<distance>\d+)-g(?P<hash>[0-9a-f]+)(?P<dirty>-dirty)?$"
)


@dataclass(frozen=True)
class Description:
    """Outcome of describing one revision.

    ``show_dirty`` controls rendering only; ``dirty`` records the observed
    working tree state.
    """

    tag: str
    distance: int
    abbrev_hash: str
    dirty: bool = False
    show_dirty: bool = False

    def __post_init__(self) -> None:
        if self.distance < 0:
            raise ValueError("distance must be non-negative")

    def render(self) -> str:
        suffix = DIRTY_SUFFIX if (self.show_dirty and self.dirty) else ""
        return f"{self.tag}-{self.distance}-g{self.abbrev_hash}{suffix}"

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["description"] = self.render()
        return data

    @classmethod
    def parse(cls, text: str) -> "Description":
        """Parse ``<tag>-<distance>-g<hash>[-dirty]``.

        A trailing ``-dirty`` sets both ``dirty`` and ``show_dirty``.
        """
        match = DESCRIPTION_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(f"Not a revision description: {text!r}")
        dirty = match.group("dirty") is not None
        return cls(
            tag=match.group("tag"),
            distance=int(match.group("distance")),
            abbrev_hash=match.group("hash"),
            dirty=dirty,
            show_dirty=dirty,
        )
