"""Note model shared between the note store and the search core."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List


def _new_note_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Note:
    """A single note card.

    ``date`` is the last modification time and is what search uses to break
    score ties, newest first.
    """
    title: str
    content: str = ""
    tags: List[str] = field(default_factory=list)
    date: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=_new_note_id)

    def touch(self) -> None:
        """Mark the note as modified now."""
        self.date = datetime.now()
