"""Relevance ranking for the floating search overlay.

Every recomputation is a full rescan of the candidate notes. Field scores are
additive (title 100, tag 50, content 10); the match type only records the
highest-priority field that matched and is used for decoration.

Match ranges are half-open ``(start, end)`` offsets, in code points, into the
original (not lower-cased) text.
"""

from __future__ import annotations

import html
import re
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from noty.app.models import Note

TITLE_SCORE = 100
TAG_SCORE = 50
CONTENT_SCORE = 10

MAX_RESULTS = 20
PREVIEW_LENGTH = 140
PREVIEW_CONTEXT_BEFORE = 30
PREVIEW_CONTEXT_AFTER = 90
ELLIPSIS = "..."

HIGHLIGHT_STYLE = "color: #D2691E; background-color: rgba(255, 215, 0, 0.2);"

Span = Tuple[int, int]


class MatchType(Enum):
    TITLE = "title"
    TAG = "tag"
    CONTENT = "content"


def _new_hit_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class SearchHit:
    """A note that matched the current query.

    Hits are recomputed on every query or candidate change and never stored.
    ``note`` is the caller's object, not a copy.
    """
    note: Note
    match_type: MatchType
    score: int
    title_range: Optional[Span] = None
    content_range: Optional[Span] = None
    query: str = ""
    id: str = field(default_factory=_new_hit_id, compare=False)

    @property
    def preview(self) -> str:
        """Snippet of the note content around the first content match.

        Without a recorded content match this is the head of the content.
        """
        content = self.note.content
        if self.content_range is None:
            head = content[:PREVIEW_LENGTH]
            return head + ELLIPSIS if len(content) > PREVIEW_LENGTH else head

        match_start, match_end = self.content_range
        start = max(0, match_start - PREVIEW_CONTEXT_BEFORE)
        end = min(len(content), match_end + PREVIEW_CONTEXT_AFTER)
        prefix = ELLIPSIS if start > 0 else ""
        suffix = ELLIPSIS if end < len(content) else ""
        return prefix + content[start:end] + suffix

    def preview_html(self) -> str:
        """Preview escaped for rich text, with query occurrences highlighted."""
        text = self.preview
        if not self.query:
            return html.escape(text)

        parts: List[str] = []
        last = 0
        for match in re.finditer(re.escape(self.query), text, re.IGNORECASE):
            parts.append(html.escape(text[last:match.start()]))
            parts.append(f'<b style="{HIGHLIGHT_STYLE}">{html.escape(match.group(0))}</b>')
            last = match.end()
        parts.append(html.escape(text[last:]))
        return "".join(parts)


def normalize_query(query: Optional[str]) -> str:
    """Trim and lower-case a raw query; whitespace-only input becomes ''."""
    if not query:
        return ""
    return query.strip().lower()


def _find_span(text: str, needle: str) -> Optional[Span]:
    """Locate the first case-insensitive occurrence of ``needle`` in ``text``.

    ``needle`` must already be lower-cased and non-empty.
    """
    lowered = text.lower()
    if len(lowered) == len(text):
        start = lowered.find(needle)
        if start < 0:
            return None
        return (start, start + len(needle))

    # Some code points lower-case to several; map lowered offsets back.
    owners: List[int] = []
    for index, ch in enumerate(text):
        owners.extend([index] * len(ch.lower()))
    start = lowered.find(needle)
    if start < 0:
        return None
    return (owners[start], owners[start + len(needle) - 1] + 1)


def _score(note: Note, needle: str) -> Optional[SearchHit]:
    score = 0
    match_type = MatchType.CONTENT
    content_range: Optional[Span] = None

    title_range = _find_span(note.title, needle)
    if title_range is not None:
        score += TITLE_SCORE
        match_type = MatchType.TITLE

    if any(needle in tag.lower() for tag in note.tags):
        score += TAG_SCORE
        if match_type is MatchType.CONTENT:
            match_type = MatchType.TAG

    if needle in note.content.lower():
        score += CONTENT_SCORE
        if match_type is MatchType.CONTENT:
            content_range = _find_span(note.content, needle)

    if score <= 0:
        return None
    return SearchHit(
        note=note,
        match_type=match_type,
        score=score,
        title_range=title_range,
        content_range=content_range,
        query=needle,
    )


def score_note(note: Note, query: str) -> Optional[SearchHit]:
    """Score a single note against a raw query. Returns None when nothing matched."""
    needle = normalize_query(query)
    if not needle:
        return None
    return _score(note, needle)


def rank_notes(notes: Iterable[Note], query: str, limit: int = MAX_RESULTS) -> List[SearchHit]:
    """Score every note and return the best ``limit`` hits.

    Order is score descending, then modification date descending. Exact ties
    keep candidate order.
    """
    needle = normalize_query(query)
    if not needle:
        return []

    hits = [hit for hit in (_score(note, needle) for note in notes) if hit is not None]
    # Naive dates count as local time so they order against aware ones.
    hits.sort(key=lambda hit: (hit.score, hit.note.date.timestamp()), reverse=True)
    return hits[:limit]
