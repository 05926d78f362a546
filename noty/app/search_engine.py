"""Debounced search state behind the floating search overlay.

The engine lives on the GUI thread. Query edits restart a single-shot timer;
candidate replacements from the note store recompute right away.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import Iterable, List, Optional, Tuple

from PySide6.QtCore import QObject, QTimer, Signal

from noty.app import config
from noty.app.models import Note
from noty.app.ranking import SearchHit, rank_notes

logger = logging.getLogger(__name__)


def _debug_enabled(var_name: str) -> bool:
    """Check if a debug flag is enabled."""
    return os.getenv(var_name, "0") not in ("0", "false", "False", "", None)


class SearchEngine(QObject):
    """Holds the query and candidate notes and publishes ranked hits."""

    resultsChanged = Signal(object)  # list[SearchHit], best first

    def __init__(
        self,
        parent=None,
        debounce_ms: Optional[int] = None,
        max_results: Optional[int] = None,
    ) -> None:
        super().__init__(parent)
        if debounce_ms is None:
            debounce_ms = config.load_search_debounce_ms()
        if max_results is None:
            max_results = config.load_search_max_results()

        self._query = ""
        self._candidates: Tuple[Note, ...] = ()
        self._results: Tuple[SearchHit, ...] = ()
        self._max_results = config.clamp_search_max_results(max_results)
        self._trace = _debug_enabled("NOTY_DEBUG_SEARCH")

        self._debounce_timer = QTimer(self)
        self._debounce_timer.setSingleShot(True)
        self._debounce_timer.setInterval(config.clamp_search_debounce_ms(debounce_ms))
        self._debounce_timer.timeout.connect(self._on_debounce_timeout)

    @property
    def query(self) -> str:
        return self._query

    @property
    def candidates(self) -> Tuple[Note, ...]:
        return self._candidates

    @property
    def results(self) -> Tuple[SearchHit, ...]:
        return self._results

    @property
    def filtered_notes(self) -> List[Note]:
        """Notes of the current hits, in ranked order."""
        return [hit.note for hit in self._results]

    @property
    def debounce_ms(self) -> int:
        return self._debounce_timer.interval()

    @property
    def max_results(self) -> int:
        return self._max_results

    def set_debounce_ms(self, ms: int) -> None:
        self._debounce_timer.setInterval(config.clamp_search_debounce_ms(ms))

    def set_query(self, text: str) -> None:
        """Update the query from the search field.

        Repeating the current value is ignored. A distinct value restarts the
        debounce wait and cancels any pending recomputation.
        """
        text = text or ""
        if text == self._query:
            return
        self._query = text
        # Restart debounce timer
        self._debounce_timer.stop()
        self._debounce_timer.start()

    def set_candidates(self, notes: Iterable[Note]) -> None:
        """Replace the candidate notes and recompute without waiting.

        A pending query timer is left running.
        """
        self._candidates = tuple(notes or ())
        self._recompute(self._candidates, self._query)

    def has_pending_search(self) -> bool:
        return self._debounce_timer.isActive()

    def flush(self) -> None:
        """Run a pending query recomputation immediately."""
        if not self._debounce_timer.isActive():
            return
        self._debounce_timer.stop()
        self._recompute(self._candidates, self._query)

    def clear(self) -> None:
        """Reset the query and publish an empty result list."""
        self._debounce_timer.stop()
        self._query = ""
        self._publish(())

    def _on_debounce_timeout(self) -> None:
        self._recompute(self._candidates, self._query)

    def _recompute(self, candidates: Tuple[Note, ...], query: str) -> None:
        started = time.perf_counter()
        hits = rank_notes(candidates, query, limit=self._max_results)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            "Search %r over %d notes: %d hits in %.1fms",
            query,
            len(candidates),
            len(hits),
            elapsed_ms,
        )
        if self._trace:
            print(f"[SearchEngine] query={query!r} notes={len(candidates)} hits={len(hits)} ({elapsed_ms:.1f}ms)", file=sys.stderr)
        self._publish(tuple(hits))

    def _publish(self, hits: Tuple[SearchHit, ...]) -> None:
        self._results = hits
        self.resultsChanged.emit(list(hits))
