"""
Fuzzy Matcher

This module wraps `rapidfuzz` into the match engine used by the search
controller. Scoring follows the Fuse.js model that the site's search page
was originally configured for:

- Per field value, the best approximate substring alignment is found with
  `rapidfuzz.fuzz.partial_ratio_alignment`.
- The alignment's error (1 - similarity) grows by the share of the query a
  shorter field value cannot cover, and is penalised by how far the match
  starts from `location`, scaled by `distance`.
- A field value matches when its score is within `threshold`.
- A record's score combines its matching fields, weighted by key weight.

Key Properties
--------------
- Built once from an immutable index; never mutated by queries
- Queries are treated as literal text (no pattern syntax)
- Deterministic ordering: ties keep index order
"""

from __future__ import annotations

import sys
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from .models import MatchOptions, QueryResult, SearchHit, SearchRecord


# A zero score would zero out the weighted product; Fuse uses the same floor.
_EPSILON = sys.float_info.epsilon


# ---------------------------------------------------------------------
# Matcher
# ---------------------------------------------------------------------

class FuzzyMatcher:
    """
    Approximate matcher over a fixed collection of SearchRecords.
    """

    def __init__(
        self,
        records: Sequence[SearchRecord],
        options: Optional[MatchOptions] = None,
    ) -> None:
        """
        Build a matcher over `records`.

        Parameters
        ----------
        records : Sequence[SearchRecord]
            The search index. Copied into an immutable tuple.

        options : Optional[MatchOptions]
            Matcher configuration. Defaults to MatchOptions().
        """
        self._options = options or MatchOptions()
        self._records: Tuple[SearchRecord, ...] = tuple(records)

        total_weight = sum(k.weight for k in self._options.keys)
        self._weights: Dict[str, float] = {
            k.name: k.weight / total_weight for k in self._options.keys
        }

        self._prepared: List[Dict[str, Tuple[str, ...]]] = [
            self._prepare_record(r) for r in self._records
        ]

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def options(self) -> MatchOptions:
        return self._options

    @property
    def records(self) -> Tuple[SearchRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Internal Helpers
    # ------------------------------------------------------------------

    def _normalize(self, text: str) -> str:
        return text if self._options.is_case_sensitive else text.lower()

    def _prepare_record(self, record: SearchRecord) -> Dict[str, Tuple[str, ...]]:
        """
        Extract and normalize the configured key values of one record.
        """
        prepared: Dict[str, Tuple[str, ...]] = {}

        for name in self._weights:
            raw = getattr(record, name, None)
            if raw is None:
                continue

            if isinstance(raw, (list, tuple, set, frozenset)):
                values = [str(v) for v in raw if v is not None]
            else:
                values = [str(raw)]

            values = [self._normalize(v) for v in values if v]
            if values:
                prepared[name] = tuple(values)

        return prepared

    def _proximity(self, start: int) -> float:
        if self._options.ignore_location:
            return 0.0

        offset = abs(start - self._options.location)
        if not self._options.distance:
            return 0.0 if offset == 0 else 1.0

        return offset / self._options.distance

    def _candidate_windows(
        self,
        pattern: str,
        text: str,
    ) -> Iterator[Tuple[str, int]]:
        """
        Yield (window, offset) pairs to align the pattern against.

        The whole text comes first. When location matters, the span a match
        can start in without exceeding the threshold on proximity alone is
        also tried, so a weaker match near `location` is not hidden by a
        stronger one further away.
        """
        yield text, 0

        if self._options.ignore_location:
            return

        reach = int(self._options.threshold * self._options.distance)
        lo = max(0, self._options.location - reach)
        hi = self._options.location + reach + len(pattern)

        if lo < len(text) and (lo > 0 or hi < len(text)):
            yield text[lo:hi], lo

    def _score_alignment(self, pattern: str, window: str, offset: int) -> Optional[float]:
        alignment = fuzz.partial_ratio_alignment(pattern, window)
        if alignment is None:
            return None

        matched_length = alignment.dest_end - alignment.dest_start
        if matched_length < self._options.min_match_char_length:
            return None

        error = 1.0 - alignment.score / 100.0

        # A field shorter than the query can only cover part of it; the
        # uncovered share of the query counts as mismatch.
        if len(window) < len(pattern):
            error += (len(pattern) - matched_length) / len(pattern)

        return min(1.0, error + self._proximity(offset + alignment.dest_start))

    def _score_value(self, pattern: str, text: str) -> Optional[float]:
        """
        Score one field value against the pattern.

        Returns None when the value does not match within the threshold.
        """
        scores = [
            s for s in (
                self._score_alignment(pattern, window, offset)
                for window, offset in self._candidate_windows(pattern, text)
            )
            if s is not None
        ]
        if not scores:
            return None

        score = min(scores)
        if score > self._options.threshold:
            return None

        return score

    def _score_record(
        self,
        pattern: str,
        prepared: Dict[str, Tuple[str, ...]],
    ) -> Optional[float]:
        total = 1.0
        matched = False

        for name, values in prepared.items():
            scores = [
                s for s in (self._score_value(pattern, v) for v in values)
                if s is not None
            ]
            if not scores:
                continue

            matched = True
            total *= max(min(scores), _EPSILON) ** self._weights[name]

        return total if matched else None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def search(self, query: str) -> QueryResult:
        """
        Run a fuzzy search for `query` across all configured keys.

        Returns
        -------
        QueryResult
            Matching records, best first when `should_sort` is enabled,
            otherwise in index order.
        """
        if not query:
            return []

        pattern = self._normalize(query)
        hits: List[SearchHit] = []

        for record, prepared in zip(self._records, self._prepared):
            score = self._score_record(pattern, prepared)
            if score is None:
                continue
            hits.append(SearchHit(record=record, score=min(1.0, score)))

        if self._options.should_sort:
            # sorted() is stable, so equal scores keep index order
            hits = sorted(hits, key=lambda h: h.score)

        return hits
