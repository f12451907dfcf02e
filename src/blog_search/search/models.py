"""
Search Data Models

This module defines the canonical data model consumed and produced by the
search subsystem:

- SearchRecord: one entry of the generated `index.json` artifact
- MatchOptions: Fuse-style configuration for the fuzzy matcher
- SearchHit / QueryResult: ranked output of a single query

Each SearchRecord corresponds to ONE published page. Records are immutable
once parsed; the index they belong to is never mutated after load.
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------
# Index Records
# ---------------------------------------------------------------------

class SearchRecord(BaseModel):
    """
    A single page entry from the site's JSON search index.

    `permalink` is the identity key. Every other field is optional so that
    a page with a missing title still renders (as an empty link) instead
    of breaking the whole index.
    """

    title: Optional[str] = Field(
        default=None,
        description="Display title of the page.",
    )

    permalink: str = Field(
        ...,
        min_length=1,
        description="Absolute or root-relative URL of the page.",
    )

    summary: Optional[str] = Field(
        default=None,
        description="Short text excerpt.",
    )

    content: Optional[str] = Field(
        default=None,
        description="Full plain-text body. Used for matching only.",
    )

    tags: List[str] = Field(
        default_factory=list,
        description="Taxonomy tags attached to the page.",
    )

    model_config = ConfigDict(
        extra="ignore",         # Hugo templates often add date/section/etc.
        frozen=True,
    )

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags_to_empty(cls, value):
        # Hugo emits `"tags": null` for untagged pages
        return [] if value is None else value


# ---------------------------------------------------------------------
# Matcher Configuration
# ---------------------------------------------------------------------

class MatchKey(BaseModel):
    """
    A record field to match against, with its relative weight.
    """

    name: str = Field(..., min_length=1)
    weight: float = Field(default=1.0, gt=0.0)

    model_config = ConfigDict(extra="forbid", frozen=True)


DEFAULT_KEYS = ("title", "content", "tags")


class MatchOptions(BaseModel):
    """
    Fuzzy matcher configuration.

    Field names accept the Fuse.js spelling used in Hugo's
    `[params.fuseOpts]` table (e.g. `isCaseSensitive`, `minMatchCharLength`)
    as well as their snake_case names. Options the matcher does not use
    (`useExtendedSearch`, `findAllMatches`, ...) are ignored.
    """

    keys: List[MatchKey] = Field(
        default_factory=lambda: [MatchKey(name=k) for k in DEFAULT_KEYS],
        min_length=1,
    )

    threshold: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        description="0.0 requires a perfect match, 1.0 matches anything.",
    )

    is_case_sensitive: bool = False
    should_sort: bool = True
    # Whether API results expose the relevance score
    include_score: bool = True

    location: int = Field(
        default=0,
        ge=0,
        description="Character offset where a match is expected to start.",
    )

    distance: int = Field(
        default=100,
        ge=0,
        description="How far from `location` a match may drift before it "
                    "scores as a complete mismatch.",
    )

    ignore_location: bool = False

    min_match_char_length: int = Field(default=0, ge=0)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("keys", mode="before")
    @classmethod
    def _coerce_keys(cls, value):
        if not isinstance(value, (list, tuple)):
            return value

        keys: List[Union[MatchKey, dict]] = []
        for item in value:
            if isinstance(item, str):
                keys.append({"name": item})
            else:
                keys.append(item)
        return keys

    @property
    def key_names(self) -> List[str]:
        return [k.name for k in self.keys]


# ---------------------------------------------------------------------
# Query Output
# ---------------------------------------------------------------------

class SearchHit(BaseModel):
    """
    One ranked match: the record and its relevance score.

    Score is in [0, 1]; lower is better and 0 is a perfect match.
    """

    record: SearchRecord
    score: float = Field(..., ge=0.0, le=1.0)

    model_config = ConfigDict(extra="forbid", frozen=True)


QueryResult = List[SearchHit]
