"""
Pydantic models for vocabulary tables, relations and study selections.

These models define the structure of the caller-supplied library document
and the selection descriptor handed to the session queue builder.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from core.scheduling.constants import (
    LEVEL_THRESHOLDS,
    MAX_LEVEL,
    MAX_SORT_RULES,
    WORD_COUNT_OPTIONS,
    Rating,
)


class StudyMode(str, Enum):
    """Question formats a relation can be studied in."""
    MCQ = "MCQ"
    TF = "TF"
    TYPING = "Typing"
    SCRAMBLED = "Scrambled"


class SessionType(str, Enum):
    """Session runners available to the user."""
    FLASHCARD = "flashcard"
    SCRAMBLE = "scramble"
    THEATER = "theater"
    QUIZ = "quiz"


class WordSelection(str, Enum):
    """How the queue's items are picked."""
    AUTOMATIC = "automatic"
    MANUAL = "manual"


class CompositionPolicy(str, Enum):
    """How many items each selected table contributes."""
    HOLISTIC = "holistic"      # One pool across all tables
    BALANCED = "balanced"      # Even split across tables
    PERCENTAGE = "percentage"  # User-assigned share per table


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortKeyKind(str, Enum):
    """Selectable sort keys; COLUMN sorts by a named row column."""
    PRIORITY_SCORE = "Priority Score"
    RANK_POINT = "Rank Point"
    SUCCESS_RATE = "Success Rate"
    LEVEL = "Level"
    LAST_PRACTICED = "Last Practiced"
    PASSED1 = "Passed1"
    PASSED2 = "Passed2"
    FAILED = "Failed"
    TOTAL_ATTEMPT = "Attempts"
    IN_QUEUE = "In Queue Count"
    QUIT_QUEUE = "Quit Queue"
    COLUMN = "Column"


def level_for_rank_point(rank_point: int) -> int:
    """Map a rank point onto the 1-6 level ladder."""
    for upper_bound, level in LEVEL_THRESHOLDS:
        if rank_point <= upper_bound:
            return level
    return MAX_LEVEL


# ---- Stats ----

class RatingCounts(BaseModel):
    """Per-rating counters for flashcard or scramble reviews."""
    again: int = Field(default=0, ge=0)
    hard: int = Field(default=0, ge=0)
    good: int = Field(default=0, ge=0)
    easy: int = Field(default=0, ge=0)
    perfect: int = Field(default=0, ge=0)

    def incremented(self, rating: Rating) -> RatingCounts:
        """Return a copy with exactly one bucket increased by 1."""
        bucket = Rating(rating).value
        return self.model_copy(update={bucket: getattr(self, bucket) + 1})

    def plus(self, other: RatingCounts) -> RatingCounts:
        return RatingCounts(
            again=self.again + other.again,
            hard=self.hard + other.hard,
            good=self.good + other.good,
            easy=self.easy + other.easy,
            perfect=self.perfect + other.perfect,
        )

    def get(self, rating: Rating) -> int:
        return getattr(self, Rating(rating).value)

    @property
    def total(self) -> int:
        return self.again + self.hard + self.good + self.easy + self.perfect


class Stats(BaseModel):
    """
    Performance counters for one item across all session types.

    Quiz-derived values (attempts, rates, rank point, level) are computed
    from the pass/fail counters so they can never drift apart.
    """
    # Quiz
    passed1: int = Field(default=0, ge=0)
    passed2: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)

    # Queue bookkeeping
    in_queue: int = Field(default=0, ge=0)
    quit_queue: bool = False
    last_practice_date: Optional[datetime] = None

    # Flashcard
    flashcard_ratings: RatingCounts = Field(default_factory=RatingCounts)
    is_flashcard_reviewed: bool = False
    flashcard_encounters: int = Field(default=0, ge=0)

    # Scramble
    scramble_ratings: RatingCounts = Field(default_factory=RatingCounts)
    is_scramble_reviewed: bool = False
    scramble_encounters: int = Field(default=0, ge=0)

    # Theater
    theater_encounters: int = Field(default=0, ge=0)

    @property
    def total_attempt(self) -> int:
        return self.passed1 + self.passed2 + self.failed

    @property
    def failure_rate(self) -> float:
        attempts = self.total_attempt
        return self.failed / attempts if attempts > 0 else 0.0

    @property
    def success_rate(self) -> float:
        return 1.0 - self.failure_rate

    @property
    def rank_point(self) -> int:
        return self.passed1 + self.passed2 - self.failed

    @property
    def level(self) -> int:
        return level_for_rank_point(self.rank_point)


# ---- Tables and Relations ----

class Item(BaseModel):
    """A single vocabulary row."""
    id: str
    cols: dict[str, str] = Field(default_factory=dict)
    stats: Stats = Field(default_factory=Stats)
    tags: list[str] = Field(default_factory=list)


class VocabTable(BaseModel):
    """A user table of vocabulary rows."""
    id: str
    name: str
    columns: list[str] = Field(default_factory=list)
    rows: list[Item] = Field(default_factory=list)
    total_flip_count: int = Field(default=0, ge=0)


class Relation(BaseModel):
    """
    Question/answer column mapping of one table.

    answer_cols may be empty for scramble-only relations.
    """
    id: str
    table_id: str
    name: str = ""
    question_cols: list[str] = Field(default_factory=list)
    answer_cols: list[str] = Field(default_factory=list)
    modes: list[StudyMode] = Field(default_factory=list)


class Library(BaseModel):
    """The caller-supplied document holding every table and relation."""
    tables: list[VocabTable] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)


# ---- Selection ----

class SortRule(BaseModel):
    """One cascading sort key."""
    kind: SortKeyKind
    column: Optional[str] = None
    direction: SortDirection = SortDirection.DESC

    @model_validator(mode="after")
    def _column_required(self) -> SortRule:
        if self.kind == SortKeyKind.COLUMN and not self.column:
            raise ValueError("COLUMN sort rules need a column name")
        return self


class StudySelection(BaseModel):
    """
    Everything the queue builder needs to know about what to study.

    word_count=None means the whole eligible pool (the flashcard, scramble
    and theater default).
    """
    session_type: SessionType = SessionType.FLASHCARD
    table_ids: list[str] = Field(default_factory=list)
    relation_ids: list[str] = Field(default_factory=list)

    word_selection: WordSelection = WordSelection.AUTOMATIC
    manual_item_ids: list[str] = Field(default_factory=list)

    composition: CompositionPolicy = CompositionPolicy.HOLISTIC
    word_count: Optional[int] = None
    sort_rules: list[SortRule] = Field(default_factory=list, max_length=MAX_SORT_RULES)
    per_table_sorts: dict[str, list[SortRule]] = Field(default_factory=dict)
    table_percentages: dict[str, float] = Field(default_factory=dict)

    study_modes: list[StudyMode] = Field(default_factory=list)
    random_relation: bool = False
    randomize_modes: bool = False

    min_split_size: int = Field(default=1, ge=1)  # Scramble: minimum words per sentence

    @field_validator("word_count")
    @classmethod
    def _known_word_count(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value not in WORD_COUNT_OPTIONS:
            raise ValueError(f"word_count must be one of {WORD_COUNT_OPTIONS}")
        return value

    @field_validator("per_table_sorts")
    @classmethod
    def _per_table_limit(cls, value: dict[str, list[SortRule]]) -> dict[str, list[SortRule]]:
        for table_id, rules in value.items():
            if len(rules) > MAX_SORT_RULES:
                raise ValueError(f"Table {table_id} has more than {MAX_SORT_RULES} sort rules")
        return value
