"""
Selection validation and rating counters.
"""

import pytest
from pydantic import ValidationError

from core.scheduling import Rating
from core.schemas import (
    RatingCounts,
    SessionType,
    SortKeyKind,
    SortRule,
    StudyMode,
    StudySelection,
)


class TestStudySelection:
    def test_defaults(self):
        selection = StudySelection()
        assert selection.session_type == SessionType.FLASHCARD
        assert selection.word_count is None
        assert selection.min_split_size == 1

    @pytest.mark.parametrize("word_count", [5, 8, 13, 21])
    def test_allowed_word_counts(self, word_count):
        assert StudySelection(word_count=word_count).word_count == word_count

    @pytest.mark.parametrize("word_count", [0, 4, 10, 100])
    def test_rejects_other_word_counts(self, word_count):
        with pytest.raises(ValidationError):
            StudySelection(word_count=word_count)

    def test_at_most_three_sort_rules(self):
        rule = SortRule(kind=SortKeyKind.RANK_POINT)
        StudySelection(sort_rules=[rule] * 3)
        with pytest.raises(ValidationError):
            StudySelection(sort_rules=[rule] * 4)

    def test_per_table_sort_limit(self):
        rule = SortRule(kind=SortKeyKind.LEVEL)
        with pytest.raises(ValidationError):
            StudySelection(per_table_sorts={"t": [rule] * 4})

    def test_column_rule_needs_column(self):
        with pytest.raises(ValidationError):
            SortRule(kind=SortKeyKind.COLUMN)
        assert SortRule(kind="Column", column="Dutch").column == "Dutch"

    def test_min_split_size_positive(self):
        with pytest.raises(ValidationError):
            StudySelection(min_split_size=0)

    def test_accepts_string_values(self):
        selection = StudySelection(session_type="quiz", study_modes=["MCQ", "Typing"])
        assert selection.session_type == SessionType.QUIZ
        assert selection.study_modes == [StudyMode.MCQ, StudyMode.TYPING]


class TestRatingCounts:
    def test_incremented_returns_copy(self):
        counts = RatingCounts()
        bumped = counts.incremented(Rating.HARD).incremented("hard")
        assert counts.total == 0
        assert bumped.hard == 2
        assert bumped.get(Rating.HARD) == 2

    def test_plus(self):
        total = RatingCounts(again=1, perfect=2).plus(RatingCounts(again=3, good=1))
        assert total == RatingCounts(again=4, good=1, perfect=2)
        assert total.total == 7

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            RatingCounts(again=-1)
