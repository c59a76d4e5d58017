"""
Rating-keyed requeue engine.
"""

import random

import pytest

from core.schemas import Item, Relation
from core.scheduling import REQUEUE_OFFSETS, Rating, requeue, requeue_offset
from core.session_builders.pool_types import SessionCard

RELATION = Relation(id="r", table_id="t", question_cols=["Dutch"], answer_cols=["English"])


def _queue(ids: str) -> list[SessionCard]:
    return [SessionCard(item=Item(id=i, cols={"Dutch": i}), table_id="t", relation=RELATION) for i in ids]


def _ids(queue: list[SessionCard]) -> str:
    return "".join(card.item_id for card in queue)


class TestOffsets:
    def test_fibonacci_offsets(self):
        assert [requeue_offset(r) for r in Rating] == [3, 5, 8, 13, 21]
        assert REQUEUE_OFFSETS[Rating.AGAIN] < REQUEUE_OFFSETS[Rating.PERFECT]

    def test_accepts_rating_values(self):
        assert requeue_offset("good") == 8


class TestRequeue:
    def test_again_moves_three_on(self):
        queue, index = requeue(_queue("ABCDE"), 0, Rating.AGAIN)
        assert _ids(queue) == "BCDAE"
        assert index == 0

    def test_offset_past_end_goes_last(self):
        queue, index = requeue(_queue("ABCDE"), 2, Rating.GOOD)
        assert _ids(queue) == "ABDEC"
        assert queue[index].item_id == "D"

    def test_last_card_wraps_cursor(self):
        queue, index = requeue(_queue("AB"), 1, Rating.PERFECT)
        assert _ids(queue) == "AB"
        assert index == 0

    def test_single_card(self):
        queue, index = requeue(_queue("A"), 0, Rating.HARD)
        assert _ids(queue) == "A"
        assert index == 0

    def test_empty_queue(self):
        assert requeue([], 0, Rating.GOOD) == ([], 0)

    def test_input_not_mutated(self):
        original = _queue("ABCDE")
        snapshot = list(original)
        requeue(original, 0, Rating.AGAIN)
        assert original == snapshot
        assert original[0].ratings.total == 0

    def test_bumps_session_rating(self):
        queue, _ = requeue(_queue("ABCDE"), 0, Rating.EASY)
        moved = next(card for card in queue if card.item_id == "A")
        assert moved.ratings.easy == 1
        assert moved.ratings.total == 1

    @pytest.mark.parametrize("rating", list(Rating))
    def test_length_and_members_preserved(self, rating):
        queue, index = requeue(_queue("ABCDEFGHIJ"), 4, rating)
        assert sorted(_ids(queue)) == list("ABCDEFGHIJ")
        assert 0 <= index < len(queue)

    def test_locates_card_by_id_when_cursor_is_stale(self):
        queue, index = requeue(_queue("ABCDE"), 0, Rating.AGAIN, item_id="C")
        assert _ids(queue) == "ABDEC"
        assert index == 2

    def test_unknown_card_advances_cursor(self):
        queue, index = requeue(_queue("ABC"), 2, Rating.GOOD, item_id="Z")
        assert _ids(queue) == "ABC"
        assert index == 0

    def test_cursor_out_of_range_advances(self):
        queue, index = requeue(_queue("ABC"), 7, Rating.GOOD)
        assert _ids(queue) == "ABC"
        assert index == 2

    @pytest.mark.parametrize("length", [1, 2, 5, 10, 30])
    def test_perfect_lands_no_earlier_than_again(self, length):
        ids = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcd"[:length]
        for start in range(length):
            moved = ids[start]
            again, _ = requeue(_queue(ids), start, Rating.AGAIN)
            perfect, _ = requeue(_queue(ids), start, Rating.PERFECT)
            assert _ids(perfect).index(moved) >= _ids(again).index(moved)

    def test_random_ratings_keep_queue_and_counts_consistent(self):
        rng = random.Random(2024)
        queue, index = _queue("ABCDEFGHIJ"), 0
        seen: dict[str, dict[Rating, int]] = {}

        for _ in range(300):
            rated = queue[index].item_id
            queue, index = requeue(queue, index, rng.choice(list(Rating)))

            assert len({card.item_id for card in queue}) == len(queue) == 10
            assert 0 <= index < len(queue)
            for card in queue:
                counts = {rating: card.ratings.get(rating) for rating in Rating}
                previous = seen.get(card.item_id, {})
                assert all(counts[rating] >= previous.get(rating, 0) for rating in Rating)
                seen[card.item_id] = counts
            assert sum(seen[rated].values()) > 0

        assert sum(sum(counts.values()) for counts in seen.values()) == 300
