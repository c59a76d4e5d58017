"""
Session runners: flashcard, scramble, theater and quiz lifecycles.
"""

import random

import pytest

from core.queue_store import InMemoryQueueStore, selection_key
from core.runners import (
    FlashcardRunner,
    QuizRunner,
    ScrambleRunner,
    SessionClock,
    TheaterRunner,
    TheaterSettings,
    WordState,
    create_runner,
    get_runner_spec,
    normalize_sentence,
    split_sentence,
)
from core.scheduling import Rating
from core.schemas import SessionType, StudyMode, StudySelection
from core.session_builders.questions import is_correct

FOOD = StudySelection(session_type=SessionType.FLASHCARD, table_ids=["food"], relation_ids=["r-food"])


def _runner(cls, tables, relations, selection, **kwargs):
    kwargs.setdefault("rng", random.Random(42))
    return cls(tables, relations, selection, **kwargs)


class TestSessionClock:
    def test_pause_excluded(self, fake_clock):
        clock = SessionClock(fake_clock)
        clock.start()
        fake_clock.advance(10)
        clock.pause()
        fake_clock.advance(50)
        assert clock.is_paused
        clock.resume()
        fake_clock.advance(5)
        assert clock.elapsed_seconds == 15

    def test_stop_freezes(self, fake_clock):
        clock = SessionClock(fake_clock)
        assert clock.elapsed == 0.0
        clock.start()
        fake_clock.advance(7.5)
        clock.stop()
        fake_clock.advance(100)
        assert clock.elapsed == 7.5
        assert clock.elapsed_seconds == 7


class TestFlashcardRunner:
    def test_flip_and_rate(self, tables, relations, fake_clock):
        runner = _runner(FlashcardRunner, tables, relations, FOOD, clock=fake_clock)
        runner.start()
        first = runner.current_card.item_id

        runner.flip()
        assert runner.is_flipped
        runner.rate(Rating.AGAIN)

        assert not runner.is_flipped
        assert runner.reviewed_ids == [first]
        assert [card.item_id for card in runner.queue].index(first) == 3
        assert runner.flip_counts == {"food": 1}
        assert runner.rating_totals.again == 1

    def test_outcome(self, tables, relations, fake_clock):
        store = InMemoryQueueStore()
        runner = _runner(FlashcardRunner, tables, relations, FOOD, store=store, clock=fake_clock)
        runner.start()
        first = runner.current_item.id
        runner.rate(Rating.GOOD)
        fake_clock.advance(42)

        outcome = runner.end()
        assert outcome.session_type == SessionType.FLASHCARD
        assert outcome.selection_key == "food|r-food"
        assert outcome.rating_deltas[first].good == 1
        assert len(outcome.rating_deltas) == 1
        assert outcome.encounter_counts == {first: 1}
        assert outcome.elapsed_seconds == 42
        assert outcome.final_queue == [card.item_id for card in runner.queue]
        assert store.load_order(SessionType.FLASHCARD, "food|r-food") == outcome.final_queue

    def test_resume_restores_final_order(self, tables, relations):
        store = InMemoryQueueStore()
        runner = _runner(FlashcardRunner, tables, relations, FOOD, store=store)
        runner.start()
        runner.rate(Rating.AGAIN)
        runner.rate(Rating.EASY)
        final = runner.end().final_queue

        resumed = _runner(FlashcardRunner, tables, relations, FOOD, store=store, rng=random.Random(99))
        resumed.start()
        assert [card.item_id for card in resumed.queue] == final

    def test_resume_is_per_session_type(self, tables, relations):
        key = selection_key(["food"], ["r-food"])
        store = InMemoryQueueStore({
            "scramble": {key: ["f4", "f3", "f2", "f1"]},
            "flashcard": {key: ["f2", "f4", "f1", "f3"]},
        })
        runner = _runner(FlashcardRunner, tables, relations, FOOD, store=store)
        runner.start()
        assert [card.item_id for card in runner.queue] == ["f2", "f4", "f1", "f3"]

    def test_end_is_idempotent(self, tables, relations):
        runner = _runner(FlashcardRunner, tables, relations, FOOD)
        runner.start()
        outcome = runner.end()
        assert runner.end() is outcome
        assert runner.is_ended

    def test_events_ignored_before_start_and_after_end(self, tables, relations):
        runner = _runner(FlashcardRunner, tables, relations, FOOD)
        runner.rate(Rating.GOOD)
        runner.flip()
        assert runner.current_card is None
        runner.start()
        runner.end()
        runner.rate(Rating.GOOD)
        assert runner.reviewed_ids == []

    def test_empty_queue(self, tables, relations):
        store = InMemoryQueueStore()
        selection = StudySelection(table_ids=["food"], relation_ids=["r-animals"])
        runner = _runner(FlashcardRunner, tables, relations, selection, store=store)
        assert runner.start() == []
        assert runner.is_empty
        runner.flip()
        runner.rate(Rating.GOOD)
        outcome = runner.end()
        assert outcome.final_queue == []
        assert outcome.reviewed_ids == []
        assert store.load_order(SessionType.FLASHCARD, "food|r-animals") == []

    def test_unknown_rating_is_rejected(self, tables, relations):
        runner = _runner(FlashcardRunner, tables, relations, FOOD)
        runner.start()
        order = [card.item_id for card in runner.queue]
        with pytest.raises(ValueError):
            runner.rate("bogus")
        assert runner.reviewed_ids == []
        assert runner.encounter_counts == {}
        assert [card.item_id for card in runner.queue] == order

    def test_rating_values_are_accepted(self, tables, relations):
        runner = _runner(FlashcardRunner, tables, relations, FOOD)
        runner.start()
        runner.rate("hard")
        assert runner.rating_totals.hard == 1

    def test_callback_receives_current_item(self, tables, relations):
        seen = []
        runner = _runner(FlashcardRunner, tables, relations, FOOD, on_current_changed=seen.append)
        runner.start()
        runner.rate(Rating.HARD)
        assert len(seen) == 2
        assert seen[-1].id == runner.current_item.id

    def test_callback_errors_are_swallowed(self, tables, relations):
        def boom(item):
            raise RuntimeError("ui gone")

        runner = _runner(FlashcardRunner, tables, relations, FOOD, on_current_changed=boom)
        runner.start()
        runner.rate(Rating.GOOD)
        assert len(runner.reviewed_ids) == 1


class TestScramble:
    SELECTION = StudySelection(
        session_type=SessionType.SCRAMBLE,
        table_ids=["animals"],
        relation_ids=["r-sentences"],
        min_split_size=3,
    )

    def test_split_sentence(self):
        assert split_sentence("a b c d e f g", 3) == ["a b c", "d e f", "g"]
        assert split_sentence("a b", 5) == ["a", "b"]
        assert split_sentence("", 3) == []

    def test_split_shuffle_keeps_words(self):
        parts = split_sentence("de hond rent snel door het park", 4, random.Random(3))
        assert sorted(" ".join(parts).split()) == sorted("de hond rent snel door het park".split())
        assert len(parts) == 4

    def test_normalize_sentence(self):
        assert normalize_sentence("  De hond,   rent!  ") == "de hond rent"

    def test_submit_then_rate(self, tables, relations):
        runner = _runner(ScrambleRunner, tables, relations, self.SELECTION)
        runner.start()
        assert len(runner.queue) == 4
        assert len(runner.parts) == 3
        first = runner.current_card.item_id

        runner.rate(Rating.GOOD)
        assert runner.reviewed_ids == []

        assert runner.submit(runner.sentence.upper() + "!") is True
        assert runner.submit("wrong") is True
        runner.rate(Rating.GOOD)

        assert runner.reviewed_ids == [first]
        assert not runner.is_submitted
        assert runner.last_answer_correct is None
        assert runner.rating_totals.good == 1

    def test_wrong_answer(self, tables, relations):
        runner = _runner(ScrambleRunner, tables, relations, self.SELECTION)
        runner.start()
        assert runner.submit("park het door") is False
        runner.rate(Rating.AGAIN)
        outcome = runner.end()
        assert sum(delta.again for delta in outcome.rating_deltas.values()) == 1

    def test_unknown_rating_is_rejected(self, tables, relations):
        runner = _runner(ScrambleRunner, tables, relations, self.SELECTION)
        runner.start()
        runner.submit(runner.sentence)
        with pytest.raises(ValueError):
            runner.rate("bogus")
        assert runner.reviewed_ids == []
        assert runner.encounter_counts == {}
        assert runner.is_submitted


class TestTheater:
    SELECTION = StudySelection(session_type=SessionType.THEATER, table_ids=["animals"], relation_ids=["r-animals"])

    def test_timed_playback(self, tables, relations, fake_clock):
        settings = TheaterSettings(delay_seconds=2, card_interval_seconds=5, duration_minutes=1)
        runner = _runner(TheaterRunner, tables, relations, self.SELECTION, clock=fake_clock, settings=settings)
        runner.start()
        first = runner.current_card.item_id
        assert not runner.answer_visible

        fake_clock.advance(2)
        assert runner.answer_visible
        assert runner.tick() is False

        fake_clock.advance(3)
        assert runner.tick() is True
        assert runner.index == 1
        second = runner.current_card.item_id
        assert not runner.answer_visible

        runner.pause()
        fake_clock.advance(100)
        assert runner.tick() is False
        assert runner.index == 1
        runner.resume()

        fake_clock.advance(55)
        assert runner.is_complete
        assert runner.tick() is False

        outcome = runner.end()
        assert outcome.completed
        assert outcome.elapsed_seconds == 60
        assert outcome.encounter_counts == {first: 1, second: 1}
        assert outcome.rating_deltas == {}

    def test_ticks_alone_reveal_and_advance(self, tables, relations, fake_clock):
        settings = TheaterSettings(delay_seconds=2, card_interval_seconds=5)
        runner = _runner(TheaterRunner, tables, relations, self.SELECTION, clock=fake_clock, settings=settings)
        runner.start()

        revealed_at, advanced_at = [], []
        for second in range(1, 16):
            fake_clock.advance(1)
            shown = runner.index
            if runner.tick():
                advanced_at.append(second)
                assert runner.index == (shown + 1) % len(runner.queue)
            elif runner.answer_visible:
                revealed_at.append(second)

        assert advanced_at == [5, 10, 15]
        assert revealed_at == [2, 3, 4, 7, 8, 9, 12, 13, 14]
        assert sum(runner.encounter_counts.values()) == 4

    def test_navigation_wraps(self, tables, relations):
        runner = _runner(TheaterRunner, tables, relations, self.SELECTION)
        runner.start()
        runner.previous()
        assert runner.index == len(runner.queue) - 1
        runner.advance()
        assert runner.index == 0
        assert sum(runner.encounter_counts.values()) == 3

    def test_unlimited_duration(self, tables, relations, fake_clock):
        runner = _runner(TheaterRunner, tables, relations, self.SELECTION, clock=fake_clock)
        runner.start()
        fake_clock.advance(10_000)
        assert not runner.is_complete
        assert runner.end().completed is False


class TestQuiz:
    def _selection(self, *modes, **fields) -> StudySelection:
        return StudySelection(
            session_type=SessionType.QUIZ,
            table_ids=["food"],
            relation_ids=["r-food"],
            study_modes=list(modes),
            **fields,
        )

    @staticmethod
    def _correct_response(question) -> str:
        if question.mode == StudyMode.TF:
            return "True" if question.tf_is_correct else "False"
        return question.answer_content

    def test_two_correct_answers_master_a_word(self, tables, relations):
        runner = _runner(QuizRunner, tables, relations, self._selection(StudyMode.TYPING))
        runner.start()
        assert len(runner.queue) == 4

        answers = 0
        while not runner.is_complete:
            assert runner.answer(runner.current_question.answer_content.upper()) is True
            answers += 1
        assert answers == 8
        assert runner.current_question is None
        assert runner.answer("anything") is None

        outcome = runner.end()
        assert outcome.completed
        assert outcome.abandoned_ids == []
        for result in outcome.quiz_results.values():
            assert (result.passed1, result.passed2, result.failed) == (2, 1, 0)

    def test_wrong_answer_fails_word(self, tables, relations):
        runner = _runner(QuizRunner, tables, relations, self._selection(StudyMode.TYPING))
        runner.start()
        first = runner.current_card.item_id

        assert runner.answer("no idea") is False
        assert runner.states[first] == WordState.FAIL
        assert runner.index == 1

        outcome = runner.end()
        assert not outcome.completed
        assert outcome.quiz_results[first].failed == 1
        assert sorted(outcome.abandoned_ids) == ["f1", "f2", "f3", "f4"]

    def test_modes_cycle_in_order(self, tables, relations):
        selection = self._selection(StudyMode.MCQ, StudyMode.TF, StudyMode.TYPING)
        runner = _runner(QuizRunner, tables, relations, selection)
        runner.start()
        modes = [runner.questions[card.item_id].mode for card in runner.queue]
        assert modes == [StudyMode.MCQ, StudyMode.TF, StudyMode.TYPING, StudyMode.MCQ]

    def test_mcq_options(self, tables, relations):
        runner = _runner(QuizRunner, tables, relations, self._selection(StudyMode.MCQ))
        runner.start()
        question = runner.current_question
        assert len(question.mcq_options) == 4
        assert len(set(question.mcq_options)) == 4
        assert question.answer_content in question.mcq_options
        assert runner.answer(question.answer_content) is True

    def test_true_false(self, tables, relations):
        runner = _runner(QuizRunner, tables, relations, self._selection(StudyMode.TF))
        runner.start()
        for _ in range(4):
            question = runner.current_question
            assert question.tf_is_correct in (True, False)
            assert runner.answer(self._correct_response(question)) is True

    def test_tf_word_responses(self, tables, relations):
        runner = _runner(QuizRunner, tables, relations, self._selection(StudyMode.TF))
        runner.start()
        question = runner.current_question
        yes = is_correct(question, "yes")
        no = is_correct(question, "n")
        assert yes != no
        assert is_correct(question, "maybe") is False

    def test_randomized_modes_keep_answering(self, tables, relations):
        selection = self._selection(StudyMode.MCQ, StudyMode.TF, StudyMode.TYPING, randomize_modes=True)
        runner = _runner(QuizRunner, tables, relations, selection)
        runner.start()
        for _ in range(8):
            if runner.is_complete:
                break
            assert runner.answer(self._correct_response(runner.current_question)) is True
        assert runner.is_complete

    def test_unbuildable_cards_are_dropped(self, tables, relations):
        food = tables[1]
        rows = [row.model_copy(update={"cols": {"Dutch": row.cols["Dutch"]}}) if row.id == "f4" else row
                for row in food.rows]
        tables = [tables[0], food.model_copy(update={"rows": rows}), tables[2]]
        runner = _runner(QuizRunner, tables, relations, self._selection(StudyMode.TYPING))
        runner.start()
        assert sorted(card.item_id for card in runner.queue) == ["f1", "f2", "f3"]

    def test_final_queue_keeps_dropped_cards(self, tables, relations):
        food = tables[1]
        rows = [row.model_copy(update={"cols": {"Dutch": row.cols["Dutch"]}}) if row.id == "f4" else row
                for row in food.rows]
        tables = [tables[0], food.model_copy(update={"rows": rows}), tables[2]]
        store = InMemoryQueueStore()
        runner = _runner(QuizRunner, tables, relations, self._selection(StudyMode.TYPING), store=store)
        runner.start()
        runner.answer(runner.current_question.answer_content)

        outcome = runner.end()
        assert sorted(outcome.final_queue) == ["f1", "f2", "f3", "f4"]
        assert [item_id for item_id in outcome.final_queue if item_id != "f4"] == \
            [card.item_id for card in runner.queue]
        assert store.load_order(SessionType.QUIZ, "food|r-food") == outcome.final_queue

    def test_mastered_ids(self, tables, relations):
        runner = _runner(QuizRunner, tables, relations, self._selection(StudyMode.TYPING))
        runner.start()
        first = runner.current_card.item_id
        runner.answer(runner.current_question.answer_content)
        for _ in range(3):
            runner.answer("wrong")
        assert runner.current_card.item_id == first
        runner.answer(runner.current_question.answer_content)
        assert runner.mastered_ids == [first]
        assert first not in runner.abandoned_ids


class TestRegistry:
    def test_create_runner_by_type(self, tables, relations):
        selection = StudySelection(session_type=SessionType.THEATER, table_ids=["food"], relation_ids=["r-food"])
        runner = create_runner("theater", tables, relations, selection, settings=TheaterSettings(delay_seconds=0))
        assert isinstance(runner, TheaterRunner)
        assert runner.settings.delay_seconds == 0

    @pytest.mark.parametrize("session_type, uses_ratings", [
        (SessionType.FLASHCARD, True),
        (SessionType.SCRAMBLE, True),
        (SessionType.THEATER, False),
        (SessionType.QUIZ, False),
    ])
    def test_registry_entries(self, session_type, uses_ratings):
        spec = get_runner_spec(session_type)
        assert spec.uses_ratings is uses_ratings
        assert spec.runner_class.session_type == session_type
