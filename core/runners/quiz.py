"""
Quiz Runner

Each card becomes a StudyQuestion (MCQ, TF or Typing). A word is
mastered after two correct answers in a row:

    unseen -> pass1 -> pass2      (correct answers)
    any    -> fail                (wrong answer)
    fail   -> pass1               (correct answer)

The cursor moves linearly to the next card that is not mastered; the
quiz is complete once every card reached pass2. Ending early marks the
remaining cards as abandoned.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from core.schemas import SessionType
from core.runners.base import QuizResult, SessionRunner
from core.session_builders.pool_types import SessionCard
from core.session_builders.questions import StudyQuestion, build_question, is_correct, pick_mode

logger = logging.getLogger(__name__)


class WordState(str, Enum):
    UNSEEN = "unseen"
    FAIL = "fail"
    PASS1 = "pass1"
    PASS2 = "pass2"


class QuizRunner(SessionRunner):
    """MCQ / True-False / Typing sessions; never requeues."""

    session_type = SessionType.QUIZ

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.questions: dict[str, StudyQuestion] = {}
        self.states: dict[str, WordState] = {}
        self.results: dict[str, QuizResult] = {}
        self.last_answer_correct: Optional[bool] = None
        self._mode_cycle = 0
        self._built_order: list[str] = []

    # ---- Questions ----

    def _question_for(self, card: SessionCard) -> Optional[StudyQuestion]:
        mode, self._mode_cycle = pick_mode(card.relation, self.selection, self._mode_cycle, self.rng)
        if mode is None:
            return None
        table_rows = next((t.rows for t in self.tables if t.id == card.table_id), [])
        return build_question(card.item, card.table_id, card.relation, mode, table_rows, self.rng)

    def _prepare_queue(self, queue: list[SessionCard]) -> list[SessionCard]:
        """Drop cards no question can be built for."""
        self.questions, self.states, self.results = {}, {}, {}
        self._mode_cycle = 0
        self._built_order = [card.item_id for card in queue]

        kept: list[SessionCard] = []
        for card in queue:
            question = self._question_for(card)
            if question is None:
                continue
            kept.append(card)
            self.questions[card.item_id] = question
            self.states[card.item_id] = WordState.UNSEEN
            self.results[card.item_id] = QuizResult()

        if len(kept) < len(queue):
            logger.info("Dropped %d cards without a buildable question", len(queue) - len(kept))
        return kept

    @property
    def current_question(self) -> Optional[StudyQuestion]:
        card = self.current_card
        if card is None or self.is_complete:
            return None
        return self.questions.get(card.item_id)

    # ---- Answering ----

    def answer(self, response: str) -> Optional[bool]:
        """
        Grade a response to the current question and advance.

        Args:
            response: The user's answer (option text, "True"/"False" or typed text)

        Returns:
            Whether the answer was correct, or None when no question is active
        """
        question = self.current_question
        if not self._is_active() or question is None:
            return None

        card = self.current_card
        correct = is_correct(question, response)
        self._record_review(card)

        item_id = card.item_id
        result = self.results[item_id]
        if correct:
            if self.states[item_id] == WordState.PASS1:
                self.states[item_id] = WordState.PASS2
                result.passed1 += 1
                result.passed2 += 1
            else:
                self.states[item_id] = WordState.PASS1
                result.passed1 += 1
        else:
            self.states[item_id] = WordState.FAIL
            result.failed += 1

        self.last_answer_correct = correct
        if self.selection.randomize_modes and self.states[item_id] != WordState.PASS2:
            self.questions[item_id] = self._question_for(card) or question

        self._advance()
        self._notify()
        return correct

    def _advance(self) -> None:
        if self.is_complete:
            return
        size = len(self.queue)
        for step in range(1, size + 1):
            candidate = (self.index + step) % size
            if self.states[self.queue[candidate].item_id] != WordState.PASS2:
                self.index = candidate
                return

    # ---- State ----

    @property
    def is_complete(self) -> bool:
        return bool(self.queue) and all(state == WordState.PASS2 for state in self.states.values())

    @property
    def mastered_ids(self) -> list[str]:
        return [card.item_id for card in self.queue if self.states.get(card.item_id) == WordState.PASS2]

    @property
    def abandoned_ids(self) -> list[str]:
        if self.is_complete:
            return []
        return [card.item_id for card in self.queue if self.states.get(card.item_id) != WordState.PASS2]

    def _final_order(self) -> list[str]:
        # Built order, including cards without a buildable question
        return list(self._built_order)

    def _outcome_extras(self) -> dict:
        return {
            "quiz_results": {
                item_id: QuizResult(r.passed1, r.passed2, r.failed)
                for item_id, r in self.results.items()
            },
            "abandoned_ids": self.abandoned_ids,
            "completed": self.is_complete,
        }
