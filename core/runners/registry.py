"""
Runner registry: session type -> label, description and runner class.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.schemas import SessionType
from core.runners.base import SessionRunner
from core.runners.flashcard import FlashcardRunner
from core.runners.quiz import QuizRunner
from core.runners.scramble import ScrambleRunner
from core.runners.theater import TheaterRunner


@dataclass(frozen=True)
class RunnerSpec:
    """
    Session type configuration.
    """
    session_type: SessionType
    label: str
    description: str
    runner_class: type[SessionRunner]
    uses_ratings: bool


RUNNER_SPECS: dict[SessionType, RunnerSpec] = {
    SessionType.FLASHCARD: RunnerSpec(
        session_type=SessionType.FLASHCARD,
        label="Flashcards",
        description="Flip cards and rate how well you knew them",
        runner_class=FlashcardRunner,
        uses_ratings=True,
    ),
    SessionType.SCRAMBLE: RunnerSpec(
        session_type=SessionType.SCRAMBLE,
        label="Sentence Scramble",
        description="Put shuffled sentence parts back in order",
        runner_class=ScrambleRunner,
        uses_ratings=True,
    ),
    SessionType.THEATER: RunnerSpec(
        session_type=SessionType.THEATER,
        label="Theater",
        description="Watch cards play back hands-free",
        runner_class=TheaterRunner,
        uses_ratings=False,
    ),
    SessionType.QUIZ: RunnerSpec(
        session_type=SessionType.QUIZ,
        label="Study Quiz",
        description="Multiple choice, true/false and typing questions",
        runner_class=QuizRunner,
        uses_ratings=False,
    ),
}


def get_runner_spec(session_type: SessionType) -> RunnerSpec:
    return RUNNER_SPECS[SessionType(session_type)]


def create_runner(session_type: SessionType, *args, **kwargs) -> SessionRunner:
    """Instantiate the runner for a session type."""
    return get_runner_spec(session_type).runner_class(*args, **kwargs)
