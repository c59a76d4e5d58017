"""Session runners: flashcard, scramble, theater and quiz."""

from core.runners.base import QuizResult, SessionClock, SessionOutcome, SessionRunner
from core.runners.flashcard import FlashcardRunner
from core.runners.scramble import ScrambleRunner, normalize_sentence, split_sentence
from core.runners.theater import TheaterRunner, TheaterSettings
from core.runners.quiz import QuizRunner, WordState
from core.runners.registry import RUNNER_SPECS, RunnerSpec, create_runner, get_runner_spec

__all__ = [
    "SessionRunner",
    "SessionOutcome",
    "SessionClock",
    "QuizResult",
    "FlashcardRunner",
    "ScrambleRunner",
    "normalize_sentence",
    "split_sentence",
    "TheaterRunner",
    "TheaterSettings",
    "QuizRunner",
    "WordState",
    "RUNNER_SPECS",
    "RunnerSpec",
    "create_runner",
    "get_runner_spec",
]
