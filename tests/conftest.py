"""
Shared fixtures: a small two-table library, a fixed clock and an
in-memory queue store database.
"""

from __future__ import annotations

import random
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from core.queue_store.database import init_db
from core.schemas import Item, Relation, StudyMode, VocabTable


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

ANIMALS = [
    ("a1", "de hond", "the dog", "de hond rent snel door het park"),
    ("a2", "de kat", "the cat", "de kat slaapt de hele dag"),
    ("a3", "het paard", "the horse", "het paard staat in de wei"),
    ("a4", "de vogel", "the bird", "de vogel zingt"),
    ("a5", "de vis", "the fish", "vis"),
]

FOOD = [
    ("f1", "het brood", "the bread"),
    ("f2", "de kaas", "the cheese"),
    ("f3", "de appel", "the apple"),
    ("f4", "de melk", "the milk"),
]

TOOLS = [
    ("t1", "de hamer", "the hammer"),
    ("t2", "de zaag", "the saw"),
    ("t3", "de schroef", "the screw"),
]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _table(table_id: str, name: str, rows: list[tuple], columns: list[str]) -> VocabTable:
    return VocabTable(
        id=table_id,
        name=name,
        columns=columns,
        rows=[Item(id=row[0], cols=dict(zip(columns, row[1:]))) for row in rows],
    )


@pytest.fixture
def tables() -> list[VocabTable]:
    return [
        _table("animals", "Animals", ANIMALS, ["Dutch", "English", "Sentence"]),
        _table("food", "Food", FOOD, ["Dutch", "English"]),
        _table("tools", "Tools", TOOLS, ["Dutch", "English"]),
    ]


@pytest.fixture
def relations() -> list[Relation]:
    quiz_modes = [StudyMode.MCQ, StudyMode.TF, StudyMode.TYPING]
    return [
        Relation(id="r-animals", table_id="animals", name="nl-en",
                 question_cols=["Dutch"], answer_cols=["English"], modes=quiz_modes),
        Relation(id="r-sentences", table_id="animals", name="sentences",
                 question_cols=["Sentence"], answer_cols=[], modes=[StudyMode.SCRAMBLED]),
        Relation(id="r-food", table_id="food", name="nl-en",
                 question_cols=["Dutch"], answer_cols=["English"], modes=quiz_modes),
        Relation(id="r-tools", table_id="tools", name="nl-en",
                 question_cols=["Dutch"], answer_cols=["English"], modes=[StudyMode.TYPING]),
    ]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()
