"""
Quiz question generation.

Turns a queue card into a StudyQuestion in one of the quiz modes:
- MCQ: the correct answer plus up to three distinct distractors drawn
  from the same table
- TF: a statement that is the true answer half of the time, otherwise a
  distractor
- Typing: free text

MCQ and Typing answers are compared case-insensitively.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from core.schemas import Item, Relation, StudyMode, StudySelection
from core.scheduling.constants import MCQ_DISTRACTORS


QUIZ_MODES = (StudyMode.MCQ, StudyMode.TF, StudyMode.TYPING)

TRUE_RESPONSES = {"true", "t", "yes", "y"}
FALSE_RESPONSES = {"false", "f", "no", "n"}


@dataclass
class StudyQuestion:
    """A single quiz prompt derived from one card."""
    item: Item
    table_id: str
    relation: Relation
    mode: StudyMode
    question_content: str
    answer_content: str
    mcq_options: list[str] = field(default_factory=list)
    tf_is_correct: Optional[bool] = None

    @property
    def item_id(self) -> str:
        return self.item.id


def answer_text(item: Item, relation: Relation) -> str:
    """Joined answer columns of a row (" / " separated)."""
    return " / ".join(item.cols.get(col) or "" for col in relation.answer_cols)


def question_text(item: Item, relation: Relation) -> str:
    """Prompt shown for a row: each question column with its value."""
    lines = [f"{col}: {item.cols.get(col) or ''}" for col in relation.question_cols]
    prompts = [f"{col}: ????" for col in relation.answer_cols]
    return "\n".join(lines) + "\n\n" + "\n".join(prompts)


def find_distractors(
    rows: list[Item],
    relation: Relation,
    item: Item,
    count: int,
    rng: random.Random
) -> list[str]:
    """
    Draw up to `count` distinct wrong answers from other rows of the table.
    """
    correct = answer_text(item, relation)
    candidates = [row for row in rows if row.id != item.id]
    rng.shuffle(candidates)

    distractors: list[str] = []
    for row in candidates:
        if len(distractors) >= count:
            break
        text = answer_text(row, relation)
        if text.strip(" /") and text != correct and text not in distractors:
            distractors.append(text)
    return distractors


def build_question(
    item: Item,
    table_id: str,
    relation: Relation,
    mode: StudyMode,
    table_rows: list[Item],
    rng: random.Random
) -> Optional[StudyQuestion]:
    """
    Build one question, or None when the row cannot support the mode.

    Args:
        item: Row being asked
        table_id: Id of the row's table
        relation: Relation providing question and answer columns
        mode: Quiz mode to build
        table_rows: All rows of the table (distractor source)
        rng: Random source

    Returns:
        StudyQuestion or None
    """
    if not any(item.cols.get(col) for col in relation.question_cols):
        return None
    if not any(item.cols.get(col) for col in relation.answer_cols):
        return None

    question = StudyQuestion(
        item=item,
        table_id=table_id,
        relation=relation,
        mode=mode,
        question_content=question_text(item, relation),
        answer_content=answer_text(item, relation),
    )

    if mode == StudyMode.MCQ:
        distractors = find_distractors(table_rows, relation, item, MCQ_DISTRACTORS, rng)
        if not distractors:
            return None
        options = [question.answer_content, *distractors]
        rng.shuffle(options)
        question.mcq_options = options
        return question

    if mode == StudyMode.TF:
        if rng.random() < 0.5:
            question.tf_is_correct = True
            return question
        distractors = find_distractors(table_rows, relation, item, 1, rng)
        if not distractors:
            return None
        question.answer_content = distractors[0]
        question.tf_is_correct = False
        return question

    if mode == StudyMode.TYPING:
        return question

    return None


def pick_mode(
    relation: Relation,
    selection: StudySelection,
    cycle_index: int,
    rng: random.Random
) -> tuple[Optional[StudyMode], int]:
    """
    Choose a quiz mode for a relation.

    Modes cycle through the selected modes in order (skipping ones the
    relation does not support) unless randomize_modes is set.

    Returns:
        (mode or None, next cycle index)
    """
    wanted = [StudyMode(m) for m in (selection.study_modes or QUIZ_MODES) if StudyMode(m) in QUIZ_MODES]
    supported = {StudyMode(m) for m in relation.modes}
    compatible = [m for m in wanted if m in supported]
    if not compatible:
        return None, cycle_index

    if selection.randomize_modes:
        return rng.choice(compatible), cycle_index

    for step in range(len(wanted)):
        candidate = wanted[(cycle_index + step) % len(wanted)]
        if candidate in supported:
            return candidate, cycle_index + step + 1
    return None, cycle_index


def is_correct(question: StudyQuestion, response: str) -> bool:
    """Grade a response against a question."""
    given = response.strip()
    if question.mode == StudyMode.TF:
        lowered = given.lower()
        if lowered in TRUE_RESPONSES:
            return question.tf_is_correct is True
        if lowered in FALSE_RESPONSES:
            return question.tf_is_correct is False
        return False
    return given.casefold() == question.answer_content.strip().casefold()
