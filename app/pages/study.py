"""
Study page rendering.
"""

from __future__ import annotations

import streamlit as st

from app.session_controller import end_session, process_rating, start_new_session
from app.ui import (
    render_card_html,
    render_feedback_buttons,
    render_flashcard,
    render_session_complete,
    render_session_stats,
)
from app.ui.flashcard import BACK_STYLE, SENTENCE_STYLE
from core.runners import FlashcardRunner, QuizRunner, ScrambleRunner, TheaterRunner, TheaterSettings
from core.runners.registry import RUNNER_SPECS
from core.schemas import (
    CompositionPolicy,
    SessionType,
    SortDirection,
    SortKeyKind,
    SortRule,
    StudyMode,
    StudySelection,
    WordSelection,
)
from core.scheduling import WORD_COUNT_OPTIONS
from core.session_builders.questions import QUIZ_MODES


def render_study_page() -> None:
    """
    Render the study flow (selection form or active session).
    """
    if st.session_state.runner is None:
        _render_selection_form()
    else:
        _render_active_session()


# ---- Selection ----

def _render_selection_form() -> None:
    st.title("📚 Vocabulary Review Queue")

    if st.session_state.last_outcome is not None:
        render_session_complete(st.session_state.last_outcome)

    library = st.session_state.library
    if not library.tables:
        st.info("The library is empty. Point VOCAB_LIBRARY_PATH at a library JSON file.")
        return

    type_labels = {spec.label: session_type for session_type, spec in RUNNER_SPECS.items()}
    session_label = st.radio("Session", list(type_labels), horizontal=True)
    session_type = type_labels[session_label]
    st.caption(RUNNER_SPECS[session_type].description)

    table_names = {table.name: table.id for table in library.tables}
    chosen_tables = st.multiselect("Tables", list(table_names), default=list(table_names)[:1])
    table_ids = [table_names[name] for name in chosen_tables]

    relation_options = {
        f"{relation.name} ({relation.table_id})": relation.id
        for relation in library.relations
        if relation.table_id in table_ids
        and (session_type != SessionType.SCRAMBLE or StudyMode.SCRAMBLED in relation.modes)
    }
    chosen_relations = st.multiselect("Relations", list(relation_options), default=list(relation_options))
    relation_ids = [relation_options[label] for label in chosen_relations]

    fields = {
        "session_type": session_type,
        "table_ids": table_ids,
        "relation_ids": relation_ids,
    }
    theater_settings = None

    if session_type == SessionType.QUIZ:
        fields.update(_render_quiz_options(table_ids, chosen_tables))
    elif session_type == SessionType.SCRAMBLE:
        fields["min_split_size"] = st.select_slider("Split sentence into", options=[3, 4, 5, 6, 7], value=5)
    elif session_type == SessionType.THEATER:
        col1, col2, col3 = st.columns(3)
        with col1:
            delay = st.number_input("Answer delay (s)", min_value=0.0, value=2.0, step=0.5)
        with col2:
            interval = st.number_input("Card interval (s)", min_value=1.0, value=5.0, step=1.0)
        with col3:
            duration = st.number_input("Duration (min, 0 = unlimited)", min_value=0.0, value=0.0, step=1.0)
        theater_settings = TheaterSettings(
            delay_seconds=delay,
            card_interval_seconds=interval,
            duration_minutes=duration,
        )

    if st.button("Start", type="primary", use_container_width=True, disabled=not (table_ids and relation_ids)):
        try:
            selection = StudySelection(**fields)
        except ValueError as exc:
            st.error(f"Invalid selection: {exc}")
            return
        start_new_session(selection, theater_settings)
        st.rerun()


def _render_quiz_options(table_ids: list[str], table_names: list[str]) -> dict:
    options: dict = {}
    options["study_modes"] = st.multiselect(
        "Question types",
        [mode.value for mode in QUIZ_MODES],
        default=[mode.value for mode in QUIZ_MODES],
    )
    col1, col2 = st.columns(2)
    with col1:
        options["randomize_modes"] = st.checkbox("Randomize question types")
    with col2:
        options["random_relation"] = st.checkbox("Any relation of the table")

    manual = st.toggle("Pick words manually")
    if manual:
        library = st.session_state.library
        rows = {
            f"{next(iter(item.cols.values()), item.id)} ({table.name})": item.id
            for table in library.tables if table.id in table_ids
            for item in table.rows
        }
        picked = st.multiselect("Words", list(rows))
        options["word_selection"] = WordSelection.MANUAL
        options["manual_item_ids"] = [rows[label] for label in picked]
        return options

    options["word_count"] = st.select_slider("Words", options=list(WORD_COUNT_OPTIONS), value=8)
    policies = [policy.value for policy in CompositionPolicy]
    options["composition"] = st.radio("Queue composition", policies, horizontal=True)

    sort_kinds = [kind.value for kind in SortKeyKind if kind != SortKeyKind.COLUMN]
    sort_kind = st.selectbox("Sort by", sort_kinds, index=0)
    direction = st.radio("Direction", [d.value for d in SortDirection], index=1, horizontal=True)
    options["sort_rules"] = [SortRule(kind=sort_kind, direction=direction)]

    if options["composition"] == CompositionPolicy.PERCENTAGE.value and table_ids:
        default_share = round(100 / len(table_ids))
        options["table_percentages"] = {
            table_id: st.number_input(f"% from {name}", min_value=0, max_value=100, value=default_share)
            for table_id, name in zip(table_ids, table_names)
        }
    return options


# ---- Active Session ----

def _render_active_session() -> None:
    runner = st.session_state.runner

    if render_session_stats(runner, st.session_state.session_summary):
        end_session()
        st.rerun()
        return

    card = runner.current_card
    if card is None:
        st.info("Nothing left to study.")
        return

    key_suffix = f"{runner.session_type.value}_{card.item_id}_{sum(runner.encounter_counts.values())}"

    if isinstance(runner, FlashcardRunner):
        _render_flashcard_session(runner, card, key_suffix)
    elif isinstance(runner, ScrambleRunner):
        _render_scramble_session(runner, key_suffix)
    elif isinstance(runner, TheaterRunner):
        _render_theater_session(runner)
    elif isinstance(runner, QuizRunner):
        _render_quiz_session(runner, key_suffix)


def _render_flashcard_session(runner: FlashcardRunner, card, key_suffix: str) -> None:
    render_flashcard(card, runner.is_flipped)
    st.markdown("<br>", unsafe_allow_html=True)
    if st.button("Flip", use_container_width=True, type="primary", key=f"flip_{key_suffix}"):
        runner.flip()
        st.rerun()

    if runner.is_flipped:
        rating = render_feedback_buttons(key_suffix=key_suffix)
        if rating is not None:
            process_rating(rating)
            st.rerun()


def _render_scramble_session(runner: ScrambleRunner, key_suffix: str) -> None:
    render_card_html(" | ".join(runner.parts), corner_text="Scramble", style=SENTENCE_STYLE)
    st.markdown("<br>", unsafe_allow_html=True)

    if not runner.is_submitted:
        answer = st.text_input("Type the sentence in order", key=f"scramble_{key_suffix}")
        if st.button("Check", type="primary", use_container_width=True, key=f"check_{key_suffix}"):
            runner.submit(answer)
            st.rerun()
        return

    if runner.last_answer_correct:
        st.success("Correct!")
    else:
        st.error(f"Answer: {runner.sentence}")
    rating = render_feedback_buttons(key_suffix=key_suffix)
    if rating is not None:
        process_rating(rating)
        st.rerun()


@st.fragment(run_every=1)
def _render_theater_session(runner: TheaterRunner) -> None:
    """
    Theater playback. Reruns every second to reveal the answer and
    auto-advance without user input.
    """
    if runner.is_complete:
        st.success("Time is up! End the session to save your progress.")
        return

    card_slot = st.container()

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("⏮ Previous", use_container_width=True):
            runner.previous()
    with col2:
        label = "▶ Resume" if runner.is_paused else "⏸ Pause"
        if st.button(label, use_container_width=True):
            if runner.is_paused:
                runner.resume()
            else:
                runner.pause()
    with col3:
        if st.button("Next ⏭", use_container_width=True):
            runner.advance()

    runner.tick()
    with card_slot:
        render_flashcard(runner.current_card, flipped=runner.answer_visible)
        minutes, seconds = divmod(runner.elapsed_seconds, 60)
        status = "paused" if runner.is_paused else "playing"
        st.caption(f"⏱ {minutes:02d}:{seconds:02d} ({status})")


def _render_quiz_session(runner: QuizRunner, key_suffix: str) -> None:
    if runner.is_complete:
        st.success(f"Quiz complete! You mastered {len(runner.mastered_ids)} words.")
        return

    if st.session_state.last_feedback is not None:
        correct, expected = st.session_state.last_feedback
        if correct:
            st.success("Correct!")
        else:
            st.error(f"Not quite. Answer: {expected}")

    question = runner.current_question
    render_card_html(question.question_content.replace("\n", " "), corner_text=question.mode.value, style=SENTENCE_STYLE)
    st.markdown("<br>", unsafe_allow_html=True)

    response = None
    if question.mode == StudyMode.MCQ:
        for index, option in enumerate(question.mcq_options):
            if st.button(option, use_container_width=True, key=f"mcq_{index}_{key_suffix}"):
                response = option
    elif question.mode == StudyMode.TF:
        render_card_html(question.answer_content, style=BACK_STYLE)
        col1, col2 = st.columns(2)
        with col1:
            if st.button("True", use_container_width=True, key=f"tf_true_{key_suffix}"):
                response = "True"
        with col2:
            if st.button("False", use_container_width=True, key=f"tf_false_{key_suffix}"):
                response = "False"
    else:
        typed = st.text_input("Your answer", key=f"typing_{key_suffix}")
        if st.button("Submit", type="primary", use_container_width=True, key=f"submit_{key_suffix}"):
            response = typed

    if response is not None:
        expected = str(question.tf_is_correct) if question.mode == StudyMode.TF else question.answer_content
        correct = runner.answer(response)
        st.session_state.last_feedback = (correct, expected)
        st.rerun()
