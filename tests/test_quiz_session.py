import pytest

from conftest import build_questions
from pdfquiz.domain import Question
from pdfquiz.services import quiz_session as qs
from pdfquiz.services.errors import SessionError, ValidationError


def play(session, picks):
    """Select ``picks[i]`` (or nothing when None) and press Next for each question."""
    for pick in picks:
        if pick is not None:
            session = qs.select_option(session, pick)
        session = qs.advance(session)
    return session


def test_initial_state(questions):
    session = qs.start_session(questions)
    assert session.phase is qs.Phase.IN_PROGRESS
    assert session.current_index == 0
    assert session.score == 0
    assert session.time_remaining == 30
    assert dict(session.selected_answers) == {}


def test_start_requires_ten_questions():
    with pytest.raises(ValidationError):
        qs.start_session(build_questions(9))
    with pytest.raises(ValidationError):
        qs.start_session([])


def test_all_correct_scores_ten(questions):
    session = play(qs.start_session(questions), [q.correct_answer for q in questions])
    assert session.phase is qs.Phase.COMPLETED
    assert session.score == 10


def test_no_selection_scores_zero(questions):
    session = play(qs.start_session(questions), [None] * 10)
    assert session.is_completed
    assert session.score == 0


def test_mixed_selections_count_matches(questions):
    picks = [
        q.correct_answer if i % 3 == 0 else (None if i % 3 == 1 else q.options[0])
        for i, q in enumerate(questions)
    ]
    session = play(qs.start_session(questions), picks)
    expected = sum(
        1 for i, q in enumerate(questions) if session.selected_answers.get(i) == q.correct_answer
    )
    assert session.score == expected == 4


def test_select_overwrites_without_advancing(questions):
    session = qs.start_session(questions)
    session = qs.select_option(session, "A1")
    session = qs.select_option(session, "B1")
    assert session.selected_answers == {0: "B1"}
    assert session.current_index == 0
    assert session.score == 0


def test_select_rejects_foreign_option(questions):
    with pytest.raises(ValidationError):
        qs.select_option(qs.start_session(questions), "B2")


def test_transitions_return_new_sessions(questions):
    start = qs.start_session(questions)
    selected = qs.select_option(start, "B1")
    assert start.selected_answers == {}
    assert selected is not start


def test_tick_counts_down_then_forces_advance(questions):
    session = qs.start_session(questions, time_limit=3)
    session = qs.tick(session)
    session = qs.tick(session)
    assert (session.current_index, session.time_remaining) == (0, 1)

    session = qs.tick(session)
    assert session.current_index == 1
    assert session.time_remaining == 3


def test_timeout_and_next_score_identically(questions):
    for pick in ("B1", "A1", None):
        session = qs.start_session(questions, time_limit=1)
        if pick is not None:
            session = qs.select_option(session, pick)
        by_timer = qs.tick(session)
        by_button = qs.advance(session)
        assert by_timer.score == by_button.score
        assert by_timer.current_index == by_button.current_index == 1
        assert by_timer.time_remaining == by_button.time_remaining == 1


def test_timeout_on_last_question_completes(questions):
    session = qs.start_session(questions, time_limit=1)
    for _ in range(10):
        session = qs.tick(session)
    assert session.is_completed
    assert session.score == 0


def test_completed_session_is_frozen(questions):
    session = play(qs.start_session(questions), [q.correct_answer for q in questions])
    for transition in (qs.advance, qs.tick, lambda s: qs.select_option(s, "A10")):
        with pytest.raises(SessionError) as excinfo:
            transition(session)
        assert excinfo.value.code == "SESSION_COMPLETED"
        assert excinfo.value.status == 409
    assert session.score == 10


def test_restart_clears_everything_and_requires_new_questions(questions):
    done = play(qs.start_session(questions), [q.correct_answer for q in questions])
    session = qs.restart(done)

    assert session.questions == ()
    assert session.current_index == 0
    assert session.score == 0
    assert session.time_remaining == 30
    assert session.selected_answers == {}
    assert session.phase is qs.Phase.IN_PROGRESS
    with pytest.raises(SessionError):
        qs.advance(session)
    with pytest.raises(SessionError):
        qs.tick(session)

    again = qs.start_session(questions)
    assert qs.advance(qs.select_option(again, "B1")).score == 1


def test_answer_log(questions):
    session = play(qs.start_session(questions), ["B1", "A2"] + [None] * 8)
    log = qs.answer_log(session)
    assert len(log) == 10
    assert (log[0].selected, log[0].is_correct) == ("B1", True)
    assert (log[1].selected, log[1].correct_answer, log[1].is_correct) == ("A2", "B2", False)
    assert log[2].selected is None and not log[2].is_correct


def test_dict_round_trip_preserves_state(questions):
    session = qs.advance(qs.select_option(qs.start_session(questions), "B1"))
    session = qs.select_option(session, "C2")
    restored = qs.session_from_dict(qs.session_to_dict(session))
    assert restored == session


def test_questions_from_payload_builds_domain_questions(questions):
    payload = [q.to_dict() for q in questions[:2]]
    parsed = qs.questions_from_payload(payload)
    assert parsed == tuple(questions[:2])
    assert isinstance(parsed[0].options, tuple)
    assert parsed[0] == Question.from_dict(payload[0])


@pytest.mark.parametrize(
    "patch",
    [
        {"currentIndex": 10},
        {"score": -1},
        {"phase": "paused"},
        {"timeRemaining": 99},
        {"selectedAnswers": {"x": "A1"}},
        {"questions": "nope"},
        {"currentIndex": True},
    ],
)
def test_session_from_dict_rejects_malformed(questions, patch):
    data = qs.session_to_dict(qs.start_session(questions))
    data.update(patch)
    with pytest.raises(ValidationError):
        qs.session_from_dict(data)
