"""
Tests for task outcome resolution: the result column wins, the legacy
"Answer: ..." line in the description is only a fallback.
"""
from organizer.domain.planner.models import Task


def _task(status="done", description=None, result=None) -> Task:
    return Task(
        id=1,
        project_id=1,
        title="Book midwife course",
        description=description,
        status=status,
        due_date=None,
        priority=2,
        result=result,
        created_at="2025-03-01T10:00:00+00:00",
        updated_at="2025-03-01T10:00:00+00:00",
    )


def test_result_field_wins_over_legacy_answer():
    task = _task(description="Call the clinic\nAnswer: Tuesday 18:00", result="Thursday 19:00")

    assert task.resolved_result() == "Thursday 19:00"
    assert task.render_content() == "Thursday 19:00"


def test_legacy_answer_used_when_result_missing():
    task = _task(description="Call the clinic\nAntwort: Dienstag 18 Uhr")

    assert task.resolved_result() == "Dienstag 18 Uhr"
    assert task.render_content() == "Dienstag 18 Uhr"


def test_last_legacy_answer_line_wins():
    task = _task(description="Result: first\nsome text\nresult: second")

    assert task.legacy_answer() == "second"


def test_open_task_renders_description_without_answer_lines():
    task = _task(status="todo", description="Call the clinic\nAnswer: Tuesday", result="ignored while open")

    assert task.render_content() == "Call the clinic"


def test_done_task_without_any_result_shows_description():
    task = _task(description="Just a note")

    assert task.resolved_result() is None
    assert task.render_content() == "Just a note"


def test_empty_description():
    task = _task(description=None)

    assert task.legacy_answer() is None
    assert task.plain_description() == ""
    assert task.render_content() == ""
