"""
Unit tests for interview Markdown rendering.
"""
from datetime import datetime
from types import SimpleNamespace

from interview_capture.services.markdown_export import (
    build_artifact_title,
    export_filename,
    format_interview_date,
    render_interview_markdown,
)


def _session(responses=None, process=True, description="How the books get closed"):
    return SimpleNamespace(
        status="IN_PROGRESS",
        started_at=datetime(2026, 3, 7, 9, 30),
        role=SimpleNamespace(title="Accountant"),
        process=SimpleNamespace(title="Month-end close", description=description) if process else None,
        responses=responses or [],
    )


def _response(question, response=None, transcript=None, screenshot_urls=None):
    return SimpleNamespace(
        question=question,
        response=response,
        transcript=transcript,
        screenshot_urls=screenshot_urls,
    )


def test_format_interview_date_has_no_padding():
    assert format_interview_date(datetime(2026, 3, 7)) == "3/7/2026"
    assert format_interview_date(datetime(2026, 11, 25)) == "11/25/2026"


def test_render_without_responses():
    markdown = render_interview_markdown(_session())

    assert markdown.startswith("# Interview: Month-end close\n")
    assert "## Process Information" in markdown
    assert "- Role: Accountant" in markdown
    assert "- Interview Date: 3/7/2026" in markdown
    assert "- Status: IN_PROGRESS" in markdown
    assert "- Description: How the books get closed" in markdown
    assert "_No responses recorded yet._" in markdown
    assert "## Summary" not in markdown


def test_render_without_process():
    markdown = render_interview_markdown(_session(process=False))

    assert markdown.startswith("# Interview: Untitled Process\n")
    assert "- Process: N/A" in markdown
    assert "- Description" not in markdown


def test_render_responses_in_given_order():
    responses = [
        _response("Second question", response="B"),
        _response("First question", response="A", transcript="spoken A"),
    ]

    markdown = render_interview_markdown(_session(responses))

    assert markdown.index("### Question 1: Second question") < markdown.index("### Question 2: First question")
    assert "**Response:**\nA\n" in markdown
    assert "**Transcript:**\nspoken A\n" in markdown


def test_render_missing_answer_placeholder():
    markdown = render_interview_markdown(_session([_response("Unanswered")]))

    assert "**Response:** _No response provided_" in markdown
    assert "**Transcript:**" not in markdown


def test_render_screenshots_with_base_url():
    responses = [_response("Q", response="A", screenshot_urls=["/uploads/screenshots/1-abc123-a.png"])]

    markdown = render_interview_markdown(_session(responses), screenshot_base_url="https://app.example.com")

    assert "**Screenshots:**" in markdown
    assert "![Screenshot 1](https://app.example.com/uploads/screenshots/1-abc123-a.png)" in markdown


def test_render_can_omit_screenshots():
    responses = [_response("Q", response="A", screenshot_urls=["/uploads/screenshots/1-abc123-a.png"])]

    markdown = render_interview_markdown(_session(responses), include_screenshots=False)

    assert "![Screenshot" not in markdown
    assert "- Screenshots Attached: 1" in markdown


def test_render_summary_counts():
    responses = [
        _response("Q1", response="A", screenshot_urls=["/a.png", "/b.png"]),
        _response("Q2"),
        _response("Q3", response="C", screenshot_urls=["/c.png"]),
    ]

    markdown = render_interview_markdown(_session(responses))

    assert markdown.endswith(
        "## Summary\n"
        "- Total Questions: 3\n"
        "- Total Responses: 2\n"
        "- Screenshots Attached: 3\n"
    )


def test_render_is_deterministic():
    responses = [_response("Q1", response="A")]

    assert render_interview_markdown(_session(responses)) == render_interview_markdown(_session(responses))


def test_artifact_title_and_filename():
    title = build_artifact_title(_session())

    assert title == "Interview: Month-end close - Accountant - 3/7/2026"
    assert export_filename(title) == "Interview__Month_end_close___Accountant___3_7_2026.md"


def test_artifact_title_without_process():
    assert build_artifact_title(_session(process=False)) == "Interview: Untitled - Accountant - 3/7/2026"
