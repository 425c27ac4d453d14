"""
Markdown rendering for interview sessions.

Pure functions: the same session data and options always produce the same
document. Sessions are read through attributes, so ORM rows and simple
stand-in objects both work.
"""
import re
from datetime import datetime


def format_interview_date(value: datetime) -> str:
    """US-style M/D/YYYY without zero padding."""
    return f"{value.month}/{value.day}/{value.year}"


def _screenshot_urls(response) -> list:
    urls = response.screenshot_urls
    return urls if isinstance(urls, list) else []


def render_interview_markdown(
    session,
    include_screenshots: bool = True,
    screenshot_base_url: str = "",
) -> str:
    """
    Render a session, its role, process and responses as Markdown.

    Responses are rendered in the order given (storage order), not process
    question order.
    """
    process = session.process
    process_title = process.title if process else None
    responses = list(session.responses or [])

    lines = [f"# Interview: {process_title or 'Untitled Process'}", ""]

    lines.append("## Process Information")
    lines.append(f"- Process: {process_title or 'N/A'}")
    lines.append(f"- Role: {session.role.title}")
    lines.append(f"- Interview Date: {format_interview_date(session.started_at)}")
    lines.append(f"- Status: {session.status}")
    if process and process.description:
        lines.append(f"- Description: {process.description}")
    lines.append("")

    lines.append("## Questions and Responses")
    lines.append("")

    if not responses:
        lines.append("_No responses recorded yet._")
        return "\n".join(lines) + "\n"

    for number, response in enumerate(responses, start=1):
        lines.append(f"### Question {number}: {response.question}")
        lines.append("")

        if response.response:
            lines.append("**Response:**")
            lines.append(response.response)
        else:
            lines.append("**Response:** _No response provided_")
        lines.append("")

        if response.transcript:
            lines.append("**Transcript:**")
            lines.append(response.transcript)
            lines.append("")

        urls = _screenshot_urls(response)
        if include_screenshots and urls:
            lines.append("**Screenshots:**")
            lines.append("")
            for index, url in enumerate(urls, start=1):
                lines.append(f"![Screenshot {index}]({screenshot_base_url}{url})")
                lines.append("")

    answered = sum(1 for r in responses if r.response)
    screenshots = sum(len(_screenshot_urls(r)) for r in responses)

    lines.append("## Summary")
    lines.append(f"- Total Questions: {len(responses)}")
    lines.append(f"- Total Responses: {answered}")
    lines.append(f"- Screenshots Attached: {screenshots}")

    return "\n".join(lines) + "\n"


def build_artifact_title(session) -> str:
    """Title shared by every export of the same process/role/interview date."""
    process_title = session.process.title if session.process else None
    return (
        f"Interview: {process_title or 'Untitled'} - {session.role.title} - "
        f"{format_interview_date(session.started_at)}"
    )


def export_filename(title: str) -> str:
    return re.sub(r"[^a-z0-9]", "_", title, flags=re.IGNORECASE) + ".md"
