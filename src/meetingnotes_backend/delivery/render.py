"""HTML rendering for summary e-mails."""

from __future__ import annotations

import html

AI_DISCLAIMER = "This summary was generated using AI and may require review."


def render_summary_html(summary: str, *, heading: str = "Meeting Summary") -> str:
    """Render ``summary`` as an e-mail body, keeping its line breaks."""
    escaped = html.escape(summary).replace("\r\n", "\n").replace("\n", "<br>")
    return (
        f"<h2>{html.escape(heading)}</h2>\n"
        '<div style="white-space: pre-wrap; font-family: Arial, sans-serif;'
        ' line-height: 1.6;">\n'
        f"{escaped}\n"
        "</div>\n"
        "<hr>\n"
        '<p style="color: #666; font-size: 12px;">\n'
        f"{AI_DISCLAIMER}\n"
        "</p>\n"
    )


__all__ = ["AI_DISCLAIMER", "render_summary_html"]
