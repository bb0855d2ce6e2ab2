"""Prompt generation utilities for meeting summarization."""

from __future__ import annotations

DEFAULT_INSTRUCTION = "Summarize the key points and action items from this meeting."

_TRANSCRIPT_HEADER = "Meeting Transcript:"
_CLOSING_DIRECTIVE = (
    "Please provide a well-structured summary based on the instruction above."
)


def resolve_instruction(instruction: str | None) -> str:
    """Return the trimmed instruction, or the default one when blank."""
    if instruction is None:
        return DEFAULT_INSTRUCTION
    stripped = instruction.strip()
    return stripped or DEFAULT_INSTRUCTION


def build_summary_prompt(*, transcript: str, instruction: str | None = None) -> str:
    """Combine the instruction and transcript into a single user prompt."""
    if not transcript.strip():
        raise ValueError("transcript must contain text")

    return (
        f"{resolve_instruction(instruction)}\n\n"
        f"{_TRANSCRIPT_HEADER}\n"
        f"{transcript}\n\n"
        f"{_CLOSING_DIRECTIVE}"
    )


__all__ = ["DEFAULT_INSTRUCTION", "build_summary_prompt", "resolve_instruction"]
