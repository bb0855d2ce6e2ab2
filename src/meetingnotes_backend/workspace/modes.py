"""Preset summary instruction modes."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

SUMMARY_MODES: Mapping[str, str] = MappingProxyType(
    {
        "executive": (
            "Create an executive summary with key decisions, outcomes, and"
            " strategic implications."
        ),
        "actionItems": (
            "Extract all action items, deadlines, and assigned responsibilities"
            " in a clear list format."
        ),
        "sentiment": (
            "Analyze the sentiment and tone of the meeting, including participant"
            " engagement and concerns."
        ),
        "timeline": (
            "Create a chronological timeline of events, decisions, and discussion"
            " points from the meeting."
        ),
    }
)


def mode_instruction(mode_key: str) -> str:
    """Return the fixed instruction text for ``mode_key``."""
    try:
        return SUMMARY_MODES[mode_key]
    except KeyError:
        raise KeyError(
            f"unknown summary mode {mode_key!r}; expected one of {sorted(SUMMARY_MODES)}"
        ) from None


__all__ = ["SUMMARY_MODES", "mode_instruction"]
