"""Meeting summarization helpers."""

from .openai import (
    NO_SUMMARY_PLACEHOLDER,
    CompletionConfig,
    SummarizationError,
    SummaryRequestFn,
    call_chat_completion_api,
    generate_summary,
)
from .prompt import DEFAULT_INSTRUCTION, build_summary_prompt, resolve_instruction

__all__ = [
    "CompletionConfig",
    "DEFAULT_INSTRUCTION",
    "NO_SUMMARY_PLACEHOLDER",
    "SummarizationError",
    "SummaryRequestFn",
    "build_summary_prompt",
    "call_chat_completion_api",
    "generate_summary",
    "resolve_instruction",
]
