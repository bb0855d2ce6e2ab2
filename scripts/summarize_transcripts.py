"""CLI utility to summarize transcript files through a running backend."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Sequence

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from meetingnotes_backend.workspace import (
    CATEGORIES,
    SUMMARY_MODES,
    SummaryWorkspace,
)


def _load_dotenv_if_needed() -> None:
    dotenv_path = PROJECT_ROOT / ".env"
    if not dotenv_path.exists():
        return

    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        cleaned = value.strip().strip('"').strip("'")
        os.environ.setdefault(key, cleaned)


def _alert(message: str) -> None:
    sys.stderr.write(message + "\n")


def _summary_target(output_dir: Path, name: str, used: set[Path]) -> Path:
    """Pick ``<name>.summary.md``, adding ``-2``, ``-3`` ... when already written this run."""
    target = output_dir / f"{name}.summary.md"
    counter = 2
    while target in used:
        target = output_dir / f"{name}-{counter}.summary.md"
        counter += 1
    used.add(target)
    return target


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Summarize meeting transcripts and optionally e-mail the result.",
    )
    parser.add_argument(
        "transcripts",
        type=Path,
        nargs="+",
        help="Plain-text transcript files; each becomes one document.",
    )
    parser.add_argument(
        "--mode",
        choices=sorted(SUMMARY_MODES),
        default=None,
        help="Preset summary mode.",
    )
    parser.add_argument(
        "--instruction",
        type=str,
        default=None,
        help="Free-text instruction; overrides --mode.",
    )
    parser.add_argument(
        "--category",
        choices=CATEGORIES,
        default=None,
        help="Category applied to every loaded transcript.",
    )
    parser.add_argument(
        "--emails",
        type=str,
        default=None,
        help="Comma-separated recipients; when given the summaries are e-mailed.",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Backend base URL. Defaults to MEETINGNOTES_BACKEND_URL or http://127.0.0.1:8000.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional directory to write one <name>.summary.md file per transcript (repeated names get -2, -3, ...).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _create_parser()
    args = parser.parse_args(argv)

    for path in args.transcripts:
        if not path.is_file():
            parser.error(f"transcript file does not exist: {path}")

    _load_dotenv_if_needed()
    base_url = (
        args.base_url
        or os.getenv("MEETINGNOTES_BACKEND_URL")
        or "http://127.0.0.1:8000"
    )

    failures = 0
    with httpx.Client(base_url=base_url, timeout=None) as client:
        workspace = SummaryWorkspace(client, notify=_alert)
        if args.mode:
            workspace.apply_mode(args.mode)
        if args.instruction is not None:
            workspace.set_instruction(args.instruction)
        if args.emails:
            workspace.recipients = args.emails

        for path in args.transcripts:
            document = workspace.store.add_uploaded_file(
                path.name, path.read_text(encoding="utf-8")
            )
            if document is not None and args.category:
                workspace.store.update_document(document.id, category=args.category)

        used_targets: set[Path] = set()
        for document in workspace.store.documents:
            workspace.store.select_document(document.id)
            summary = workspace.generate_summary()
            if summary is None:
                failures += 1
                continue

            if args.output:
                args.output.mkdir(parents=True, exist_ok=True)
                target = _summary_target(args.output, document.name, used_targets)
                target.write_text(summary + "\n", encoding="utf-8")
            else:
                sys.stdout.write(f"# {document.name} ({document.category})\n\n")
                sys.stdout.write(summary + "\n\n")

            if args.emails and not workspace.send_summary():
                failures += 1

    return 1 if failures else 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
