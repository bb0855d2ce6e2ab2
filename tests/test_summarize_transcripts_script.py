from __future__ import annotations

import importlib.util
import json
from pathlib import Path
from types import ModuleType, SimpleNamespace

import httpx
import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "summarize_transcripts.py"


@pytest.fixture
def script() -> ModuleType:
    spec = importlib.util.spec_from_file_location("summarize_transcripts", SCRIPT_PATH)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_summary_target_adds_suffix_for_repeated_names(script, tmp_path) -> None:
    used: set[Path] = set()

    first = script._summary_target(tmp_path, "standup", used)
    second = script._summary_target(tmp_path, "standup", used)
    third = script._summary_target(tmp_path, "standup", used)
    other = script._summary_target(tmp_path, "retro", used)

    assert first == tmp_path / "standup.summary.md"
    assert second == tmp_path / "standup-2.summary.md"
    assert third == tmp_path / "standup-3.summary.md"
    assert other == tmp_path / "retro.summary.md"


def test_main_keeps_every_summary_when_names_collide(
    script, tmp_path, monkeypatch
) -> None:
    for folder in ("monday", "tuesday"):
        (tmp_path / folder).mkdir()
        (tmp_path / folder / "standup.txt").write_text(
            f"{folder} notes", encoding="utf-8"
        )

    seen: list[dict[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        seen.append(payload)
        return httpx.Response(200, json={"summary": f"Summary of {payload['transcript']}"})

    real_client = httpx.Client

    def client_factory(**kwargs):
        return real_client(
            transport=httpx.MockTransport(handler), base_url=kwargs["base_url"]
        )

    monkeypatch.setattr(script, "httpx", SimpleNamespace(Client=client_factory))
    monkeypatch.setattr(script, "_load_dotenv_if_needed", lambda: None)

    output = tmp_path / "out"
    exit_code = script.main(
        [
            str(tmp_path / "monday" / "standup.txt"),
            str(tmp_path / "tuesday" / "standup.txt"),
            "--mode",
            "timeline",
            "--instruction",
            "Only list decisions",
            "--output",
            str(output),
            "--base-url",
            "http://testserver",
        ]
    )

    assert exit_code == 0
    assert [item["instruction"] for item in seen] == ["Only list decisions"] * 2
    assert (output / "standup.summary.md").read_text(encoding="utf-8") == (
        "Summary of monday notes\n"
    )
    assert (output / "standup-2.summary.md").read_text(encoding="utf-8") == (
        "Summary of tuesday notes\n"
    )
