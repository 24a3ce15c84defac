from __future__ import annotations

from pathlib import Path

import pytest

from quiz_solver import config
from quiz_solver.debug import write_debug_artifact


def test_writes_text_and_bytes(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config, "DEBUG_DIR", str(tmp_path / "debug"))

    text_path = write_debug_artifact("page.html", "<html></html>")
    pdf_path = write_debug_artifact("quiz_saved.pdf", b"%PDF-1.4")

    assert Path(text_path).read_text(encoding="utf-8") == "<html></html>"
    assert Path(pdf_path).read_bytes() == b"%PDF-1.4"
    assert Path(text_path).name.startswith("page_")
    assert Path(pdf_path).suffix == ".pdf"


def test_write_failure_is_swallowed(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.setattr(config, "DEBUG_DIR", str(blocker))

    assert write_debug_artifact("page.html", "<html></html>") is None


def test_non_os_error_is_swallowed_too(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config, "DEBUG_DIR", str(tmp_path / "debug"))

    assert write_debug_artifact("answer.txt", 42) is None
