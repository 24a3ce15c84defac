from __future__ import annotations

import pytest
import requests

from conftest import FakeResponse, FakeSession
from quiz_solver import config
from quiz_solver.fetch import (
    DocumentDownloadError,
    download_document,
    fetch_script,
    local_path_from_file_url,
    submit_answer,
)
from quiz_solver.models import InlineBytes, RemoteUrl


def test_fetch_script_returns_body() -> None:
    session = FakeSession({"https://q.example/a.js": FakeResponse(200, text="var a = 1;")})
    assert fetch_script(session, "https://q.example/a.js") == "var a = 1;"


def test_fetch_script_skips_bad_status_and_errors() -> None:
    session = FakeSession(
        {
            "https://q.example/missing.js": FakeResponse(404),
            "https://q.example/slow.js": requests.Timeout("too slow"),
        }
    )
    assert fetch_script(session, "https://q.example/missing.js") is None
    assert fetch_script(session, "https://q.example/slow.js") is None
    assert fetch_script(session, "https://q.example/unrouted.js") is None


def test_download_inline_bytes_needs_no_request() -> None:
    session = FakeSession()
    assert download_document(session, InlineBytes(b"%PDF-1.4"), "https://q.example/") == b"%PDF-1.4"
    assert session.gets == []


def test_download_relative_url_against_page() -> None:
    session = FakeSession({"https://q.example/files/doc.pdf": FakeResponse(200, content=b"%PDF-data")})
    data = download_document(session, RemoteUrl("/files/doc.pdf"), "https://q.example/quiz/1")
    assert data == b"%PDF-data"


def test_download_non_ok_is_fatal() -> None:
    session = FakeSession({"https://q.example/doc.pdf": FakeResponse(500)})
    with pytest.raises(DocumentDownloadError):
        download_document(session, RemoteUrl("https://q.example/doc.pdf"), "https://q.example/")


def test_download_local_file_url(tmp_path) -> None:
    pdf = tmp_path / "local quiz.pdf"
    pdf.write_bytes(b"%PDF-local")
    assert download_document(FakeSession(), RemoteUrl(pdf.as_uri()), "file:///") == b"%PDF-local"

    with pytest.raises(DocumentDownloadError):
        download_document(FakeSession(), RemoteUrl((tmp_path / "gone.pdf").as_uri()), "file:///")


def test_windows_file_url_to_path() -> None:
    assert local_path_from_file_url("file:///D:/quiz/data%20set.pdf") == "D:/quiz/data set.pdf"
    assert local_path_from_file_url("file:///tmp/data.pdf") == "/tmp/data.pdf"


def test_submit_answer_posts_json() -> None:
    session = FakeSession()
    payload = {"email": "a@b.c", "secret": "s", "url": "https://q.example/1", "answer": 12}
    response = submit_answer(session, "https://q.example/submit", payload)
    assert response.ok
    assert session.posts == [("https://q.example/submit", payload)]


def test_submit_answer_transport_error_is_logged_not_raised() -> None:
    session = FakeSession(post_response=requests.ConnectionError("refused"))
    assert submit_answer(session, "https://q.example/submit", {"answer": 1}) is None


def test_oversized_payload_is_not_sent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "MAX_PAYLOAD_BYTES", 32)
    session = FakeSession()
    assert submit_answer(session, "https://q.example/submit", {"answer": "x" * 100}) is None
    assert session.posts == []
