from __future__ import annotations

import pytest

from quiz_solver import pdf_text
from quiz_solver.pdf_text import extract_document_text, page_text


class FakePage:
    def __init__(self, text: str | None) -> None:
        self.text = text
        self.layout_requested = False

    def extract_text(self, layout: bool = False) -> str | None:
        self.layout_requested = layout
        return self.text


class FakePDF:
    def __init__(self, pages: list[FakePage]) -> None:
        self.pages = pages

    def __enter__(self) -> "FakePDF":
        return self

    def __exit__(self, *exc) -> bool:
        return False


def test_pages_are_joined_with_form_feeds(monkeypatch: pytest.MonkeyPatch) -> None:
    pages = [FakePage("cover"), FakePage("Item    Value\nA    1"), FakePage(None)]
    monkeypatch.setattr(pdf_text.pdfplumber, "open", lambda stream: FakePDF(pages))

    text = extract_document_text(b"%PDF-1.4")

    assert text == "cover\fItem    Value\nA    1\f"
    assert all(page.layout_requested for page in pages)


def test_page_text_is_one_based() -> None:
    text = "first\fsecond\fthird"
    assert page_text(text, 1) == "first"
    assert page_text(text, 2) == "second"
    assert page_text(text, 3) == "third"


def test_missing_page_is_empty() -> None:
    assert page_text("only page", 2) == ""
    assert page_text("only page", 0) == ""


def test_garbage_bytes_raise() -> None:
    with pytest.raises(Exception):
        extract_document_text(b"this is not a pdf")
