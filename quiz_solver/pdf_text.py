# pdf_text.py - PDF bytes to page text (pages separated by form feeds)

import io
import logging
import warnings

import pdfplumber

logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", module="pdfminer")

PAGE_BREAK = "\f"


def extract_document_text(pdf_bytes):
    """Text of every page, joined with form feeds.

    ``layout=True`` keeps the horizontal spacing, so table columns stay
    separated by runs of whitespace.
    """
    pages = []
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        for page in pdf.pages:
            pages.append(page.extract_text(layout=True) or "")
    logging.info("Extracted text from %d PDF page(s)", len(pages))
    return PAGE_BREAK.join(pages)


def page_text(document_text, page_number):
    """1-based page of ``document_text``; empty when the page doesn't exist."""
    pages = document_text.split(PAGE_BREAK)
    if page_number < 1 or page_number > len(pages):
        return ""
    return pages[page_number - 1]
