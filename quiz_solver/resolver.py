# resolver.py - locate the PDF a quiz page links to, embeds or hides in its scripts

import re
import json
import base64
import logging
from urllib.parse import urljoin

from quiz_solver.debug import discard_debug_artifact
from quiz_solver.models import NOT_FOUND, CandidateDecode, InlineBytes, RemoteUrl

PDF_HREF_RE = re.compile(r"\.pdf(\?|$)", re.I)
PDF_URL_RE = re.compile(r"https?://[^\s'\"]+\.pdf[^\s'\"]*", re.I)
PDF_EXT_RE = re.compile(r"\.pdf", re.I)
DATA_URI_RE = re.compile(r"data:application/pdf;base64,([A-Za-z0-9+/=\r\n]+)", re.I)
ATOB_RE = re.compile(r"atob\(\s*(`.*?`|\".*?\"|'.*?')\s*\)", re.S)
LONG_BLOB_RE = re.compile(r"[A-Za-z0-9+/=\r\n]{300,}")
BASE64_RE = re.compile(r"^[A-Za-z0-9+/=]+$")
JSON_BLOCK_RE = re.compile(r"\{.*\}", re.S)
SUBMIT_RE = re.compile(r"submit", re.I)

LONG_BLOB_MIN = 300
SEPARATOR = "\n\n"


def b64decode_lenient(text):
    """Decode base64 the way a browser's atob would accept it.

    Whitespace is dropped and missing padding restored. Raises ValueError
    when the input still can't be decoded.
    """
    cleaned = re.sub(r"\s+", "", text)
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned)


def extract_json_block(text):
    """Parse the first ``{...}`` block in ``text`` as a JSON object, or None."""
    m = JSON_BLOCK_RE.search(text)
    if not m:
        return None
    try:
        parsed = json.loads(m.group(0))
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _pdf_field(data):
    for key in ("url", "file"):
        value = data.get(key)
        if isinstance(value, str) and PDF_EXT_RE.search(value):
            return value
    return None


class SearchContext:
    """Inputs for one resolution attempt.

    ``combined_text`` is only built (and external scripts only fetched) the
    first time a strategy asks for it. ``submit_hint`` is filled in by the
    embedded-structure scan when the JSON it parses names a submission target.
    """

    def __init__(self, artifacts, fetch_script, debug=discard_debug_artifact, markup=""):
        self.artifacts = artifacts
        self.fetch_script = fetch_script
        self.debug = debug
        self.markup = markup
        self._combined_text = None
        self.submit_hint = None

    @property
    def harvested(self):
        return self._combined_text is not None

    @property
    def combined_text(self):
        if self._combined_text is None:
            self._combined_text = self._harvest()
        return self._combined_text

    def _harvest(self):
        artifacts = self.artifacts
        logging.info("Gathering inline scripts (%d) and external scripts (%d)",
                     len(artifacts.inline_scripts), len(artifacts.external_script_sources))
        if self.markup:
            self.debug("page.html", self.markup)

        parts = list(artifacts.inline_scripts)
        for src in artifacts.external_script_sources:
            resolved = urljoin(artifacts.base_url, src)
            logging.info("Fetching external script: %s", resolved)
            body = self.fetch_script(resolved)
            if body is not None:
                parts.append(body)
        parts.append(artifacts.body_text)

        combined = SEPARATOR.join(parts)
        self.debug("scripts_combined.txt", combined)
        return combined


# -------------------------
# Strategies, tried in order
# -------------------------
def scan_direct_links(context):
    for _text, href in context.artifacts.links:
        if PDF_HREF_RE.search(href):
            return RemoteUrl(href)
    m = PDF_URL_RE.search(context.artifacts.body_text)
    if m:
        return RemoteUrl(m.group(0))
    return None


def scan_data_uri(context):
    m = DATA_URI_RE.search(context.combined_text)
    if not m:
        return None
    try:
        data = b64decode_lenient(m.group(1))
    except ValueError:
        logging.warning("data:application/pdf payload is not valid base64")
        return None
    logging.info("Found data:application/pdf;base64 payload (%d bytes)", len(data))
    return InlineBytes(data)


def atob_literals(text):
    """Yield the string literal of every ``atob(...)`` call, delimiters stripped."""
    for m in ATOB_RE.finditer(text):
        yield m.group(1)[1:-1]


def scan_decode_calls(context):
    for literal in atob_literals(context.combined_text):
        try:
            candidate = CandidateDecode(raw=literal, data=b64decode_lenient(literal))
        except ValueError:
            continue

        if candidate.looks_like_document:
            logging.info("Decoded atob(...) literal to PDF (%d bytes)", len(candidate.data))
            return InlineBytes(candidate.data)

        text = candidate.text
        context.debug("decoded_atob_text.txt", text)
        m = PDF_URL_RE.search(text)
        if m:
            logging.info("Found PDF URL inside decoded atob text: %s", m.group(0))
            return RemoteUrl(m.group(0))
        parsed = extract_json_block(text)
        if parsed:
            url = _pdf_field(parsed)
            if url:
                logging.info("Found PDF URL in decoded atob JSON: %s", url)
                return RemoteUrl(url)
    return None


def find_long_base64_blob(text, min_len=LONG_BLOB_MIN):
    for m in LONG_BLOB_RE.finditer(text):
        candidate = re.sub(r"\s+", "", m.group(0))
        if len(candidate) >= min_len and BASE64_RE.match(candidate):
            return candidate
    return None


def scan_long_blob(context):
    # Only the first qualifying blob is tried.
    blob = find_long_base64_blob(context.combined_text)
    if blob is None:
        return None
    logging.info("Found long base64 blob (%d chars); attempting to decode as PDF", len(blob))
    try:
        candidate = CandidateDecode(raw=blob, data=b64decode_lenient(blob))
    except ValueError:
        logging.warning("Long base64 blob failed to decode")
        return None
    if not candidate.looks_like_document:
        logging.info("Long base64 blob decoded but did not start with %PDF; skipping")
        return None
    return InlineBytes(candidate.data)


def scan_embedded_structure(context):
    parsed = extract_json_block(context.combined_text)
    if parsed is None:
        logging.info("No JSON block parseable from combined scripts")
        return None
    context.submit_hint = submit_url_from_structure(parsed)
    url = _pdf_field(parsed)
    if url:
        logging.info("Found PDF URL in embedded JSON: %s", url)
        return RemoteUrl(url)
    logging.info("Parsed JSON found but it has no .pdf url")
    return None


STRATEGIES = (
    scan_direct_links,
    scan_data_uri,
    scan_decode_calls,
    scan_long_blob,
    scan_embedded_structure,
)


def resolve(context, strategies=STRATEGIES):
    """Return the first reference any strategy produces, else NOT_FOUND."""
    for strategy in strategies:
        reference = strategy(context)
        if reference is not None:
            logging.info("%s resolved %s", strategy.__name__, reference)
            return reference
    logging.info("No PDF reference found on the page, in scripts or in embedded data")
    return NOT_FOUND


def submit_url_from_structure(parsed):
    """Submission target named by an embedded JSON object, if any."""
    submit_url = parsed.get("submit_url")
    if isinstance(submit_url, str) and submit_url:
        return submit_url
    url = parsed.get("url")
    if isinstance(url, str) and SUBMIT_RE.search(url):
        return url
    return None
