# fetch.py - outbound HTTP: external scripts, the PDF itself, and the answer submission

import os
import json
import logging
from urllib.parse import urlparse, urljoin, unquote

import requests

from quiz_solver import config
from quiz_solver.models import InlineBytes


class DocumentDownloadError(RuntimeError):
    pass


def local_path_from_file_url(file_url):
    """
    Convert 'file:///D:/path/to/file' or 'file:///tmp/x.pdf' to a local path.
    Handles the leading slash URL parsers keep in front of a Windows drive.
    """
    p = urlparse(file_url).path
    if p.startswith("/") and len(p) > 2 and p[2] == ":":
        p = p[1:]
    return unquote(p)


def fetch_script(session, url, timeout_s=config.SCRIPT_TIMEOUT_S):
    """Body of an external script, or None when it can't be fetched."""
    try:
        r = session.get(url, timeout=timeout_s)
    except requests.RequestException as e:
        logging.warning("Error fetching script src %s: %s", url, e)
        return None
    if not r.ok:
        logging.warning("Failed fetching script %s status %s", url, r.status_code)
        return None
    return r.text


def download_document(session, reference, base_url, timeout_s=config.DOCUMENT_TIMEOUT_S):
    if isinstance(reference, InlineBytes):
        return reference.data

    url = urljoin(base_url, reference.url)
    if urlparse(url).scheme.lower() == "file":
        local_path = local_path_from_file_url(url)
        logging.info("Reading local PDF file %s", local_path)
        if not os.path.exists(local_path):
            raise DocumentDownloadError(f"Local file not found: {local_path}")
        with open(local_path, "rb") as f:
            return f.read()

    logging.info("Downloading PDF from %s", url)
    r = session.get(url, timeout=timeout_s)
    if not r.ok:
        raise DocumentDownloadError(f"Failed to download PDF from {url}, status: {r.status_code}")
    return r.content


def submit_answer(session, submit_url, payload, timeout_s=config.SUBMIT_TIMEOUT_S):
    """POST the payload as JSON. Returns the response, or None if nothing came back."""
    body = json.dumps(payload)
    if len(body.encode("utf-8")) > config.MAX_PAYLOAD_BYTES:
        logging.error("Submit payload too large (%d bytes); not sending", len(body.encode("utf-8")))
        return None

    logging.info("Submitting payload to %s", submit_url)
    try:
        r = session.post(submit_url, json=payload, timeout=timeout_s)
    except requests.RequestException:
        logging.exception("Error submitting answer to %s", submit_url)
        return None
    logging.info("Submit response status: %s body snippet: %s", r.status_code, r.text[:1000])
    return r
