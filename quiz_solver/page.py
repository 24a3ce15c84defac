# page.py - turn rendered quiz markup into PageArtifacts, find the submit target

import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from quiz_solver.models import PageArtifacts

SUBMIT_RE = re.compile(r"submit", re.I)
SUBMIT_URL_RE = re.compile(r"https?://[^\s'\"]+/[^\s'\"]*submit[^\s'\"]*", re.I)


def extract_artifacts(html_text, base_url, body_text=None):
    """
    Collect what the resolver searches from rendered markup:
    - anchors with href (resolved against base_url, like a.href)
    - inline <script> bodies
    - external <script src> values as written
    - form actions (resolved)
    body_text is the browser's innerText when available; otherwise the
    soup's text is used.
    """
    soup = BeautifulSoup(html_text or "", "html.parser")

    links = tuple(
        (a.get_text(strip=True), urljoin(base_url, a["href"]))
        for a in soup.find_all("a", href=True)
    )
    inline_scripts = tuple(
        script.string or script.get_text() or ""
        for script in soup.find_all("script")
        if not script.get("src")
    )
    script_srcs = tuple(script["src"] for script in soup.find_all("script", src=True) if script["src"])
    form_actions = tuple(urljoin(base_url, f["action"]) for f in soup.find_all("form", action=True))

    if body_text is None:
        body = soup.body or soup
        body_text = body.get_text("\n")

    return PageArtifacts(
        links=links,
        inline_scripts=inline_scripts,
        external_script_sources=script_srcs,
        body_text=body_text,
        base_url=base_url,
        form_actions=form_actions,
    )


def find_submit_url(artifacts):
    for _text, href in artifacts.links:
        if SUBMIT_RE.search(href):
            return href
    for action in artifacts.form_actions:
        if SUBMIT_RE.search(action):
            return action
    m = SUBMIT_URL_RE.search(artifacts.body_text)
    if m:
        return m.group(0)
    return None
