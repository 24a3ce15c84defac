# browser.py - headless Chromium session owned by a single job

import time
import logging

from playwright.sync_api import sync_playwright, TimeoutError as PlaywrightTimeoutError

from quiz_solver import config
from quiz_solver.page import extract_artifacts


class BrowserSession:
    """Playwright browser for one job. Use as a context manager so it is
    closed on every exit path."""

    def __init__(self):
        self._playwright = None
        self._browser = None
        self.page = None

    def __enter__(self):
        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(
            headless=True, args=["--no-sandbox", "--disable-setuid-sandbox"]
        )
        self.page = self._browser.new_context().new_page()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def navigate(self, url, timeout_s=config.NAV_TIMEOUT_S):
        logging.info("Opening quiz URL: %s", url)
        started = time.monotonic()
        try:
            self.page.goto(url, wait_until="networkidle", timeout=timeout_s * 1000)
        except PlaywrightTimeoutError:
            # the plain goto only gets what is left of the same budget
            remaining_s = max(1.0, timeout_s - (time.monotonic() - started))
            logging.info("networkidle timeout; doing plain goto (%.1fs left)", remaining_s)
            self.page.goto(url, timeout=remaining_s * 1000)
        return self.page.url

    def rendered_markup(self):
        return self.page.content()

    def artifacts(self):
        body_text = self.page.evaluate("() => document.body ? document.body.innerText || '' : ''")
        return extract_artifacts(self.rendered_markup(), self.page.url, body_text)

    def close(self):
        if self._browser is not None:
            try:
                self._browser.close()
            except Exception:
                logging.exception("Failed to close browser")
            self._browser = None
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception:
                logging.exception("Failed to stop Playwright")
            self._playwright = None
