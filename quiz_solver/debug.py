# debug.py - best-effort dumps of intermediate artifacts for later inspection

import os
import time
import logging

from quiz_solver import config


def write_debug_artifact(fname, content):
    """Write ``content`` (str or bytes) into the debug directory.

    The filename gets a millisecond timestamp so repeated jobs don't clobber
    each other. Failures are logged and swallowed; returns the path or None.
    """
    stem, ext = os.path.splitext(fname)
    path = os.path.join(config.DEBUG_DIR, f"{stem}_{int(time.time() * 1000)}{ext}")
    try:
        os.makedirs(config.DEBUG_DIR, exist_ok=True)
        if isinstance(content, bytes):
            with open(path, "wb") as f:
                f.write(content)
        else:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        logging.info("Saved %s to: %s", fname, path)
        return path
    except Exception:
        logging.exception("Failed to write debug artifact %s", fname)
        return None


def discard_debug_artifact(fname, content):
    return None
