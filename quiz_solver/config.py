# config.py - environment driven settings for the quiz solver

import os

APP_SECRET = os.environ.get("APP_SECRET", "replace_me_secret")
DEBUG_DIR = os.environ.get("QUIZ_DEBUG_DIR", os.path.join(os.getcwd(), "tmp_files"))

# Timeouts (seconds)
JOB_TIMEOUT_S = int(os.environ.get("JOB_TIMEOUT_S", "170"))  # whole background job
NAV_TIMEOUT_S = int(os.environ.get("NAV_TIMEOUT_S", "60"))
SCRIPT_TIMEOUT_S = int(os.environ.get("SCRIPT_TIMEOUT_S", "20"))
DOCUMENT_TIMEOUT_S = int(os.environ.get("DOCUMENT_TIMEOUT_S", "60"))
SUBMIT_TIMEOUT_S = int(os.environ.get("SUBMIT_TIMEOUT_S", "60"))

# What to compute
TARGET_PAGE = int(os.environ.get("TARGET_PAGE", "2"))  # 1-based
VALUE_COLUMN = os.environ.get("VALUE_COLUMN", "value")
DEMO_ANSWER = os.environ.get("DEMO_ANSWER", "demo-answer-from-server")

MAX_PAYLOAD_BYTES = 1024 * 1024
PORT = int(os.environ.get("PORT", "3000"))
