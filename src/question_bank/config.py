from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Project paths
# ---------------------------------------------------------------------------

# Root of the project (repo root)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_DATASET_PATH = DATA_DIR / "questions.json"

# ---------------------------------------------------------------------------
# App identity
# ---------------------------------------------------------------------------

APP_NAME = "Company Question Bank"
APP_VERSION = "0.1.0"

LOG_LEVEL = os.getenv("QUESTION_BANK_LOG_LEVEL", "INFO").strip().upper() or "INFO"

# ---------------------------------------------------------------------------
# Dataset location
#
# The dataset is a single JSON object keyed by company name. It is read once
# per process. A remote URL takes precedence over the local path when set.
# ---------------------------------------------------------------------------

QUESTIONS_DATASET_PATH = Path(
    os.getenv("QUESTIONS_DATASET_PATH", str(DEFAULT_DATASET_PATH)).strip()
)
QUESTIONS_DATASET_URL = os.getenv("QUESTIONS_DATASET_URL", "").strip()
DATASET_TIMEOUT_SECONDS = int(os.getenv("QUESTIONS_DATASET_TIMEOUT", "30"))

# ---------------------------------------------------------------------------
# Facet vocabularies
# ---------------------------------------------------------------------------

# Interview section key -> human readable topic label.
# Passed explicitly to the normalizer; never read implicitly by core code.
TOPIC_LABELS = {
    "dsa": "Data Structures & Algorithms",
    "os": "Operating System",
    "dbms": "Database Management System",
    "oops": "Object Oriented Programming",
    "system_design": "System Design",
    "behavioral": "HR / Behavioral",
}

# value -> label shown in the selector
ROLE_OPTIONS = {
    "Software Engineer": "Software Engineer",
    "SDE-1": "SDE-1",
    "SDE-2": "SDE-2",
    "Intern": "SDE-3",
    "Backend Developer": "Backend Developer",
}

YOE_OPTIONS = {
    "College Graduate": "College Graduate",
    "0": "1",
    "1": "2+",
    "2": "3+",
    "3+": "4+",
}

DIFFICULTY_OPTIONS = ["Easy", "Medium", "Hard"]

# ---------------------------------------------------------------------------
# Export artifacts
# ---------------------------------------------------------------------------

CSV_EXPORT_FILENAME = "questions_export.csv"
MARKDOWN_EXPORT_FILENAME = "questions.md"
PDF_EXPORT_FILENAME = "questions_report.pdf"
PDF_TITLE = "Interview / OA Questions"
