from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from question_bank.config import (
    DATASET_TIMEOUT_SECONDS,
    QUESTIONS_DATASET_PATH,
    QUESTIONS_DATASET_URL,
    TOPIC_LABELS,
)
from question_bank.core.models import Company
from question_bank.core.normalizer import normalize_dataset

logger = logging.getLogger(__name__)


class DatasetLoaderError(Exception):
    """Raised when the question dataset cannot be read or has an unexpected top-level shape."""


def _build_retry_session() -> requests.Session:
    """
    Build a requests Session with conservative retries.
    Static hosting (raw GitHub, buckets) can be transiently flaky.
    """
    session = requests.Session()

    retry = Retry(
        total=3,
        connect=3,
        read=3,
        status=3,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )

    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)

    return session


_SESSION: Optional[requests.Session] = None

# In-memory cache of normalized companies (one load per process)
_COMPANIES_CACHE: Optional[List[Company]] = None


def _get_session() -> requests.Session:
    global _SESSION
    if _SESSION is None:
        _SESSION = _build_retry_session()
    return _SESSION


def _ensure_object(data: Any, source: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DatasetLoaderError(
            f"Dataset at {source} must be a JSON object keyed by company name, got {type(data).__name__}."
        )
    return data


def _read_local(path: Path) -> Dict[str, Any]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise DatasetLoaderError(f"Could not read dataset file {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except ValueError as exc:
        raise DatasetLoaderError(f"Dataset file {path} is not valid JSON: {exc}") from exc

    return _ensure_object(data, str(path))


def _read_remote(url: str, timeout_seconds: int, session: Optional[requests.Session] = None) -> Dict[str, Any]:
    http = session or _get_session()
    try:
        resp = http.get(url, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise DatasetLoaderError(f"HTTP error while fetching dataset from {url}: {exc}") from exc

    if resp.status_code != 200:
        raise DatasetLoaderError(f"Dataset request to {url} failed with status {resp.status_code}.")

    try:
        data = resp.json()
    except ValueError as exc:
        preview = (resp.text or "")[:200]
        raise DatasetLoaderError(f"Non-JSON dataset response from {url}. Preview: {preview}") from exc

    return _ensure_object(data, url)


def load_raw_dataset(
    *,
    path: Optional[Path] = None,
    url: Optional[str] = None,
    timeout_seconds: int = DATASET_TIMEOUT_SECONDS,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """
    Read the raw dataset (a JSON object keyed by company name).

    Resolution order:
      - explicit `url`, then explicit `path`
      - QUESTIONS_DATASET_URL, then QUESTIONS_DATASET_PATH from config
    """
    source_url = (url or "").strip()
    if not source_url and path is None:
        source_url = QUESTIONS_DATASET_URL

    if source_url:
        logger.info("Loading question dataset from %s", source_url)
        return _read_remote(source_url, timeout_seconds, session=session)

    local = Path(path) if path is not None else QUESTIONS_DATASET_PATH
    logger.info("Loading question dataset from %s", local)
    return _read_local(local)


def load_companies(
    refresh: bool = False,
    *,
    topic_labels: Optional[Mapping[str, str]] = None,
    path: Optional[Path] = None,
    url: Optional[str] = None,
) -> List[Company]:
    """
    Return the normalized companies, cached in memory after the first load.
    """
    global _COMPANIES_CACHE
    if _COMPANIES_CACHE is not None and not refresh:
        return _COMPANIES_CACHE

    raw = load_raw_dataset(path=path, url=url)
    labels = TOPIC_LABELS if topic_labels is None else topic_labels
    companies = normalize_dataset(raw, labels)
    logger.info("Loaded %d companies.", len(companies))

    _COMPANIES_CACHE = companies
    return companies
