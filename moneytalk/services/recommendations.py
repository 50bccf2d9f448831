"""AI recommendations: the HTTP client for the insights endpoint and the
time-limited cache that sits in front of it.

A cached result is valid for a fixed window (seven days by default) counted
from when it was generated. Expired results are dropped on load and never
regenerated automatically; the user asks for new ones explicitly.
"""
import json
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import requests
from sqlalchemy.exc import SQLAlchemyError

from ..errors import APIFailure
from ..extensions import db
from ..models import RecommendationCacheEntry
from .summary import economic_context, prepare_transaction_summary

logger = logging.getLogger(__name__)

IMPACT_LEVELS = ("high", "medium", "low")
DAY_MS = 24 * 60 * 60 * 1000
HOUR_MS = 60 * 60 * 1000
GENERATE_ERROR = "Failed to generate AI recommendations. Please try refreshing manually."


def now_ms() -> int:
    return int(time.time() * 1000)


def normalize_recommendation(raw: dict) -> dict:
    impact = raw.get("impact")
    if impact not in IMPACT_LEVELS:
        impact = "medium"
    action_items = raw.get("actionItems")
    try:
        confidence = float(raw.get("confidence") or 0.8)
    except (TypeError, ValueError):
        confidence = 0.8
    return {
        "type": raw.get("type") or "general",
        "title": raw.get("title") or "Financial Recommendation",
        "description": raw.get("description") or "",
        "impact": impact,
        "savings": raw.get("savings") or 0,
        "actionItems": action_items if isinstance(action_items, list) else [],
        "economicContext": raw.get("economicContext") or "",
        "confidence": min(1.0, max(0.0, confidence)),
    }


def normalize_recommendations(items) -> List[dict]:
    if not isinstance(items, list):
        return []
    return [normalize_recommendation(item) for item in items if isinstance(item, dict)]


class RecommendationClient:
    """Posts a spending summary to the insights endpoint."""

    def __init__(self, base_url: str, timeout: float = 60, session: Optional[requests.Session] = None,
                 token: Optional[str] = None):
        self.url = base_url.rstrip("/") + "/ai-insights"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Authorization": f"Bearer {token}"} if token else {}

    def fetch(self, user_id, transaction_summary: str, economic_context: str) -> List[dict]:
        payload = {
            "userId": user_id,
            "transactionSummary": transaction_summary,
            "economicContext": economic_context,
        }
        try:
            response = self.session.post(self.url, json=payload, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise APIFailure(f"Could not reach the recommendations service: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise APIFailure("Recommendations service returned an invalid response") from e

        if not response.ok:
            message = body.get("error") if isinstance(body, dict) else None
            raise APIFailure(message or "Failed to generate AI recommendations")
        if not isinstance(body, dict):
            raise APIFailure("Recommendations service returned an invalid response")
        return normalize_recommendations(body.get("recommendations") or [])


class FileCacheStore:
    """A single JSON slot on disk holding ``{"data": [...], "timestamp": ms}``.

    The slot is shared by whoever uses the file; it is not keyed by user.
    """

    def __init__(self, path):
        self.path = Path(path)

    def read(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        return json.loads(self.path.read_text(encoding="utf-8"))

    def write(self, entry: dict):
        self.path.write_text(json.dumps(entry), encoding="utf-8")

    def clear(self):
        if self.path.exists():
            self.path.unlink()


class DatabaseCacheStore:
    """One row per user in ``ai_recommendations_cache``."""

    def __init__(self, user_id):
        self.user_id = user_id

    def _row(self):
        return RecommendationCacheEntry.query.filter_by(user_id=self.user_id).first()

    def read(self) -> Optional[dict]:
        row = self._row()
        if row is None:
            return None
        return {"data": row.recommendations, "timestamp": row.timestamp}

    def write(self, entry: dict):
        row = self._row()
        if row is None:
            row = RecommendationCacheEntry(user_id=self.user_id)
            db.session.add(row)
        row.recommendations = entry["data"]
        row.timestamp = entry["timestamp"]
        self._commit()

    def clear(self):
        RecommendationCacheEntry.query.filter_by(user_id=self.user_id).delete()
        self._commit()

    def _commit(self):
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise


class RecommendationCache:
    def __init__(self, store, client: RecommendationClient, ttl_days: int = 7, clock=now_ms):
        self.store = store
        self.client = client
        self.ttl_ms = ttl_days * DAY_MS
        self.clock = clock
        self.entry: Optional[dict] = None
        self.error = ""

    @property
    def recommendations(self) -> List[dict]:
        return list(self.entry["data"]) if self.entry else []

    @property
    def last_refresh(self) -> Optional[datetime]:
        if not self.entry:
            return None
        return datetime.utcfromtimestamp(self.entry["timestamp"] / 1000)

    def is_fresh(self, entry: Optional[dict]) -> bool:
        return bool(entry) and (self.clock() - entry["timestamp"]) < self.ttl_ms

    def is_valid(self) -> bool:
        return self.is_fresh(self.entry)

    def load(self) -> List[dict]:
        try:
            stored = self.store.read()
        except (OSError, ValueError) as e:
            logger.warning("Failed to load cached AI recommendations: %s", e)
            stored = None

        if stored is not None and not (isinstance(stored, dict) and isinstance(stored.get("timestamp"), (int, float))):
            logger.warning("Ignoring malformed cached AI recommendations")
            stored = None

        if stored is None:
            self.entry = None
        elif self.is_fresh(stored):
            self.entry = {"data": normalize_recommendations(stored.get("data")), "timestamp": int(stored["timestamp"])}
        else:
            logger.info("Cached AI recommendations expired, clearing")
            self.entry = None
            self.store.clear()
        return self.recommendations

    def time_remaining(self) -> Optional[str]:
        if not self.entry:
            return None
        remaining = self.ttl_ms - (self.clock() - self.entry["timestamp"])
        if remaining <= 0:
            return None
        days = remaining // DAY_MS
        hours = (remaining % DAY_MS) // HOUR_MS
        if days > 0:
            return f"{days}d {hours}h"
        return f"{hours}h"

    def status(self) -> dict:
        last = self.last_refresh
        return {
            "valid": self.is_valid(),
            "last_refresh": last.isoformat() if last else None,
            "expires_in": self.time_remaining() if self.is_valid() else None,
            "error": self.error,
        }

    def generate(self, user_id, transactions, budget_limits, now: Optional[datetime] = None) -> List[dict]:
        transactions = list(transactions)
        if not transactions:
            return self.recommendations

        self.error = ""
        try:
            summary = prepare_transaction_summary(transactions, budget_limits, now)
            recommendations = self.client.fetch(user_id, summary, economic_context(now))
        except APIFailure as e:
            logger.error("Error generating AI recommendations: %s", e.message)
            self.error = GENERATE_ERROR
            return self.recommendations

        self.entry = {"data": recommendations, "timestamp": self.clock()}
        try:
            self.store.write(self.entry)
        except (OSError, SQLAlchemyError) as e:
            logger.warning("Failed to cache AI recommendations: %s", e)
        return self.recommendations

    def manual_refresh(self, user_id, transactions, budget_limits, now: Optional[datetime] = None) -> List[dict]:
        self.store.clear()
        self.entry = None
        return self.generate(user_id, transactions, budget_limits, now)


def cache_for_user(app, user_id) -> RecommendationCache:
    config = app.config
    if config["RECOMMENDATIONS_CACHE"] == "file":
        store = FileCacheStore(config["RECOMMENDATIONS_CACHE_PATH"])
    else:
        store = DatabaseCacheStore(user_id)
    client = RecommendationClient(
        config["FUNCTIONS_BASE_URL"], config["FUNCTIONS_TIMEOUT"], token=config["FUNCTIONS_TOKEN"]
    )
    cache = RecommendationCache(store, client, ttl_days=config["RECOMMENDATIONS_TTL_DAYS"])
    cache.load()
    return cache
