"""Turns a voice recording (or its transcript) into a draft transaction."""
import base64
import logging
import re
from dataclasses import asdict, dataclass
from typing import Optional

import requests

from ..categories import CATEGORY_KEYWORDS, DEFAULT_CATEGORY, INCOME_KEYWORDS
from ..errors import APIFailure

logger = logging.getLogger(__name__)

AMOUNT_RE = re.compile(r"\$?(\d+(?:\.\d{2})?)")
MANUAL_HINT = "You can still add the transaction manually."


@dataclass
class AnalysisResult:
    transcript: str
    type: str
    category: str
    amount: float
    description: str
    confidence: float
    fallback: bool = False

    def to_dict(self):
        return asdict(self)


def analyze_transcript_fallback(transcript: str) -> dict:
    """Keyword heuristics used when the AI analysis is unavailable.

    The first amount in the text is taken as the value. Any income keyword
    makes it income. The category is the first entry of the keyword table
    with a hit, and more hits mean more confidence, capped at 0.9.
    """
    text = transcript.lower()

    match = AMOUNT_RE.search(text)
    amount = float(match.group(1)) if match else 0.0

    kind = "income" if any(k in text for k in INCOME_KEYWORDS) else "expense"

    category = DEFAULT_CATEGORY
    confidence = 0.5
    for name, keywords in CATEGORY_KEYWORDS:
        hits = sum(1 for k in keywords if k in text)
        if hits:
            category = name
            confidence = min(0.9, 0.6 + hits * 0.1)
            break

    description = transcript
    if amount > 0:
        description = " ".join(AMOUNT_RE.sub("", transcript, count=1).split())

    return {
        "type": kind,
        "category": category,
        "amount": amount,
        "description": description or f"{category} transaction",
        "confidence": round(confidence, 2),
    }


class AudioAnalyzer:
    def __init__(self, base_url: str, timeout: float = 60, session: Optional[requests.Session] = None,
                 token: Optional[str] = None):
        self.url = base_url.rstrip("/") + "/analyze-audio"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Authorization": f"Bearer {token}"} if token else {}

    def _request(self, payload: dict) -> dict:
        try:
            response = self.session.post(self.url, json=payload, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise APIFailure(f"Analysis failed: could not reach the analysis service. {MANUAL_HINT}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise APIFailure(f"Analysis failed: invalid response from the analysis service. {MANUAL_HINT}") from e
        if not isinstance(body, dict):
            raise APIFailure(f"Analysis failed: invalid response from the analysis service. {MANUAL_HINT}")
        if not response.ok:
            raise APIFailure(f"Analysis failed: {body.get('error') or 'Failed to analyze audio'}. {MANUAL_HINT}")
        return body

    def analyze(self, user_id, audio: Optional[bytes] = None, transcript: Optional[str] = None) -> AnalysisResult:
        if not audio and not transcript:
            raise APIFailure(f"Analysis failed: no audio or transcript provided. {MANUAL_HINT}", status_code=400)

        payload = {"userId": user_id}
        if audio:
            payload["audioData"] = base64.b64encode(audio).decode("ascii")
        if transcript:
            payload["transcript"] = transcript

        try:
            body = self._request(payload)
            return AnalysisResult(
                transcript=str(body["transcript"]),
                type=body["type"] if body["type"] in ("income", "expense") else "expense",
                category=str(body["category"]),
                amount=abs(float(body["amount"])),
                description=str(body.get("description") or "Transaction"),
                confidence=float(body.get("confidence") or 0.5),
            )
        except (KeyError, TypeError, ValueError) as e:
            failure = APIFailure(f"Analysis failed: incomplete response from the analysis service. {MANUAL_HINT}")
            failure.__cause__ = e
        except APIFailure as e:
            failure = e

        if not transcript:
            raise failure
        logger.warning("Audio analysis unavailable (%s), falling back to keyword analysis", failure.message)
        return AnalysisResult(transcript=transcript, fallback=True, **analyze_transcript_fallback(transcript))
