import pytest
import requests

from moneytalk.errors import APIFailure
from moneytalk.services.analyzer import MANUAL_HINT, AudioAnalyzer, analyze_transcript_fallback


@pytest.mark.parametrize("transcript, expected", [
    (
        "I spent $25 on groceries",
        {"type": "expense", "category": "Groceries", "amount": 25.0,
         "description": "I spent on groceries", "confidence": 0.7},
    ),
    (
        "Got paid $2000 salary",
        {"type": "income", "category": "Salary", "amount": 2000.0,
         "description": "Got paid salary", "confidence": 0.7},
    ),
    (
        "Paid $50 for gas",
        {"type": "income", "category": "Transport", "amount": 50.0,
         "description": "Paid for gas", "confidence": 0.7},
    ),
])
def test_fallback_examples(transcript, expected):
    assert analyze_transcript_fallback(transcript) == expected


def test_fallback_unknown_category():
    result = analyze_transcript_fallback("something happened")
    assert result == {
        "type": "expense",
        "category": "Shopping",
        "amount": 0.0,
        "description": "something happened",
        "confidence": 0.5,
    }


def test_fallback_first_table_entry_wins_and_hits_raise_confidence():
    # "food" also matches the Food row, but Groceries comes first
    result = analyze_transcript_fallback("supermarket groceries food shopping 12.50")
    assert result["category"] == "Groceries"
    assert result["amount"] == 12.5
    assert result["confidence"] == 0.9


def test_fallback_description_defaults_to_category():
    assert analyze_transcript_fallback("$40")["description"] == "Shopping transaction"


class FakeResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self.body = body

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posted = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.posted.append((url, json, headers))
        if self.error:
            raise self.error
        return self.response


def test_analyze_audio_success():
    session = FakeSession(FakeResponse(200, {
        "transcript": "coffee for 4 dollars",
        "type": "expense",
        "category": "Drinks",
        "amount": -4,
        "description": "Coffee",
        "confidence": 0.92,
    }))
    analyzer = AudioAnalyzer("http://svc/functions/v1", session=session, token="s3cret")

    result = analyzer.analyze(3, audio=b"RIFF")

    assert result.amount == 4.0
    assert result.category == "Drinks"
    assert result.fallback is False
    url, payload, headers = session.posted[0]
    assert url == "http://svc/functions/v1/analyze-audio"
    assert payload == {"userId": 3, "audioData": "UklGRg=="}
    assert headers == {"Authorization": "Bearer s3cret"}


def test_analyze_falls_back_with_transcript():
    session = FakeSession(error=requests.Timeout("slow"))
    analyzer = AudioAnalyzer("http://svc", session=session)

    result = analyzer.analyze(3, transcript="lunch at the cafe $18")

    assert result.fallback is True
    assert result.category == "Food"
    assert result.amount == 18.0
    assert result.to_dict()["transcript"] == "lunch at the cafe $18"


def test_analyze_without_transcript_reports_endpoint_error():
    session = FakeSession(FakeResponse(400, {"error": "OpenAI API key not available"}))
    analyzer = AudioAnalyzer("http://svc", session=session)

    with pytest.raises(APIFailure) as exc:
        analyzer.analyze(3, audio=b"RIFF")
    assert "OpenAI API key not available" in exc.value.message
    assert exc.value.message.endswith(MANUAL_HINT)


def test_analyze_incomplete_response_falls_back():
    session = FakeSession(FakeResponse(200, {"transcript": "bus ticket 3"}))
    analyzer = AudioAnalyzer("http://svc", session=session)

    result = analyzer.analyze(3, transcript="bus ticket 3")
    assert result.fallback is True
    assert result.category == "Transport"


def test_analyze_requires_input():
    analyzer = AudioAnalyzer("http://svc", session=FakeSession())
    with pytest.raises(APIFailure) as exc:
        analyzer.analyze(3)
    assert exc.value.status_code == 400
