"""Server side of the AI endpoints: picks the OpenAI key for a user and
talks to the OpenAI API on their behalf."""
import base64
import binascii
import json
import logging

from flask import current_app
from openai import OpenAI, OpenAIError

from ..categories import CATEGORIES
from ..errors import APIFailure, NotConfigured, ValidationFailure
from ..models import StripeCustomer, StripeSubscription, UserProfile
from .analyzer import analyze_transcript_fallback
from .recommendations import normalize_recommendations

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 5
CATEGORY_LIST = ", ".join(CATEGORIES)
NO_KEY_MESSAGE = "OpenAI API key not available. Please upgrade to Pro or add your own API key."

ANALYSIS_PROMPT = f"""You are a financial transaction analyzer. Analyze the given text and extract financial transaction information.

Categories available: {CATEGORY_LIST}

Respond with a JSON object containing:
- type: "income" or "expense"
- category: one of the available categories
- amount: numeric value (extract from text, 0 if not found, sum all value if found more than 1)
- description: brief description of the transaction
- confidence: confidence score between 0 and 1

Examples:
"I spent $25 on groceries" -> {{"type": "expense", "category": "Groceries", "amount": 25, "description": "Grocery shopping", "confidence": 0.9}}
"Got paid $2000 salary" -> {{"type": "income", "category": "Salary", "amount": 2000, "description": "Salary payment", "confidence": 0.95}}
"Paid $50 for gas" -> {{"type": "expense", "category": "Transport", "amount": 50, "description": "Gas payment", "confidence": 0.9}}"""

ADVISOR_PROMPT = """You are an expert financial advisor with deep knowledge of personal finance, economic trends, and behavioral economics. Analyze the provided financial data and generate personalized recommendations.

Consider:
1. Current spending patterns and trends
2. Budget adherence and overspending areas
3. Economic context and future trends
4. Behavioral finance principles
5. Risk management and emergency planning
6. Investment and savings optimization

Respond with a JSON array of recommendation objects, each containing:
- type: category of recommendation
- title: clear, actionable title
- description: detailed explanation with specific insights
- impact: "high", "medium", or "low"
- savings: estimated monthly savings potential (number)
- actionItems: array of 2-3 specific action steps
- economicContext: how current economic trends affect this recommendation
- confidence: confidence score 0-1

Maximum 5 recommendations, prioritize by impact and relevance."""


def make_openai_client(api_key):
    return OpenAI(api_key=api_key)


def has_active_subscription(user_id) -> bool:
    customer = StripeCustomer.query.filter_by(user_id=user_id, deleted_at=None).first()
    if customer is None:
        return False
    sub = StripeSubscription.query.filter_by(customer_id=customer.customer_id, deleted_at=None).first()
    return sub is not None and sub.status == "active"


def resolve_api_key(user_id) -> str:
    """Pro subscribers use the server key; everyone else brings their own."""
    if has_active_subscription(user_id):
        key = current_app.config.get("OPENAI_API_KEY")
        if not key:
            raise NotConfigured("Server configuration error: OpenAI API key not configured for Pro users", 500)
        return key

    profile = UserProfile.query.filter_by(user_id=user_id).first()
    if profile is None or not profile.openai_api_key:
        raise NotConfigured(NO_KEY_MESSAGE)
    return profile.openai_api_key


def validate_api_key(api_key: str) -> bool:
    try:
        make_openai_client(api_key).models.list()
    except OpenAIError as e:
        logger.info("OpenAI key rejected: %s", e)
        return False
    return True


def transcribe_audio(client, audio_b64: str) -> str:
    try:
        audio = base64.b64decode(audio_b64, validate=True)
    except (binascii.Error, TypeError, ValueError) as e:
        raise ValidationFailure("audioData must be base64 encoded") from e

    try:
        result = client.audio.transcriptions.create(
            model=current_app.config["OPENAI_TRANSCRIBE_MODEL"],
            file=("audio.wav", audio),
            language="en",
        )
    except OpenAIError as e:
        logger.exception("Transcription error")
        raise APIFailure(f"Failed to transcribe audio: {e}") from e
    return (getattr(result, "text", "") or "").strip()


def _strip_fences(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        text = text[3:]
        if text.startswith("json"):
            text = text[4:]
        if text.endswith("```"):
            text = text[:-3]
    return text.strip()


def analyze_transaction(client, transcript: str) -> dict:
    try:
        response = client.chat.completions.create(
            model=current_app.config["OPENAI_MODEL"],
            messages=[
                {"role": "system", "content": ANALYSIS_PROMPT},
                {"role": "user", "content": f'Analyze this transaction: "{transcript}"'},
            ],
            temperature=0.1,
            max_tokens=200,
        )
        content = response.choices[0].message.content
        if not content:
            raise ValueError("No response from OpenAI")
        analysis = json.loads(_strip_fences(content))
        if not analysis.get("type") or not analysis.get("category") or not isinstance(analysis.get("amount"), (int, float)):
            raise ValueError("Invalid analysis response format")
    except (OpenAIError, ValueError, AttributeError, IndexError) as e:
        logger.warning("AI analysis error (%s), falling back to keyword analysis", e)
        return analyze_transcript_fallback(transcript)

    return {
        "type": analysis["type"] if analysis["type"] in ("income", "expense") else "expense",
        "category": analysis["category"],
        "amount": abs(analysis["amount"]),
        "description": analysis.get("description") or "Transaction",
        "confidence": analysis.get("confidence") or 0.5,
    }


def analyze_audio(user_id, audio_b64=None, transcript=None) -> dict:
    if transcript is not None and not isinstance(transcript, str):
        raise ValidationFailure("transcript must be text")
    client = make_openai_client(resolve_api_key(user_id))

    if not transcript and audio_b64:
        transcript = transcribe_audio(client, audio_b64)
    if not transcript:
        raise APIFailure("No transcript available and audio transcription failed", 500)

    return {"transcript": transcript, **analyze_transaction(client, transcript)}


def generate_recommendations(user_id, transaction_summary: str, economic_context: str) -> list:
    client = make_openai_client(resolve_api_key(user_id))
    user_prompt = (
        "Analyze my financial data and provide personalized recommendations:\n\n"
        f"TRANSACTION SUMMARY:\n{transaction_summary}\n\n"
        f"ECONOMIC CONTEXT:\n{economic_context}\n\n"
        "Please provide detailed, actionable financial recommendations based on this data, "
        "current economic trends, and best practices for personal finance management."
    )
    try:
        response = client.chat.completions.create(
            model=current_app.config["OPENAI_MODEL"],
            messages=[
                {"role": "system", "content": ADVISOR_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            temperature=0.7,
            max_tokens=2000,
        )
        content = response.choices[0].message.content
    except (OpenAIError, AttributeError, IndexError) as e:
        logger.exception("AI recommendation generation failed")
        raise APIFailure(f"OpenAI API error: {e}", 500) from e

    if not content:
        raise APIFailure("No response from OpenAI", 500)
    try:
        items = json.loads(_strip_fences(content))
    except ValueError as e:
        raise APIFailure("OpenAI returned recommendations that are not valid JSON", 500) from e
    if not isinstance(items, list):
        raise APIFailure("OpenAI returned recommendations in an unexpected format", 500)
    return normalize_recommendations(items)[:MAX_RECOMMENDATIONS]
