from datetime import datetime
from ..extensions import db


class RecommendationCacheEntry(db.Model):
    """Server-side copy of a user's cached AI recommendations."""

    __tablename__ = "ai_recommendations_cache"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    recommendations = db.Column(db.JSON, nullable=False, default=list)
    timestamp = db.Column(db.BigInteger, nullable=False)  # epoch milliseconds
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
