# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.models.database import Base
from app.utils.encryption import EncryptedTypeHybrid  # 🔐 Encryption utils
from app.utils.json_column import JSONEncodedText
from app.utils.time_utils import utcnow

# Analysis payloads produced outside the backend, stored as canonical JSON text
STRUCTURED_FIELDS = (
    "facial_analysis",
    "mood_factors",
    "wellness_indicators",
    "recommendations",
    "quick_insight",
    "detailed_insights",
    "mood_trends",
    "chart_data",
    "analysis_summary",
    "additional_data",
)


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    photo_path = Column(String, nullable=True)

    mood = Column(EncryptedTypeHybrid, nullable=True)  # 🔐 Encrypted
    notes = Column(EncryptedTypeHybrid, nullable=True)  # 🔐 Encrypted

    emotions = Column(JSONEncodedText, nullable=True)
    primary_emotion = Column(String, nullable=True)
    secondary_emotion = Column(String, nullable=True)
    intensity = Column(Integer, nullable=True)  # 1-10
    insights = Column(JSONEncodedText, nullable=True)
    tips = Column(JSONEncodedText, nullable=True)
    confidence = Column(Integer, nullable=True)  # 0-100

    facial_analysis = Column(JSONEncodedText, nullable=True)
    mood_factors = Column(JSONEncodedText, nullable=True)
    wellness_indicators = Column(JSONEncodedText, nullable=True)
    recommendations = Column(JSONEncodedText, nullable=True)
    quick_insight = Column(JSONEncodedText, nullable=True)
    detailed_insights = Column(JSONEncodedText, nullable=True)
    mood_trends = Column(JSONEncodedText, nullable=True)
    chart_data = Column(JSONEncodedText, nullable=True)
    analysis_summary = Column(JSONEncodedText, nullable=True)
    additional_data = Column(JSONEncodedText, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="journal_entries")

    def __repr__(self):
        return f"<JournalEntry id={self.id} user_id={self.user_id} emotion={self.primary_emotion}>"
