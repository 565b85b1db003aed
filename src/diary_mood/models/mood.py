"""Sentiment scores, aggregate statistics and mood degree models."""

from enum import Enum
from typing import Any, Dict, Mapping

from pydantic import BaseModel, Field


class SentimentCategory(str, Enum):
    """Closed label set returned by the sentiment service.

    Declaration order is the tie-break order used by the mood classifier.
    """

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class MoodDegree(str, Enum):
    """Five ordered mood degrees, worst to best."""

    SO_BAD = "terrible"
    BAD = "bad"
    SO_SO = "soso"
    GOOD = "good"
    SO_GOOD = "excellent"

    @property
    def rank(self) -> int:
        """Position in the worst-to-best ordering (0..4)."""
        return list(MoodDegree).index(self)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, MoodDegree):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, MoodDegree):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, MoodDegree):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, MoodDegree):
            return NotImplemented
        return self.rank >= other.rank


class SentimentScores(BaseModel):
    """Per-category confidence returned by one sentiment call for one chunk."""

    positive: float = Field(..., ge=0)
    negative: float = Field(..., ge=0)
    neutral: float = Field(..., ge=0)

    @classmethod
    def from_confidence(cls, confidence: Mapping[str, Any]) -> "SentimentScores":
        """
        Build scores from the service's ``confidence`` mapping.

        Keys are matched case-insensitively, so both ``{"positive": ...}`` and
        ``{"POSITIVE": ...}`` are accepted.

        Raises:
            ValueError: If a category is missing or its value is not a
                non-negative number
        """
        if not isinstance(confidence, Mapping):
            raise ValueError(f"confidence must be an object, got {type(confidence).__name__}")

        normalized = {str(key).lower(): value for key, value in confidence.items()}
        values: Dict[str, Any] = {}
        for category in SentimentCategory:
            if category.value not in normalized:
                raise ValueError(f"confidence is missing category '{category.name}'")
            value = normalized[category.value]
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"confidence for '{category.name}' is not a number: {value!r}")
            values[category.value] = value
        return cls(**values)

    def score_for(self, category: SentimentCategory) -> float:
        return getattr(self, category.value)


class AggregateStatistics(BaseModel):
    """Per-category score sums across all analyzed chunks of one diary."""

    positive: float = Field(default=0.0, ge=0)
    negative: float = Field(default=0.0, ge=0)
    neutral: float = Field(default=0.0, ge=0)
    chunk_count: int = Field(default=0, ge=0, description="Number of chunks actually analyzed")

    def sum_for(self, category: SentimentCategory) -> float:
        """Get the summed score for a category."""
        return getattr(self, category.value)

    def as_dict(self) -> Dict[SentimentCategory, float]:
        """Category sums keyed in tie-break order."""
        return {category: self.sum_for(category) for category in SentimentCategory}


class DiaryDerivedFields(BaseModel):
    """Summary and mood computed for one diary save or content update."""

    summary: str
    mood: MoodDegree
