"""Data models for the diary mood pipeline."""

from diary_mood.models.chunk import TextChunk
from diary_mood.models.mood import (
    AggregateStatistics,
    DiaryDerivedFields,
    MoodDegree,
    SentimentCategory,
    SentimentScores,
)

__all__ = [
    "AggregateStatistics",
    "DiaryDerivedFields",
    "MoodDegree",
    "SentimentCategory",
    "SentimentScores",
    "TextChunk",
]
