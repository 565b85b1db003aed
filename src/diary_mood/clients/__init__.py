"""Clients for the external sentiment-analysis and summary services."""

from typing import Protocol, runtime_checkable

from diary_mood.models.mood import SentimentScores


@runtime_checkable
class SentimentAnalyzer(Protocol):
    """Anything that scores one chunk of text per sentiment category."""

    async def analyze(self, content: str) -> SentimentScores:
        ...


@runtime_checkable
class Summarizer(Protocol):
    """Anything that summarizes a diary from its title and content."""

    async def summarize(self, title: str, content: str) -> str:
        ...


__all__ = ["SentimentAnalyzer", "Summarizer"]
