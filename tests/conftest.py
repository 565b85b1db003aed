"""Pytest configuration and fixtures for diary mood tests."""

import asyncio
import logging
from typing import Callable, Dict, List, Optional

import pytest

from diary_mood.models.mood import SentimentScores
from diary_mood.utils.errors import AnalysisServiceError, SummaryServiceError


class FakeSentimentClient:
    """Deterministic stand-in for the sentiment API.

    ``scorer`` maps chunk text to scores; ``fail_when`` picks the chunks that
    raise AnalysisServiceError; ``block_when`` picks chunks that never finish
    until cancelled.
    """

    def __init__(
        self,
        scorer: Optional[Callable[[str], Dict[str, float]]] = None,
        fail_when: Optional[Callable[[str], bool]] = None,
        block_when: Optional[Callable[[str], bool]] = None,
        delay: float = 0.0,
    ):
        self.scorer = scorer or (lambda text: {"positive": 30, "negative": 0, "neutral": 0})
        self.fail_when = fail_when or (lambda text: False)
        self.block_when = block_when or (lambda text: False)
        self.delay = delay
        self.calls: List[str] = []
        self.cancelled: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def analyze(self, content: str) -> SentimentScores:
        self.calls.append(content)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.fail_when(content):
                raise AnalysisServiceError("Sentiment analysis API returned 500", upstream_status=500)
            if self.block_when(content):
                await asyncio.Event().wait()
            return SentimentScores.from_confidence(self.scorer(content))
        except asyncio.CancelledError:
            self.cancelled.append(content)
            raise
        finally:
            self.in_flight -= 1


class FakeSummaryClient:
    """Deterministic stand-in for the summary API."""

    def __init__(self, summary: str = "오늘의 요약", fail: bool = False, block: bool = False):
        self.summary = summary
        self.fail = fail
        self.block = block
        self.calls: List[tuple] = []
        self.cancelled = False

    async def summarize(self, title: str, content: str) -> str:
        self.calls.append((title, content))
        try:
            if self.fail:
                raise SummaryServiceError("Text summary API returned 500", upstream_status=500)
            if self.block:
                await asyncio.Event().wait()
            return self.summary
        except asyncio.CancelledError:
            self.cancelled = True
            raise


@pytest.fixture
def sentiment_client():
    """Sentiment fake scoring every chunk POSITIVE 30."""
    return FakeSentimentClient()


@pytest.fixture
def summary_client():
    """Summary fake returning a fixed summary."""
    return FakeSummaryClient()


@pytest.fixture(autouse=True)
def reset_settings():
    """Clear cached settings and logging handlers around every test."""
    import diary_mood.config
    import diary_mood.utils.logging

    diary_mood.config._settings = None
    yield
    diary_mood.config._settings = None
    diary_mood.utils.logging._logger = None
    logger = logging.getLogger("diary_mood")
    logger.handlers.clear()
    logger.propagate = True
