"""Diary mood and summary pipeline.

Composes chunking, per-chunk sentiment analysis, aggregation and
classification, and runs the summary request alongside it. The diary
authoring workflow calls ``compute_diary_derived_fields`` on create and
``recompute_on_update`` on update; both either return every derived field or
raise, never a partial result.
"""

import asyncio
import time
from typing import Any, Awaitable, Iterable, List, Optional

from diary_mood.clients import SentimentAnalyzer, Summarizer
from diary_mood.clients.sentiment_client import SentimentClient
from diary_mood.clients.summary_client import SummaryClient
from diary_mood.config import Settings
from diary_mood.models.chunk import TextChunk
from diary_mood.models.mood import (
    AggregateStatistics,
    DiaryDerivedFields,
    MoodDegree,
    SentimentScores,
)
from diary_mood.services.chunking_service import DEFAULT_CHUNK_SIZE, ChunkingService
from diary_mood.services.mood_classifier import STRONG_MOOD_THRESHOLD, classify
from diary_mood.services.statistics_service import aggregate
from diary_mood.utils.errors import ConfigurationError
from diary_mood.utils.logging import get_logger

logger = get_logger("mood_pipeline")


async def gather_or_cancel(aws: Iterable[Awaitable[Any]]) -> List[Any]:
    """
    Run awaitables concurrently and return their results in input order.

    As soon as one fails, the ones still running are cancelled and the failure
    of the earliest failed awaitable (in input order) is raised.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    failed = [
        task for task in tasks
        if task in done and not task.cancelled() and task.exception() is not None
    ]
    if failed:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        raise failed[0].exception()

    return [task.result() for task in tasks]


class DiaryMoodPipeline:
    """
    Computes a diary's mood degree and summary.

    Per-chunk sentiment requests run concurrently, at most ``max_concurrency``
    at a time, unless ``sequential`` is set, in which case chunks are analyzed
    one by one in order. Results are collected before they are summed.
    """

    def __init__(
        self,
        sentiment_client: SentimentAnalyzer,
        summary_client: Summarizer,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_concurrency: int = 4,
        sequential: bool = False,
        strong_threshold: float = STRONG_MOOD_THRESHOLD,
    ):
        """
        Initialize the pipeline.

        Args:
            sentiment_client: Scores one chunk per sentiment category
            summary_client: Summarizes title + content
            chunk_size: Maximum characters per analyzed chunk
            max_concurrency: Maximum in-flight sentiment requests
            sequential: Analyze chunks strictly one at a time
            strong_threshold: Per-chunk average above which a mood is strong
        """
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

        self.sentiment_client = sentiment_client
        self.summary_client = summary_client
        self.chunking_service = ChunkingService(chunk_size=chunk_size)
        self.max_concurrency = max_concurrency
        self.sequential = sequential
        self.strong_threshold = strong_threshold

    @classmethod
    def from_settings(cls, settings: Settings) -> "DiaryMoodPipeline":
        """
        Build a pipeline backed by the live CLOVA clients.

        Raises:
            ConfigurationError: If either API is missing credentials
        """
        missing = [
            name
            for name, api in (("sentiment", settings.sentiment), ("summary", settings.summary))
            if not api.is_configured
        ]
        if missing:
            raise ConfigurationError(
                f"CLOVA credentials missing for: {', '.join(missing)}",
                details={"apis": missing},
            )
        return cls(
            sentiment_client=SentimentClient(settings.sentiment),
            summary_client=SummaryClient(settings.summary),
            chunk_size=settings.pipeline.chunk_size,
            max_concurrency=settings.pipeline.max_concurrency,
            sequential=settings.pipeline.sequential,
            strong_threshold=settings.mood.strong_threshold,
        )

    async def _analyze_sequentially(self, chunks: List[TextChunk]) -> List[SentimentScores]:
        results: List[SentimentScores] = []
        for chunk in chunks:
            results.append(await self.sentiment_client.analyze(chunk.text))
        return results

    async def _analyze_concurrently(self, chunks: List[TextChunk]) -> List[SentimentScores]:
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def analyze_chunk(chunk: TextChunk) -> SentimentScores:
            async with semaphore:
                return await self.sentiment_client.analyze(chunk.text)

        return await gather_or_cancel(analyze_chunk(chunk) for chunk in chunks)

    async def analyze_statistics(self, content: str) -> AggregateStatistics:
        """
        Chunk the content, analyze every chunk and sum the scores.

        Args:
            content: Raw diary content (image markup allowed)

        Returns:
            Category sums and the number of chunks analyzed

        Raises:
            AnalysisServiceError: If any chunk analysis fails
        """
        chunks = self.chunking_service.split(content)
        if not chunks:
            logger.info("Diary has no text to analyze after stripping markup")
            return aggregate([])

        started = time.perf_counter()
        if self.sequential or len(chunks) == 1:
            scores = await self._analyze_sequentially(chunks)
        else:
            scores = await self._analyze_concurrently(chunks)

        stats = aggregate(scores)
        logger.info(
            f"Analyzed {stats.chunk_count} chunk(s)",
            extra={
                "extra_fields": {
                    "chunk_count": stats.chunk_count,
                    "positive": stats.positive,
                    "negative": stats.negative,
                    "neutral": stats.neutral,
                    "sequential": self.sequential,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                }
            },
        )
        return stats

    async def judge_overall_mood(self, content: str) -> MoodDegree:
        """
        Classify the overall mood of a diary.

        Raises:
            AnalysisServiceError: If any chunk analysis fails
        """
        stats = await self.analyze_statistics(content)
        mood = classify(stats, threshold=self.strong_threshold)
        logger.info(
            f"Judged diary mood: {mood.name}",
            extra={
                "extra_fields": {
                    "mood": mood.value,
                    "chunk_count": stats.chunk_count,
                    "strong_threshold": self.strong_threshold,
                }
            },
        )
        return mood

    async def get_summary(self, title: str, content: str) -> str:
        """
        Summarize a diary.

        Raises:
            SummaryServiceError: If the summary request fails
        """
        return await self.summary_client.summarize(title, content)

    async def compute_diary_derived_fields(self, title: str, content: str) -> DiaryDerivedFields:
        """
        Compute the summary and mood for a diary being saved.

        The summary request and the mood analysis run concurrently. If either
        fails, the other is cancelled and the error is raised.

        Raises:
            AnalysisServiceError: If sentiment analysis fails
            SummaryServiceError: If summarization fails
        """
        summary, mood = await gather_or_cancel(
            [self.get_summary(title, content), self.judge_overall_mood(content)]
        )
        return DiaryDerivedFields(summary=summary, mood=mood)

    async def recompute_on_update(
        self, title: str, content: Optional[str]
    ) -> Optional[DiaryDerivedFields]:
        """
        Recompute derived fields for a diary update.

        Returns None when the update carries no new content, in which case the
        stored summary and mood stay as they are.
        """
        if not content:
            logger.debug("Diary update has no content; keeping existing summary and mood")
            return None
        return await self.compute_diary_derived_fields(title, content)
