"""Aggregation of per-chunk sentiment scores."""

from typing import Iterable

from diary_mood.models.mood import AggregateStatistics, SentimentCategory, SentimentScores


def aggregate(per_chunk_scores: Iterable[SentimentScores]) -> AggregateStatistics:
    """
    Sum each category's score across chunks and count the chunks.

    Addition is the only operation, so the result does not depend on the order
    in which chunk results arrive. An empty input gives all-zero sums and
    ``chunk_count == 0``.
    """
    sums = {category: 0.0 for category in SentimentCategory}
    chunk_count = 0

    for scores in per_chunk_scores:
        for category in SentimentCategory:
            sums[category] += scores.score_for(category)
        chunk_count += 1

    return AggregateStatistics(
        positive=sums[SentimentCategory.POSITIVE],
        negative=sums[SentimentCategory.NEGATIVE],
        neutral=sums[SentimentCategory.NEUTRAL],
        chunk_count=chunk_count,
    )
