"""Reduction of aggregate sentiment statistics into a mood degree."""

from typing import Optional, Tuple

from diary_mood.models.mood import AggregateStatistics, MoodDegree, SentimentCategory

# Average per-chunk score above which a mood counts as strong
STRONG_MOOD_THRESHOLD = 50.0


def dominant_category(stats: AggregateStatistics) -> Tuple[SentimentCategory, float]:
    """
    Pick the category with the largest sum.

    Categories are scanned in declaration order (POSITIVE, NEGATIVE, NEUTRAL)
    and the running maximum is only replaced by a strictly larger sum, so the
    earliest category wins a tie.
    """
    categories = list(SentimentCategory)
    best = categories[0]
    best_sum = stats.sum_for(best)
    for category in categories[1:]:
        current = stats.sum_for(category)
        if current > best_sum:
            best, best_sum = category, current
    return best, best_sum


def classify(
    stats: AggregateStatistics,
    threshold: Optional[float] = None,
) -> MoodDegree:
    """
    Classify a diary's aggregate sentiment into a mood degree.

    Args:
        stats: Aggregated sentiment sums and analyzed chunk count
        threshold: Strong-mood cut-off for the per-chunk average
            (defaults to STRONG_MOOD_THRESHOLD)

    Returns:
        SO_GOOD/GOOD for a positive majority, SO_BAD/BAD for a negative one,
        SO_SO for neutral or when no chunk was analyzed
    """
    if stats.chunk_count == 0:
        return MoodDegree.SO_SO

    if threshold is None:
        threshold = STRONG_MOOD_THRESHOLD

    category, category_sum = dominant_category(stats)
    ratio = category_sum / stats.chunk_count

    if category == SentimentCategory.POSITIVE:
        return MoodDegree.SO_GOOD if ratio > threshold else MoodDegree.GOOD
    if category == SentimentCategory.NEGATIVE:
        return MoodDegree.SO_BAD if ratio > threshold else MoodDegree.BAD
    return MoodDegree.SO_SO
