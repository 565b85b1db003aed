"""Diary text chunking for sentiment analysis."""

import re
from typing import List, Optional

from diary_mood.models.chunk import TextChunk
from diary_mood.utils.errors import ChunkingError
from diary_mood.utils.logging import get_logger

logger = get_logger("chunking_service")

DEFAULT_CHUNK_SIZE = 1000

# An opening image tag through its closing '>'
IMAGE_MARKUP_PATTERN = re.compile(r"<img[^>]*>")


def strip_markup(text: str) -> str:
    """Remove inline image markup, leaving the plain diary content."""
    return IMAGE_MARKUP_PATTERN.sub("", text)


def split_text(text: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[TextChunk]:
    """
    Split diary text into ordered chunks of at most ``chunk_size`` characters.

    Image markup is stripped first. The cleaned text is cut into
    ``len // chunk_size + 1`` windows; the last window holds the remainder
    and is dropped when the remainder is empty, so a text whose length is an
    exact multiple of ``chunk_size`` (including the empty text) never yields an
    empty chunk.

    Args:
        text: Raw diary content
        chunk_size: Maximum characters per chunk

    Returns:
        Chunks in order; joining their text reproduces ``strip_markup(text)``

    Raises:
        ChunkingError: If chunk_size is not positive
    """
    if chunk_size < 1:
        raise ChunkingError(
            f"chunk_size must be positive, got {chunk_size}",
            details={"chunk_size": chunk_size},
        )

    plain_content = strip_markup(text)
    length = len(plain_content)
    number_of_chunks = length // chunk_size + 1

    chunks: List[TextChunk] = []
    for i in range(number_of_chunks):
        start = i * chunk_size
        if i < number_of_chunks - 1:
            end = start + chunk_size
        else:
            end = start + length % chunk_size

        if start == end:
            break

        chunks.append(
            TextChunk(
                chunk_index=i,
                text=plain_content[start:end],
                start=start,
                end=end,
            )
        )

    return chunks


class ChunkingService:
    """Splits diary content using the configured chunk size."""

    def __init__(self, chunk_size: Optional[int] = None):
        """
        Initialize the chunking service.

        Args:
            chunk_size: Maximum characters per chunk (defaults to 1000)
        """
        self.chunk_size = DEFAULT_CHUNK_SIZE if chunk_size is None else chunk_size
        if self.chunk_size < 1:
            raise ChunkingError(
                f"chunk_size must be positive, got {self.chunk_size}",
                details={"chunk_size": self.chunk_size},
            )

    def split(self, text: str) -> List[TextChunk]:
        """Split diary content into chunks."""
        chunks = split_text(text, chunk_size=self.chunk_size)
        logger.debug(
            f"Split diary content into {len(chunks)} chunk(s) "
            f"(raw_length={len(text)}, chunk_size={self.chunk_size})"
        )
        return chunks
