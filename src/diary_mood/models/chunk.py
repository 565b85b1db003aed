"""Chunk models for diary text analysis."""

from pydantic import BaseModel, Field, model_validator


class TextChunk(BaseModel):
    """A slice of cleaned diary text submitted as one sentiment request."""

    chunk_index: int = Field(..., ge=0, description="0-based index of this chunk within the diary")
    text: str = Field(..., min_length=1, description="Chunk text content")
    start: int = Field(..., ge=0, description="Start offset in the cleaned text (inclusive)")
    end: int = Field(..., ge=1, description="End offset in the cleaned text (exclusive)")

    @model_validator(mode="after")
    def check_offsets(self) -> "TextChunk":
        """Offsets must describe exactly the chunk text."""
        if self.end - self.start != len(self.text):
            raise ValueError(
                f"Chunk offsets [{self.start}, {self.end}) do not match text length {len(self.text)}"
            )
        return self

    @property
    def length(self) -> int:
        return len(self.text)
