# src/pocketscholar/settings.py
"""Configuration management for PocketScholar.

This module contains behavioral settings that apply regardless of which
embedding or generation provider is used. Settings are passed
programmatically; the library itself does not read environment variables.
Applications that want file or env based configuration use
``pocketscholar.config``, which builds a Settings instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    from pocketscholar.chunking import Chunker
    from pocketscholar.context import ContextAssembler
    from pocketscholar.sanitizer import ResponseSanitizer

# Chunk layout profiles
# - "calibrated": overlapping chunks, so facts spanning a boundary survive whole in one chunk
# - "legacy": the earlier non-overlapping layout, kept to match existing stores
CHUNKING_PROFILES: dict[str, dict[str, int]] = {
    "calibrated": {
        "chunk_size": 400,
        "chunk_overlap": 80,
    },
    "legacy": {
        "chunk_size": 500,
        "chunk_overlap": 0,
    },
}


class Settings(BaseModel):
    """Behavioral settings for PocketScholar.

    Example:
        settings = Settings(default_k=3, search_mode="embedding")

        # Or start from a chunking profile
        settings = Settings.with_profile("legacy", max_context_chars=2000)
    """

    # Chunking
    chunk_size: int = Field(default=400, gt=0)
    chunk_overlap: int = Field(default=80, ge=0)

    # Retrieval
    default_k: int = Field(default=5, gt=0)
    min_similarity: float = 0.15
    search_mode: Literal["hybrid", "embedding"] = "hybrid"
    embedding_weight: float = Field(default=0.5, ge=0.0, le=1.0)

    # Context assembly
    max_context_chars: int = Field(default=1500, gt=0)
    context_overlap_window: int = 100
    context_min_overlap: int = 20
    partial_chunk_threshold: float = Field(default=0.75, ge=0.0, le=1.0)
    min_partial_chars: int = 100

    # Answer generation
    prompt_template: str | None = None
    synthesis_temperature: float | None = 0.3
    max_answer_tokens: int | None = 256
    fallback_answer: str | None = None
    no_result_answer: str | None = None

    # Answer sanitizing
    max_answer_chars: int = Field(default=800, gt=0)
    min_sentence_cut: int = 200

    # Embedding
    embedding_dimension: int = Field(default=384, gt=0)
    embedding_batch_size: int = Field(default=32, gt=0)

    # Retry configuration (LiteLLM handles exponential backoff for RateLimitError)
    num_retries: int = 3

    @model_validator(mode="after")
    def _check_chunk_overlap(self) -> Settings:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )
        return self

    @classmethod
    def with_profile(
        cls,
        profile: Literal["calibrated", "legacy"],
        **overrides: Any,
    ) -> Settings:
        """Create Settings from a chunking profile.

        Args:
            profile: The chunking profile to use.
            **overrides: Additional settings to override profile defaults.

        Returns:
            Settings instance with profile values applied.

        Example:
            settings = Settings.with_profile("legacy", default_k=3)
        """
        if profile not in CHUNKING_PROFILES:
            raise ValueError(
                f"Unknown profile '{profile}'. "
                f"Available profiles: {list(CHUNKING_PROFILES.keys())}"
            )

        profile_settings: dict[str, Any] = CHUNKING_PROFILES[profile].copy()
        profile_settings.update(overrides)
        return cls(**profile_settings)

    def build_chunker(self) -> Chunker:
        """Build the Chunker for these settings."""
        from pocketscholar.chunking import Chunker

        return Chunker(size=self.chunk_size, overlap=self.chunk_overlap)

    def build_assembler(self) -> ContextAssembler:
        """Build the ContextAssembler for these settings."""
        from pocketscholar.context import ContextAssembler

        return ContextAssembler(
            max_chars=self.max_context_chars,
            overlap_window=self.context_overlap_window,
            min_overlap=self.context_min_overlap,
            partial_threshold=self.partial_chunk_threshold,
            min_partial_chars=self.min_partial_chars,
        )

    def build_sanitizer(self) -> ResponseSanitizer:
        """Build the ResponseSanitizer for these settings."""
        from pocketscholar.sanitizer import ResponseSanitizer

        return ResponseSanitizer(
            max_chars=self.max_answer_chars,
            min_sentence_cut=self.min_sentence_cut,
        )
