"""Configuration for voice stack advisor."""
import os
from dataclasses import dataclass, field

from models import ScoreWeights


def _threshold_from_env() -> float:
    return float(os.environ.get("STACK_ADVISOR_FALLBACK_THRESHOLD", "2.0"))


@dataclass
class Config:
    # Result limits
    default_max_results: int = 5
    max_results_limit: int = 10

    # Resolution
    min_provider_input_length: int = 3
    min_language_prefix_length: int = 3
    max_language_suggestions: int = 5
    slug_max_length: int = 80

    # Scoring
    default_weights: ScoreWeights = field(
        default_factory=lambda: ScoreWeights(latency=70, quality=70, cost=60)
    )

    # Scaffold: only mention a framework fallback when the score gap is larger
    fallback_notice_threshold: float = field(default_factory=_threshold_from_env)

    # Used when a supported language has no benchmark rows
    default_stack: dict = field(default_factory=lambda: {
        "stt": "Deepgram",
        "stt_model": "nova-3",
        "llm": "OpenAI",
        "llm_model": "gpt-4.1-mini",
        "tts": "Cartesia",
        "tts_model": "sonic-3",
    })

    # Dataset
    data_snapshot: str = "2026-02-15T00:00:00Z"
