"""Normalize free-text names for lookups and format stacks for display."""
import re

from models import BenchmarkEntry

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_term(value: str) -> str:
    """Lowercase and collapse every run of non-alphanumerics to a single space.

    "Open-AI  GPT-4.1" → "open ai gpt 4 1"
    """
    if not value:
        return ""
    return _NON_ALNUM.sub(" ", value.lower()).strip()


def to_safe_slug(value: str, max_length: int = 80) -> str:
    """Filesystem-safe identifier: "Thai / Customer Support!" → "thai-customer-support"."""
    slug = _NON_ALNUM.sub("-", normalize_term(value))
    slug = re.sub(r"-+", "-", slug).strip("-")
    return slug[:max_length]


def normalize_use_case(value: str) -> str:
    return normalize_term(value).replace(" ", "-")


def normalize_model(model: str) -> str:
    """Hyphenated slug used to compare model names ("GPT 4.1 mini" == "gpt-4.1-mini")."""
    return normalize_term(model).replace(" ", "-")


def models_match(model_a: str, model_b: str) -> bool:
    return normalize_model(model_a) == normalize_model(model_b)


def stack_label(entry: BenchmarkEntry, arrow: str = " → ") -> str:
    """Full label, e.g. "Deepgram nova-3 → OpenAI gpt-4.1-mini → Cartesia sonic-3"."""
    return arrow.join([
        f"{entry.stt} {entry.stt_model}",
        f"{entry.llm} {entry.llm_model}",
        f"{entry.tts} {entry.tts_model}",
    ])


def format_cost(cost_per_min: float) -> str:
    return f"${cost_per_min:g}/min"
