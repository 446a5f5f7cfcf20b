"""Filter logic for benchmark rows."""
import logging
from types import MappingProxyType

from models import BenchmarkEntry, Category, Framework, SortKey
from resolver import Resolver

logger = logging.getLogger(__name__)

# Providers each scaffold template can wire up; an empty set accepts any provider
FRAMEWORK_COMPATIBILITY = MappingProxyType({
    Framework.LIVEKIT: MappingProxyType({
        Category.STT: frozenset({"Deepgram", "OpenAI", "Google"}),
        Category.LLM: frozenset({"OpenAI", "Anthropic", "Google"}),
        Category.TTS: frozenset({"Cartesia", "ElevenLabs"}),
    }),
    Framework.NEXTJS: MappingProxyType({
        Category.STT: frozenset(),
        Category.LLM: frozenset(),
        Category.TTS: frozenset({"ElevenLabs"}),
    }),
})

FRAMEWORK_LABELS = MappingProxyType({
    Framework.LIVEKIT: "LiveKit Agents (Python)",
    Framework.NEXTJS: "Next.js + ElevenLabs (TypeScript)",
})


def check_language(entry: BenchmarkEntry, language: str) -> bool:
    return entry.supports_language(language)


def check_provider(entry: BenchmarkEntry, provider: str, resolver: Resolver) -> bool:
    """Provider appears anywhere in the stack."""
    return any(resolver.provider_matches(provider, entry.provider(c)) for c in Category)


def is_scaffold_compatible(entry: BenchmarkEntry, framework: Framework) -> bool:
    policy = FRAMEWORK_COMPATIBILITY[framework]
    for category in Category:
        allowed = policy[category]
        if allowed and entry.provider(category) not in allowed:
            return False
    return True


def compatibility_summary() -> dict:
    """Allow-sets per framework and category, sorted for display."""
    return {
        framework.value: {
            category.value: sorted(policy[category]) for category in Category
        }
        for framework, policy in FRAMEWORK_COMPATIBILITY.items()
    }


def filter_benchmarks(entries: list[BenchmarkEntry], resolver: Resolver, language: str | None = None,
                      provider: str | None = None) -> list[BenchmarkEntry]:
    filtered = []
    for entry in entries:
        reasons = []
        if language and not check_language(entry, language):
            reasons.append(f"no {language}")
        if provider and not check_provider(entry, provider, resolver):
            reasons.append(f"no {provider}")

        if reasons:
            logger.debug(f"Filtered out {entry.stt} + {entry.llm} + {entry.tts} — {', '.join(reasons)}")
        else:
            filtered.append(entry)
    return filtered


def sort_benchmarks(entries: list[BenchmarkEntry], sort_by: SortKey) -> list[BenchmarkEntry]:
    if sort_by is SortKey.LATENCY:
        return sorted(entries, key=lambda e: e.latency_ms)
    if sort_by is SortKey.COST:
        return sorted(entries, key=lambda e: e.cost_per_min)
    return sorted(entries, key=lambda e: -e.quality)


def summarize(entries: list[BenchmarkEntry]) -> dict:
    """Fastest, best-quality and cheapest rows (first in the given order on ties)."""
    if not entries:
        return {"fastest": None, "best_quality": None, "cheapest": None}
    return {
        "fastest": min(entries, key=lambda e: e.latency_ms),
        "best_quality": max(entries, key=lambda e: e.quality),
        "cheapest": min(entries, key=lambda e: e.cost_per_min),
    }
