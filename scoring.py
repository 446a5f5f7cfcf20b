"""Weighted scoring and deterministic ranking of benchmark rows."""
import math

from benchmarks import BenchmarkCatalog
from config import Config
from models import BenchmarkEntry, Objective, RankedEntry, ScoreWeights

OBJECTIVE_WEIGHTS = {
    Objective.LATENCY: ScoreWeights(latency=100, quality=30, cost=30),
    Objective.QUALITY: ScoreWeights(latency=30, quality=100, cost=30),
    Objective.COST: ScoreWeights(latency=30, quality=30, cost=100),
}


def round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def use_case_weights(use_case: str, catalog: BenchmarkCatalog, config: Config) -> ScoreWeights:
    priorities = catalog.weights_for(use_case)
    if priorities is None:
        return config.default_weights
    latency, quality, cost = priorities
    return ScoreWeights(latency=latency, quality=quality, cost=cost)


def objective_weights(optimize_for: Objective, use_case: str, catalog: BenchmarkCatalog,
                      config: Config) -> ScoreWeights:
    """Fixed weights for a single objective; "balanced" follows the use case."""
    if optimize_for in OBJECTIVE_WEIGHTS:
        return OBJECTIVE_WEIGHTS[optimize_for]
    return use_case_weights(use_case, catalog, config)


def latency_score(latency_ms: float) -> float:
    return max(0.0, 100 - (latency_ms - 100) * 0.5)


def quality_score(quality: float) -> float:
    return (quality / 5) * 100


def cost_score(cost_per_min: float) -> float:
    return max(0.0, 100 - cost_per_min * 5000)


def score_benchmark(entry: BenchmarkEntry, weights: ScoreWeights) -> float:
    weighted = (
        latency_score(entry.latency_ms) * weights.latency
        + quality_score(entry.quality) * weights.quality
        + cost_score(entry.cost_per_min) * weights.cost
    )
    return round_half_up(weighted / weights.total())


def rank_benchmarks(entries: list[BenchmarkEntry], weights: ScoreWeights) -> list[RankedEntry]:
    """Score descending, then latency ascending, quality descending, cost ascending."""
    ranked = [RankedEntry(entry=e, score=score_benchmark(e, weights)) for e in entries]
    ranked.sort(key=lambda r: (-r.score, r.entry.latency_ms, -r.entry.quality, r.entry.cost_per_min))
    return ranked


def clamp_max_results(value: int, limit: int = 10) -> int:
    return max(1, min(math.floor(value), limit))
