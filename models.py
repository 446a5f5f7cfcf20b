"""Data models for voice stack advisor."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class Category(str, Enum):
    STT = "stt"
    LLM = "llm"
    TTS = "tts"


class Framework(str, Enum):
    LIVEKIT = "livekit"
    NEXTJS = "nextjs"


class Objective(str, Enum):
    BALANCED = "balanced"
    LATENCY = "latency"
    QUALITY = "quality"
    COST = "cost"


class SortKey(str, Enum):
    LATENCY = "latency"
    QUALITY = "quality"
    COST = "cost"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class BenchmarkEntry:
    stt: str
    stt_model: str
    llm: str
    llm_model: str
    tts: str
    tts_model: str
    latency_ms: int
    quality: float
    cost_per_min: float
    mos: float | None = None
    languages: tuple[str, ...] = ()
    notes: str = ""

    def provider(self, category: Category) -> str:
        if category is Category.STT:
            return self.stt
        if category is Category.LLM:
            return self.llm
        return self.tts

    def model(self, category: Category) -> str:
        if category is Category.STT:
            return self.stt_model
        if category is Category.LLM:
            return self.llm_model
        return self.tts_model

    def supports_language(self, language: str) -> bool:
        return any(lang.lower() == language.lower() for lang in self.languages)

    def identity(self) -> tuple[str, ...]:
        return (self.stt, self.stt_model, self.llm, self.llm_model, self.tts, self.tts_model)

    def to_dict(self) -> dict:
        return {
            "stt": self.stt,
            "stt_model": self.stt_model,
            "llm": self.llm,
            "llm_model": self.llm_model,
            "tts": self.tts,
            "tts_model": self.tts_model,
            "latency_ms": self.latency_ms,
            "quality": self.quality,
            "cost_per_min": self.cost_per_min,
            "mos": self.mos,
            "languages": list(self.languages),
            "notes": self.notes or None,
        }


@dataclass(frozen=True)
class ProviderInfo:
    name: str
    category: Category
    url: str
    models: tuple[str, ...] = ()
    strengths: str = ""

    def to_dict(self) -> dict:
        return {
            "provider": self.name,
            "models": list(self.models),
            "strengths": self.strengths,
            "url": self.url,
        }


@dataclass(frozen=True)
class ScoreWeights:
    """Relative importance of each metric; normalized by their sum when scoring."""
    latency: float
    quality: float
    cost: float

    def total(self) -> float:
        return self.latency + self.quality + self.cost

    def to_dict(self) -> dict:
        return {"latency": self.latency, "quality": self.quality, "cost": self.cost}


@dataclass(frozen=True)
class RankedEntry:
    entry: BenchmarkEntry
    score: float

    def to_dict(self) -> dict:
        data = self.entry.to_dict()
        data["score"] = self.score
        return data


@dataclass(frozen=True)
class ProviderMatch:
    provider: str
    matched_alias: str


@dataclass(frozen=True)
class ParsedProviderModel:
    provider: str
    model: str | None = None


@dataclass(frozen=True)
class ParsedCombo:
    stt: ParsedProviderModel
    llm: ParsedProviderModel
    tts: ParsedProviderModel

    def part(self, category: Category) -> ParsedProviderModel:
        if category is Category.STT:
            return self.stt
        if category is Category.LLM:
            return self.llm
        return self.tts


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    query: str


Resolution = Union[Found[T], NotFound]


@dataclass(frozen=True)
class ScaffoldContext:
    """Everything a starter-file generator needs about the chosen stack."""
    agent_name: str
    language: str
    use_case: str
    entry: BenchmarkEntry


@dataclass(frozen=True)
class ScaffoldFile:
    path: str
    content: str

    def to_dict(self) -> dict:
        return {"path": self.path, "content": self.content}


@dataclass
class QueryOptions:
    """Arguments accepted by every advisor operation; each uses the fields it needs."""
    language: str | None = None
    use_case: str = ""
    optimize_for: Objective = Objective.BALANCED
    max_results: int = 5
    provider: str | None = None
    stt_provider: str = ""
    stt_model: str = ""
    llm_provider: str = ""
    llm_model: str = ""
    tts_provider: str = ""
    tts_model: str = ""
    combo_a: str = ""
    combo_b: str = ""
    sort_by: SortKey = SortKey.QUALITY
    framework: str | None = None  # "livekit" | "nextjs" | "all"
    agent_name: str | None = None
    output_dir: str | None = None
    category: str = "all"  # "all" | "stt" | "llm" | "tts"
    verbose: bool = False
    output_format: OutputFormat = OutputFormat.TEXT

    def __post_init__(self):
        self.optimize_for = Objective(self.optimize_for)
        self.sort_by = SortKey(self.sort_by)
        self.output_format = OutputFormat(self.output_format)
        if self.framework is not None and self.framework != "all":
            self.framework = Framework(self.framework).value
        if self.category != "all":
            self.category = Category(self.category).value


@dataclass
class QueryResult:
    kind: str  # operation name, selects the text renderer
    status: str  # "ok" | "warning" | "error" | "fallback"
    reason: str | None = None
    message: str = ""
    data: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_payload(self) -> dict:
        payload = {"status": self.status}
        if self.reason:
            payload["reason"] = self.reason
        if self.message:
            payload["message"] = self.message
        payload.update(self.data)
        return payload
