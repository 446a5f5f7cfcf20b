"""Voice stack benchmark catalog built from a local table of measured combinations."""
from types import MappingProxyType

from models import BenchmarkEntry, Category, ProviderInfo

# Latency is end-to-end ms, quality is UTMOS-style 0-5, cost is USD per minute
_BENCHMARK_DATABASE = [
    ("Deepgram", "nova-3", "OpenAI", "gpt-4.1-mini", "Cartesia", "sonic-3",
     168, 4.5, 0.007, 4.3,
     ("Thai", "English", "Vietnamese", "Indonesian", "Japanese", "Korean"),
     "Best overall for APAC multilingual. Production-proven across enterprise deployments."),
    ("Deepgram", "nova-3", "Groq", "llama-4-maverick", "Cartesia", "sonic-3",
     156, 4.2, 0.005, None,
     ("Thai", "English"),
     "Lowest latency option. Groq inference is fast but quality slightly lower."),
    ("Deepgram", "nova-3", "OpenAI", "gpt-4.1", "ElevenLabs", "turbo_v2.5",
     215, 4.5, 0.014, 4.5,
     ("Thai", "English", "Japanese"),
     "Highest naturalness. ElevenLabs excels for emotional/expressive voices."),
    ("AssemblyAI", "universal-3-pro", "OpenAI", "gpt-4.1-mini", "Cartesia", "sonic-3",
     178, 4.4, 0.008, 4.2,
     ("English", "Vietnamese", "Filipino", "Cantonese"),
     "Strong for Southeast Asian languages. AssemblyAI universal model handles accents well."),
    ("OpenAI", "gpt-4o-transcribe", "OpenAI", "gpt-4.1", "ElevenLabs", "eleven_v3",
     287, 4.8, 0.022, 4.8,
     ("English", "Japanese", "Korean"),
     "Premium quality, highest cost. Best for high-stakes conversations (insurance, healthcare)."),
    ("Speechmatics", "enhanced", "OpenAI", "gpt-4.1-mini", "Rime", "arcana-v3",
     205, 4.2, 0.008, None,
     ("Thai", "English", "Cantonese"),
     "Speechmatics leads for Thai code-switching (94% vs Deepgram 71%)."),
    ("Deepgram", "nova-3", "Google", "gemini-2.5-pro", "PlayHT", "play-3.0-mini",
     268, 4.1, 0.008, 4.1,
     ("English", "Indonesian", "Filipino"),
     "Good balance for Indonesian/Filipino markets."),
    ("Google", "chirp-3", "Groq", "llama-4-maverick", "Cartesia", "sonic-3",
     195, 4.0, 0.006, None,
     ("English", "Vietnamese", "Japanese", "Korean"),
     "Budget option with decent quality. Good for high-volume, cost-sensitive deployments."),
    ("Deepgram", "nova-3", "ElevenLabs", "eleven-turbo", "ElevenLabs", "eleven_v3",
     142, 4.1, 0.004, None,
     ("Thai", "English", "Vietnamese", "Indonesian"),
     "ElevenLabs end-to-end. Lowest latency when using their full stack."),
    ("Deepgram", "nova-3", "Google", "gemini-2.5-flash", "Cartesia", "sonic-3",
     148, 4.2, 0.004, None,
     ("English", "Thai", "Vietnamese", "Filipino", "Indonesian"),
     "Best cost-to-performance ratio. Gemini Flash is surprisingly good for voice agents."),
    ("Deepgram", "nova-3", "Anthropic", "claude-sonnet-4-5", "Cartesia", "sonic-3",
     198, 4.6, 0.009, None,
     ("English", "Japanese", "Korean", "Thai"),
     "Claude excels at nuanced conversations. Best for complex reasoning in voice agents."),
    ("AssemblyAI", "universal-3-pro", "ElevenLabs", "eleven-turbo", "ElevenLabs", "turbo_v2.5",
     210, 4.0, 0.006, None,
     ("English", "Cantonese", "Japanese"),
     "Solid mid-range option for East Asian languages."),
]

BENCHMARK_DATA: tuple[BenchmarkEntry, ...] = tuple(
    BenchmarkEntry(
        stt=stt, stt_model=stt_model,
        llm=llm, llm_model=llm_model,
        tts=tts, tts_model=tts_model,
        latency_ms=latency, quality=quality, cost_per_min=cost, mos=mos,
        languages=languages, notes=notes,
    )
    for (stt, stt_model, llm, llm_model, tts, tts_model,
         latency, quality, cost, mos, languages, notes) in _BENCHMARK_DATABASE
)

# (latency, quality, cost) weights per use case
USE_CASE_PRIORITIES = MappingProxyType({
    "debt-collections": (80, 60, 70),
    "sales": (70, 80, 50),
    "customer-support": (60, 90, 60),
    "scheduling": (90, 40, 80),
    "insurance-claims": (50, 95, 40),
    "lead-qualification": (75, 75, 55),
    "appointment-reminders": (85, 50, 75),
    "healthcare-triage": (55, 95, 45),
    "banking-faq": (60, 90, 60),
    "recruitment-screening": (65, 85, 50),
})

SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "English", "Thai", "Vietnamese", "Indonesian", "Filipino",
    "Japanese", "Korean", "Cantonese", "Mandarin", "Malay",
)

_PROVIDER_DATABASE = {
    Category.STT: [
        ("Deepgram", "https://deepgram.com", ("nova-3", "nova-2"),
         "Fast, accurate, good multilingual"),
        ("AssemblyAI", "https://assemblyai.com", ("universal-3-pro",),
         "Best for accented speech, speaker diarization"),
        ("OpenAI", "https://openai.com", ("gpt-4o-transcribe", "whisper-large-v3"),
         "Highest accuracy, slower"),
        ("Speechmatics", "https://speechmatics.com", ("enhanced",),
         "Best for code-switching (Thai/English)"),
        ("Google", "https://cloud.google.com/speech-to-text", ("chirp-3",),
         "Wide language coverage, competitive pricing"),
    ],
    Category.LLM: [
        ("OpenAI", "https://openai.com", ("gpt-4.1-mini", "gpt-4.1"),
         "Best general-purpose, reliable"),
        ("Anthropic", "https://anthropic.com", ("claude-sonnet-4-5",),
         "Nuanced reasoning, safety, complex conversations"),
        ("Google", "https://ai.google.dev", ("gemini-2.5-flash", "gemini-2.5-pro"),
         "Fast, cost-effective, multilingual"),
        ("Groq", "https://groq.com", ("llama-4-maverick",),
         "Ultra-low latency inference"),
        ("ElevenLabs", "https://elevenlabs.io", ("eleven-turbo",),
         "Lowest latency in ElevenLabs stack"),
    ],
    Category.TTS: [
        ("Cartesia", "https://cartesia.ai", ("sonic-3",),
         "Lowest TTFB, natural prosody, multilingual"),
        ("ElevenLabs", "https://elevenlabs.io", ("eleven_v3", "turbo_v2.5"),
         "Most natural, expressive, emotional range"),
        ("PlayHT", "https://play.ht", ("play-3.0-mini",),
         "Good quality-to-cost ratio"),
        ("Rime", "https://rime.ai", ("arcana-v3",),
         "Consistent quality, good for Asian languages"),
    ],
}

PROVIDER_INFO = MappingProxyType({
    category: MappingProxyType({
        name: ProviderInfo(name=name, category=category, url=url, models=models, strengths=strengths)
        for name, url, models, strengths in rows
    })
    for category, rows in _PROVIDER_DATABASE.items()
})


class BenchmarkCatalog:
    """Read-only view over the benchmark rows and provider metadata.

    Built once and shared; tests construct one over their own rows.
    """

    def __init__(self, entries=BENCHMARK_DATA, providers=PROVIDER_INFO,
                 use_case_priorities=USE_CASE_PRIORITIES, languages=SUPPORTED_LANGUAGES):
        self.entries: tuple[BenchmarkEntry, ...] = tuple(entries)
        self.providers = providers
        self.use_case_priorities = use_case_priorities
        self.languages: tuple[str, ...] = tuple(languages)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def for_language(self, language: str) -> list[BenchmarkEntry]:
        return [e for e in self.entries if e.supports_language(language)]

    def provider_info(self, category: Category) -> dict:
        return dict(self.providers[category])

    def known_models(self, provider: str, category: Category) -> tuple[str, ...]:
        info = self.providers[category].get(provider)
        return info.models if info else ()

    def list_providers(self, category: Category | None = None) -> list[str]:
        """Canonical provider names sorted alphabetically (case-insensitive)."""
        if category is not None:
            names = set(self.providers[category])
        else:
            names = {name for by_name in self.providers.values() for name in by_name}
        return sorted(names, key=str.lower)

    def observed_providers(self, category: Category) -> list[str]:
        """Providers that actually appear in benchmark rows for a category, in row order."""
        seen: list[str] = []
        for entry in self.entries:
            name = entry.provider(category)
            if name not in seen:
                seen.append(name)
        return seen

    def weights_for(self, use_case: str):
        return self.use_case_priorities.get(use_case)
