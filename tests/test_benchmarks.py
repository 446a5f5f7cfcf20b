# tests/test_benchmarks.py
from benchmarks import (
    BENCHMARK_DATA, PROVIDER_INFO, SUPPORTED_LANGUAGES, USE_CASE_PRIORITIES, BenchmarkCatalog,
)
from models import BenchmarkEntry, Category


def test_catalog_size():
    catalog = BenchmarkCatalog()
    assert len(catalog) == 12
    assert len(list(catalog)) == 12
    assert len(catalog.languages) == 10
    assert len(catalog.use_case_priorities) == 10


def test_every_row_uses_known_providers():
    catalog = BenchmarkCatalog()
    for entry in catalog:
        for category in Category:
            assert entry.provider(category) in catalog.provider_info(category), entry


def test_every_row_language_is_supported():
    for entry in BENCHMARK_DATA:
        assert entry.languages
        for lang in entry.languages:
            assert lang in SUPPORTED_LANGUAGES


def test_use_case_priorities_are_positive():
    for weights in USE_CASE_PRIORITIES.values():
        assert len(weights) == 3
        assert all(w > 0 for w in weights)


def test_for_language_is_case_insensitive():
    catalog = BenchmarkCatalog()
    thai = catalog.for_language("Thai")
    assert len(thai) == 7
    assert catalog.for_language("thai") == thai
    assert catalog.for_language("Mandarin") == []
    assert catalog.for_language("Malay") == []


def test_list_providers_sorted_and_deduplicated():
    catalog = BenchmarkCatalog()
    providers = catalog.list_providers()
    assert len(providers) == 11
    assert providers == sorted(providers, key=str.lower)
    assert providers.count("OpenAI") == 1
    assert catalog.list_providers(Category.TTS) == ["Cartesia", "ElevenLabs", "PlayHT", "Rime"]


def test_known_models():
    catalog = BenchmarkCatalog()
    assert catalog.known_models("Deepgram", Category.STT) == ("nova-3", "nova-2")
    assert catalog.known_models("Deepgram", Category.LLM) == ()
    assert catalog.known_models("Nobody", Category.STT) == ()


def test_observed_providers_keeps_row_order():
    catalog = BenchmarkCatalog()
    assert catalog.observed_providers(Category.STT) == [
        "Deepgram", "AssemblyAI", "OpenAI", "Speechmatics", "Google",
    ]


def test_weights_for_unknown_use_case():
    catalog = BenchmarkCatalog()
    assert catalog.weights_for("customer-support") == (60, 90, 60)
    assert catalog.weights_for("podcast-narration") is None


def test_custom_catalog_rows():
    entry = BenchmarkEntry("Deepgram", "nova-2", "OpenAI", "gpt-4.1", "Cartesia", "sonic-3",
                           240, 4.3, 0.011, languages=("English",))
    catalog = BenchmarkCatalog(entries=[entry])
    assert len(catalog) == 1
    assert catalog.for_language("English") == [entry]
    assert catalog.list_providers() == BenchmarkCatalog().list_providers()


def test_entry_to_dict():
    data = BENCHMARK_DATA[1].to_dict()
    assert data["stt"] == "Deepgram"
    assert data["llm_model"] == "llama-4-maverick"
    assert data["mos"] is None
    assert data["languages"] == ["Thai", "English"]
    assert data["notes"].startswith("Lowest latency")


def test_provider_info_to_dict():
    info = PROVIDER_INFO[Category.LLM]["Anthropic"].to_dict()
    assert info == {
        "provider": "Anthropic",
        "models": ["claude-sonnet-4-5"],
        "strengths": "Nuanced reasoning, safety, complex conversations",
        "url": "https://anthropic.com",
    }
