# tests/test_queries.py
import pytest

from benchmarks import BENCHMARK_DATA, BenchmarkCatalog
from config import Config
from models import BenchmarkEntry, QueryOptions
from queries import StackAdvisor


def _advisor(**config):
    return StackAdvisor(config=Config(**config))


def _extra_rows():
    """Catalog with a second row for two provider trios so compare must pick one."""
    return BenchmarkCatalog(entries=list(BENCHMARK_DATA) + [
        BenchmarkEntry("Deepgram", "nova-2", "OpenAI", "gpt-4.1", "Cartesia", "sonic-3",
                       240, 4.3, 0.011, languages=("English",)),
        BenchmarkEntry("AssemblyAI", "universal-3-pro", "ElevenLabs", "eleven-turbo", "ElevenLabs", "eleven_v3",
                       260, 3.9, 0.009, languages=("English",)),
    ])


# --- recommend ---

def test_recommend_thai_quality():
    result = _advisor().recommend(QueryOptions(
        language="Thai", use_case="customer support", optimize_for="quality", max_results=5,
    ))
    assert result.status == "ok"
    data = result.data
    assert data["language"] == "Thai"
    assert data["use_case"] == "customer-support"
    assert data["weights"] == {"latency": 30, "quality": 100, "cost": 30}
    assert data["count"] == 5
    top = data["top_pick"]
    assert (top["stt"], top["llm"], top["llm_model"], top["tts"]) == (
        "Deepgram", "Google", "gemini-2.5-flash", "Cartesia",
    )
    assert all("Thai" in row["languages"] for row in data["top"])
    scores = [row["score"] for row in data["top"]]
    assert scores == sorted(scores, reverse=True)
    assert top["score"] == scores[0]


def test_recommend_resolves_language_alias():
    result = _advisor().recommend(QueryOptions(language="th"))
    assert result.data["language"] == "Thai"


def test_recommend_clamps_max_results():
    advisor = _advisor()
    assert advisor.recommend(QueryOptions(language="Thai", max_results=50)).data["count"] == 7
    assert advisor.recommend(QueryOptions(language="Thai", max_results=50)).data["max_results"] == 10
    assert advisor.recommend(QueryOptions(language="Thai", max_results=0)).data["count"] == 1


def test_recommend_unknown_use_case_uses_default_weights():
    result = _advisor().recommend(QueryOptions(language="English", use_case="podcast narration"))
    assert result.data["use_case"] == "podcast-narration"
    assert result.data["weights"] == {"latency": 70, "quality": 70, "cost": 60}


def test_recommend_unsupported_language():
    result = _advisor().recommend(QueryOptions(language="Nigerian"))
    assert result.status == "error"
    assert result.reason == "unsupported-language"
    assert result.data["suggestions"]


def test_recommend_missing_language():
    result = _advisor().recommend(QueryOptions())
    assert result.reason == "unsupported-language"
    assert result.message.startswith("A language is required.")
    assert "None" not in result.message
    assert result.data["suggestions"]


def test_recommend_language_without_benchmarks():
    result = _advisor().recommend(QueryOptions(language="Mandarin"))
    assert result.status == "fallback"
    assert result.reason == "no-language-benchmarks"
    assert result.data["stack"]["stt"] == "Deepgram"
    assert "nova-3" in result.message


# --- benchmark ---

def test_benchmark_unsupported_language():
    result = _advisor().benchmark(QueryOptions(language="Nigerian"))
    assert result.status == "error"
    assert result.reason == "unsupported-language"
    assert 1 <= len(result.data["suggestions"]) <= 5


def test_benchmark_unsupported_provider():
    result = _advisor().benchmark(QueryOptions(provider="NopeAI"))
    assert result.reason == "unsupported-provider"
    assert len(result.data["supported_providers"]) == 11


def test_benchmark_language_sorted_by_latency():
    result = _advisor().benchmark(QueryOptions(language="Thai", sort_by="latency"))
    rows = result.data["rows"]
    assert result.data["count"] == 7
    latencies = [r["latency_ms"] for r in rows]
    assert latencies == sorted(latencies)
    assert result.data["summary"]["fastest"]["latency_ms"] == 142


def test_benchmark_provider_alias():
    result = _advisor().benchmark(QueryOptions(provider="eleven labs"))
    assert result.data["provider"] == "ElevenLabs"
    assert result.data["count"] == 4


def test_benchmark_no_filters():
    result = _advisor().benchmark(QueryOptions())
    assert result.data["count"] == 12
    qualities = [r["quality"] for r in result.data["rows"]]
    assert qualities == sorted(qualities, reverse=True)


def test_benchmark_empty_result():
    # Cantonese rows never use Groq
    result = _advisor().benchmark(QueryOptions(language="Cantonese", provider="Groq"))
    assert result.status == "ok"
    assert result.data["rows"] == []
    assert result.data["summary"] == {"fastest": None, "best_quality": None, "cheapest": None}


# --- compare ---

def test_compare_aliases():
    result = _advisor().compare(QueryOptions(
        combo_a="Deepgram nova-3 + Open AI gpt-4.1-mini + Cartesia sonic-3",
        combo_b="Assembly AI universal-3-pro + OpenAI gpt-4.1-mini + cartesia sonic-3",
    ))
    assert result.status == "ok"
    data = result.data
    assert data["winners"] == {"latency": "A", "quality": "A", "cost": "A"}
    assert data["deltas"]["latency_ms"] == 10
    assert data["overlap_languages"] == {
        "both": ["English", "Vietnamese"],
        "only_a": ["Thai", "Indonesian", "Japanese", "Korean"],
        "only_b": ["Filipino", "Cantonese"],
    }
    assert data["candidate_counts"] == {"a": 1, "b": 1}
    assert data["ambiguity"] == {"a": False, "b": False}


def test_compare_unknown_model():
    result = _advisor().compare(QueryOptions(
        combo_a="Deepgram nova-3 + OpenAI gpt-4.1-mini + Cartesia sonic-3",
        combo_b="Deepgram nova-3 + OpenAI gpt-4.999 + Cartesia sonic-3",
    ))
    assert result.status == "error"
    assert result.reason == "no-matching-combo"
    assert result.data["matches_found"] == {"a": 1, "b": 0}


def test_compare_unparseable():
    result = _advisor().compare(QueryOptions(
        combo_a="Deepgram + OpenAI",
        combo_b="Deepgram + OpenAI + Cartesia",
    ))
    assert result.reason == "unparseable-combo"
    assert result.data["missing"] == ["A"]
    assert result.data["examples"]


def test_compare_provider_only_picks_best_row():
    advisor = StackAdvisor(catalog=_extra_rows())
    result = advisor.compare(QueryOptions(
        combo_a="Deepgram + OpenAI + Cartesia",
        combo_b="AssemblyAI + ElevenLabs + ElevenLabs",
    ))
    assert result.status == "ok"
    data = result.data
    assert data["candidate_counts"] == {"a": 2, "b": 2}
    assert data["ambiguity"] == {"a": True, "b": True}
    assert data["stack_a"]["llm_model"] == "gpt-4.1-mini"
    assert data["stack_a"]["score"] == 74.1
    assert data["stack_b"]["tts_model"] == "turbo_v2.5"


# --- validate ---

def test_validate_exact_match():
    result = _advisor().validate(QueryOptions(
        stt_provider="Deepgram", stt_model="nova-3",
        llm_provider="open ai", llm_model="gpt-4.1-mini",
        tts_provider="Cartesia", tts_model="sonic-3",
    ))
    assert result.status == "ok"
    data = result.data
    assert data["benchmark_matches"] == 1
    assert data["matched_benchmark"]["score"] == 76.0
    assert data["framework_support"] == {"livekit": True, "nextjs": False}
    assert data["framework_warning"] is None
    assert data["requested_stack"]["llm_provider"] == "OpenAI"


def test_validate_framework_warning():
    result = _advisor().validate(QueryOptions(
        stt_provider="Deepgram", stt_model="nova-3",
        llm_provider="OpenAI", llm_model="gpt-4.1-mini",
        tts_provider="Cartesia", tts_model="sonic-3",
        framework="nextjs",
    ))
    assert result.status == "ok"
    assert "nextjs" in result.data["framework_warning"]


def test_validate_unknown_model():
    result = _advisor().validate(QueryOptions(
        stt_provider="Deepgram", stt_model="nova-3",
        llm_provider="OpenAI", llm_model="gpt-not-a-real-model",
        tts_provider="Cartesia", tts_model="sonic-3",
    ))
    assert result.status == "warning"
    assert result.reason == "unsupported-model"
    assert result.data["unknown_models"] == ["llm"]
    assert result.data["benchmark_matches"] == 0
    assert result.data["supported_models"]["llm"] == ["gpt-4.1-mini", "gpt-4.1"]


def test_validate_known_models_without_benchmark():
    result = _advisor().validate(QueryOptions(
        stt_provider="Deepgram", stt_model="nova-2",
        llm_provider="OpenAI", llm_model="gpt-4.1",
        tts_provider="Rime", tts_model="arcana-v3",
    ))
    assert result.status == "error"
    assert result.reason == "no-exact-match"
    assert result.data["unknown_models"] == []
    assert "Deepgram" in result.data["provider_combos"]["stt"]


def test_validate_unresolved_provider():
    result = _advisor().validate(QueryOptions(
        stt_provider="Deepgram", stt_model="nova-3",
        llm_provider="NopeAI", llm_model="x",
        tts_provider="Cartesia", tts_model="sonic-3",
    ))
    assert result.status == "error"
    assert result.reason == "unresolved-provider"
    assert result.data["unresolved"] == ["llm"]
    assert result.data["expected_providers"]["tts"] == ["Cartesia", "ElevenLabs", "PlayHT", "Rime"]


# --- scaffold ---

def test_scaffold_livekit_skips_incompatible_top_row():
    result = _advisor().scaffold(QueryOptions(language="Thai", use_case="customer-support", framework="livekit"))
    assert result.status == "ok"
    data = result.data
    assert data["top_ranked"]["llm"] == "ElevenLabs"
    assert data["stack"]["llm"] == "Google"
    assert data["stack"]["llm_model"] == "gemini-2.5-flash"
    # Both rows score 80.6, so no notice
    assert data["fallback_notice"] is None
    assert data["agent_name"] == "thai-customer-support-agent"
    assert data["output_dir"] == "./thai-customer-support-agent"
    assert [f["path"] for f in data["files"]] == ["agent.py", "requirements.txt", ".env.example", "README.md"]
    assert data["file_count"] == 4


def test_scaffold_defaults_to_livekit():
    result = _advisor().scaffold(QueryOptions(language="Thai", use_case="customer-support"))
    assert result.data["framework"] == "livekit"


def test_scaffold_nextjs_uses_top_row():
    result = _advisor().scaffold(QueryOptions(language="Thai", use_case="customer-support", framework="nextjs"))
    assert result.status == "ok"
    assert result.data["stack"]["tts"] == "ElevenLabs"
    assert result.data["fallback_notice"] is None
    assert "package.json" in [f["path"] for f in result.data["files"]]


def test_scaffold_nextjs_fallback_notice():
    result = _advisor().scaffold(QueryOptions(language="Korean", use_case="customer-support", framework="nextjs"))
    data = result.data
    assert result.status == "ok"
    assert data["stack"]["stt"] == "OpenAI"
    assert data["stack"]["tts"] == "ElevenLabs"
    assert data["score"] == 43.0
    assert data["top_ranked"]["score"] == 76.0
    assert "33.0pt difference" in data["fallback_notice"]


def test_scaffold_fallback_threshold_is_configurable():
    # Cantonese: top row scores 72.3, best Next.js row 67.1
    options = QueryOptions(language="Cantonese", use_case="customer-support", framework="nextjs")
    assert _advisor().scaffold(options).data["fallback_notice"] is not None
    assert _advisor(fallback_notice_threshold=10).scaffold(options).data["fallback_notice"] is None


def test_scaffold_no_compatible_stack():
    result = _advisor().scaffold(QueryOptions(language="Cantonese", framework="livekit"))
    assert result.status == "error"
    assert result.reason == "no-scaffold-compatible-stack"
    assert "livekit" in result.data["supported_frameworks"]


def test_scaffold_language_without_benchmarks():
    result = _advisor().scaffold(QueryOptions(language="Malay"))
    assert result.status == "fallback"
    assert result.reason == "no-language-benchmarks"


def test_scaffold_custom_agent_name_and_output_dir():
    result = _advisor().scaffold(QueryOptions(
        language="Thai", agent_name="My Agent!!", output_dir="/tmp/agents/my-agent",
    ))
    assert result.data["agent_name"] == "my-agent"
    assert result.data["output_dir"] == "/tmp/agents/my-agent"


def test_scaffold_needs_a_single_framework():
    result = _advisor().scaffold(QueryOptions(language="Thai", framework="all"))
    assert result.status == "error"
    assert result.reason == "unsupported-framework"
    assert result.data["frameworks"] == ["livekit", "nextjs"]
    assert "livekit, nextjs" in result.message


def test_scaffold_template_failure():
    def broken_generator(framework, ctx):
        raise RuntimeError("template exploded")

    advisor = StackAdvisor(generator=broken_generator)
    result = advisor.scaffold(QueryOptions(language="Thai"))
    assert result.status == "error"
    assert result.reason == "template-generation-failed"
    assert result.data["error"] == "template exploded"


# --- providers / health / config ---

def test_providers_all():
    result = _advisor().providers(QueryOptions())
    assert result.data["total"] == {"stt": 5, "llm": 5, "tts": 4}
    assert set(result.data["providers"]) == {"stt", "llm", "tts"}


def test_providers_single_category():
    result = _advisor().providers(QueryOptions(category="tts"))
    assert list(result.data["providers"]) == ["tts"]
    names = [p["provider"] for p in result.data["providers"]["tts"]]
    assert names == ["Cartesia", "ElevenLabs", "PlayHT", "Rime"]


def test_health():
    result = _advisor().health(QueryOptions(verbose=True))
    data = result.data
    assert data["total_benchmarks"] == 12
    assert data["supported_languages"] == 10
    assert data["supported_use_cases"] == 10
    assert data["livekit_scaffoldable_rows"] == 5
    assert data["nextjs_scaffoldable_rows"] == 4
    assert data["fastest"]["latency_ms"] == 142
    assert data["highest_quality"]["quality"] == 4.8
    coverage = {item["language"]: item["count"] for item in data["coverage_by_language"]}
    assert coverage["Thai"] == 7
    assert coverage["Mandarin"] == 0
    assert data["data_snapshot"] == "2026-02-15T00:00:00Z"


def test_generate_config():
    result = _advisor().generate_config(QueryOptions(
        language="th", use_case="sales",
        stt_provider="deep gram", stt_model="nova-3",
        llm_provider="claude", llm_model="claude-sonnet-4-5",
        tts_provider="eleven labs", tts_model="eleven_v3",
    ))
    assert result.status == "ok"
    config = result.data["config"]
    assert config["agent_name"] == "thai-sales-agent"
    assert (config["stt_provider"], config["llm_provider"], config["tts_provider"]) == (
        "Deepgram", "Anthropic", "ElevenLabs",
    )
    assert result.data["unknown_models"] == {"stt": False, "llm": False, "tts": False}
    assert "provider: anthropic" in result.data["yaml"]
    assert "quality_targets:" in result.data["yaml"]


def test_generate_config_unknown_model():
    result = _advisor().generate_config(QueryOptions(
        stt_provider="Deepgram", stt_model="nova-9",
        llm_provider="OpenAI", llm_model="gpt-4.1",
        tts_provider="Cartesia", tts_model="sonic-3",
    ))
    assert result.status == "warning"
    assert result.data["unknown_models"]["stt"] is True
    assert result.data["config"]["language"] == "English"
    assert result.data["config"]["use_case"] == "customer-support"


def test_generate_config_unresolved_provider():
    result = _advisor().generate_config(QueryOptions(stt_provider="??", llm_provider="OpenAI",
                                                     tts_provider="Cartesia"))
    assert result.reason == "unresolved-provider"
    assert result.data["providers"]["stt"] is None


def test_run_dispatches_operations():
    advisor = _advisor()
    assert advisor.run("config", QueryOptions(
        stt_provider="Deepgram", stt_model="nova-3",
        llm_provider="OpenAI", llm_model="gpt-4.1",
        tts_provider="Cartesia", tts_model="sonic-3",
    )).kind == "config"
    assert advisor.run("health", QueryOptions()).kind == "health"
    with pytest.raises(ValueError):
        advisor.run("delete-everything", QueryOptions())


def test_query_options_reject_bad_values():
    with pytest.raises(ValueError):
        QueryOptions(optimize_for="speed")
    with pytest.raises(ValueError):
        QueryOptions(framework="django")
    with pytest.raises(ValueError):
        QueryOptions(category="vad")


def test_result_payload_flattens_data():
    result = _advisor().recommend(QueryOptions(language="Nigerian"))
    payload = result.to_payload()
    assert payload["status"] == "error"
    assert payload["reason"] == "unsupported-language"
    assert payload["requested_language"] == "Nigerian"
