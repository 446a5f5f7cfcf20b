"""Advisor operations: recommend, benchmark, compare, validate, scaffold and friends.

Every operation returns a QueryResult; expected failures (unknown language,
unparseable combo, ...) come back as status payloads with a stable reason
code rather than exceptions.
"""
import logging
import time
from datetime import datetime, timezone

from benchmarks import BenchmarkCatalog
from combo_parser import (
    COMBO_EXAMPLES, describe_parsed_combo, match_combo, parse_combo_input,
)
from config import Config
from display_names import stack_label, to_safe_slug
from filters import (
    FRAMEWORK_LABELS, compatibility_summary, filter_benchmarks, is_scaffold_compatible,
    sort_benchmarks, summarize,
)
from models import (
    Category, Found, Framework, NotFound, QueryOptions, QueryResult, ScaffoldContext,
)
from resolver import Resolver
from scoring import (
    clamp_max_results, objective_weights, rank_benchmarks, round_half_up, use_case_weights,
)
from templates import generate_scaffold, render_agent_config

logger = logging.getLogger(__name__)

OPERATIONS = (
    "recommend", "benchmark", "compare", "validate", "scaffold", "providers", "health", "config",
)


def _entry_or_none(entry):
    return entry.to_dict() if entry is not None else None


def _stack_fields(providers: dict, models: dict) -> dict:
    fields = {}
    for c in Category:
        fields[f"{c.value}_provider"] = providers[c]
        fields[f"{c.value}_model"] = models[c]
    return fields


class StackAdvisor:
    def __init__(self, catalog: BenchmarkCatalog | None = None, config: Config | None = None,
                 resolver: Resolver | None = None, generator=generate_scaffold):
        self.catalog = catalog or BenchmarkCatalog()
        self.config = config or Config()
        self.resolver = resolver or Resolver(self.catalog, self.config)
        self.generator = generator

    def run(self, operation: str, options: QueryOptions) -> QueryResult:
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")
        handler = getattr(self, "generate_config" if operation == "config" else operation)
        return handler(options)

    # --- Shared error payloads ---

    def _unsupported_language(self, kind: str, text: str | None) -> QueryResult:
        suggestions = self.resolver.language_suggestions(text or "")
        logger.warning(f"{kind}: language {text!r} not recognized")
        return QueryResult(
            kind, "error", "unsupported-language",
            message=(
                f'Language "{text}" is not recognized. Try one of: {", ".join(suggestions)}.'
                if text else f'A language is required. Try one of: {", ".join(suggestions)}.'
            ),
            data={"requested_language": text, "suggestions": suggestions},
        )

    def _unsupported_provider(self, kind: str, text: str) -> QueryResult:
        providers = self.catalog.list_providers()
        logger.warning(f"{kind}: provider {text!r} not recognized")
        return QueryResult(
            kind, "error", "unsupported-provider",
            message=f'Provider "{text}" is not recognized. Try: {", ".join(providers)}',
            data={"requested_provider": text, "supported_providers": providers},
        )

    def _no_language_benchmarks(self, kind: str, language: str, use_case: str) -> QueryResult:
        stack = dict(self.config.default_stack)
        logger.info(f"{kind}: no benchmarks for {language}, suggesting default stack")
        return QueryResult(
            kind, "fallback", "no-language-benchmarks",
            message=(
                f"No benchmarks for {language}. Start with the default stack: "
                f"{stack['stt']} {stack['stt_model']} + {stack['llm']} {stack['llm_model']} + "
                f"{stack['tts']} {stack['tts_model']}."
            ),
            data={"language": language, "use_case": use_case, "stack": stack},
        )

    def _model_warnings(self, providers: dict, models: dict) -> tuple[dict, list[str]]:
        """Known models per category and the categories whose model is not among them."""
        known = {c: list(self.catalog.known_models(providers[c], c)) for c in Category}
        unknown = [
            c.value for c in Category
            if known[c] and not any(k.lower() == models[c].lower() for k in known[c])
        ]
        return known, unknown

    # --- Operations ---

    def recommend(self, options: QueryOptions) -> QueryResult:
        resolved = self.resolver.resolve_language(options.language or "")
        if isinstance(resolved, NotFound):
            return self._unsupported_language("recommend", options.language)
        language = resolved.value
        use_case = self.resolver.resolve_use_case(options.use_case)

        matching = self.catalog.for_language(language)
        if not matching:
            return self._no_language_benchmarks("recommend", language, use_case)

        limit = clamp_max_results(options.max_results, self.config.max_results_limit)
        weights = objective_weights(options.optimize_for, use_case, self.catalog, self.config)
        top = rank_benchmarks(matching, weights)[:limit]
        logger.info(
            f"recommend: {len(matching)} rows for {language}/{use_case or 'general'}, "
            f"top pick {stack_label(top[0].entry, ' + ')} ({top[0].score})"
        )
        return QueryResult("recommend", "ok", data={
            "language": language,
            "use_case": use_case,
            "optimize_for": options.optimize_for.value,
            "weights": weights.to_dict(),
            "max_results": limit,
            "count": len(top),
            "top": [r.to_dict() for r in top],
            "top_pick": top[0].to_dict(),
        })

    def benchmark(self, options: QueryOptions) -> QueryResult:
        language = None
        if options.language:
            resolved = self.resolver.resolve_language(options.language)
            if isinstance(resolved, NotFound):
                return self._unsupported_language("benchmark", options.language)
            language = resolved.value

        provider = None
        if options.provider:
            resolved = self.resolver.resolve_provider(options.provider)
            if isinstance(resolved, NotFound):
                return self._unsupported_provider("benchmark", options.provider)
            provider = resolved.value

        rows = filter_benchmarks(list(self.catalog), self.resolver, language=language, provider=provider)
        rows = sort_benchmarks(rows, options.sort_by)
        summary = summarize(rows)
        logger.info(f"benchmark: {len(rows)} rows (language={language}, provider={provider})")
        return QueryResult("benchmark", "ok", data={
            "language": language,
            "provider": provider,
            "sort_by": options.sort_by.value,
            "count": len(rows),
            "rows": [e.to_dict() for e in rows],
            "summary": {key: _entry_or_none(entry) for key, entry in summary.items()},
        })

    def compare(self, options: QueryOptions) -> QueryResult:
        parsed_a = parse_combo_input(options.combo_a, self.resolver)
        parsed_b = parse_combo_input(options.combo_b, self.resolver)
        missing = [label for label, parsed in (("A", parsed_a), ("B", parsed_b)) if isinstance(parsed, NotFound)]
        if missing:
            logger.warning(f"compare: could not parse combo {' and '.join(missing)}")
            return QueryResult(
                "compare", "error", "unparseable-combo",
                message=(
                    f"Could not parse combo {' and '.join(missing)}. Expected three segments "
                    f"(STT, LLM, TTS) separated by +, commas or ->."
                ),
                data={
                    "missing": missing,
                    "combo_a": options.combo_a,
                    "combo_b": options.combo_b,
                    "examples": list(COMBO_EXAMPLES),
                    "supported_providers": self.catalog.list_providers(),
                },
            )

        combo_a, combo_b = parsed_a.value, parsed_b.value
        entries_a = match_combo(combo_a, self.catalog, self.resolver)
        entries_b = match_combo(combo_b, self.catalog, self.resolver)
        if not entries_a or not entries_b:
            no_match = [
                f"{label} ({describe_parsed_combo(combo)})"
                for label, combo, entries in (("A", combo_a, entries_a), ("B", combo_b, entries_b))
                if not entries
            ]
            logger.warning(f"compare: no benchmark rows for {' and '.join(no_match)}")
            return QueryResult(
                "compare", "error", "no-matching-combo",
                message=(
                    f"No benchmark rows found for {' and '.join(no_match)}. Use exact model names "
                    f"from the provider directory, or provider-only input to get the best row for a provider trio."
                ),
                data={
                    "combo_a": describe_parsed_combo(combo_a),
                    "combo_b": describe_parsed_combo(combo_b),
                    "matches_found": {"a": len(entries_a), "b": len(entries_b)},
                    "supported_providers": self.catalog.list_providers(),
                },
            )

        # Ambiguous input keeps the best-scoring row under default weights
        weights = self.config.default_weights
        best_a = rank_benchmarks(entries_a, weights)[0]
        best_b = rank_benchmarks(entries_b, weights)[0]
        ambiguity = {"a": len(entries_a) > 1, "b": len(entries_b) > 1}
        if ambiguity["a"] or ambiguity["b"]:
            logger.info(f"compare: ambiguous input, candidates a={len(entries_a)} b={len(entries_b)}")

        a, b = best_a.entry, best_b.entry
        b_langs, a_langs = set(b.languages), set(a.languages)
        return QueryResult("compare", "ok", data={
            "combo_a": stack_label(a),
            "combo_b": stack_label(b),
            "stack_a": best_a.to_dict(),
            "stack_b": best_b.to_dict(),
            "winners": {
                "latency": "A" if a.latency_ms <= b.latency_ms else "B",
                "quality": "A" if a.quality >= b.quality else "B",
                "cost": "A" if a.cost_per_min <= b.cost_per_min else "B",
            },
            "deltas": {
                "latency_ms": abs(a.latency_ms - b.latency_ms),
                "quality": round(abs(a.quality - b.quality), 2),
                "cost_per_min": round(abs(a.cost_per_min - b.cost_per_min), 3),
            },
            "overlap_languages": {
                "both": [lang for lang in a.languages if lang in b_langs],
                "only_a": [lang for lang in a.languages if lang not in b_langs],
                "only_b": [lang for lang in b.languages if lang not in a_langs],
            },
            "requested": {"a": describe_parsed_combo(combo_a), "b": describe_parsed_combo(combo_b)},
            "candidate_counts": {"a": len(entries_a), "b": len(entries_b)},
            "ambiguity": ambiguity,
        })

    def validate(self, options: QueryOptions) -> QueryResult:
        requested = {c: getattr(options, f"{c.value}_provider") for c in Category}
        resolved = {c: self.resolver.resolve_provider(text) for c, text in requested.items()}
        unresolved = [c.value for c, r in resolved.items() if isinstance(r, NotFound)]
        if unresolved:
            logger.warning(f"validate: unresolved providers {unresolved}")
            return QueryResult(
                "validate", "error", "unresolved-provider",
                message=f"Could not resolve provider(s) for: {', '.join(unresolved)}.",
                data={
                    "unresolved": unresolved,
                    "requested_providers": {c.value: text for c, text in requested.items()},
                    "expected_providers": {c.value: self.catalog.list_providers(c) for c in Category},
                },
            )

        providers = {c: r.value for c, r in resolved.items()}
        models = {c: (getattr(options, f"{c.value}_model") or "").strip() for c in Category}
        known, unknown = self._model_warnings(providers, models)
        if unknown:
            logger.warning(f"validate: models not in provider catalog: {unknown}")

        matches = [
            entry for entry in self.catalog
            if all(
                self.resolver.provider_matches(providers[c], entry.provider(c))
                and entry.model(c).lower() == models[c].lower()
                for c in Category
            )
        ]

        matched = None
        framework_support = None
        framework_warning = None
        if matches:
            use_case = self.resolver.resolve_use_case(options.use_case or "customer-support")
            top = rank_benchmarks(matches, use_case_weights(use_case, self.catalog, self.config))[0]
            matched = top.to_dict()
            framework_support = {f.value: is_scaffold_compatible(top.entry, f) for f in Framework}
            if options.framework and options.framework != "all" and not framework_support[options.framework]:
                framework_warning = (
                    f"This combination is not scaffoldable with {options.framework} in current templates."
                )

        data = {
            "requested_stack": _stack_fields(providers, models),
            "unknown_models": unknown,
            "supported_models": {c.value: known[c] for c in Category},
            "benchmark_matches": len(matches),
            "matched_benchmark": matched,
            "framework_support": framework_support,
            "framework_warning": framework_warning,
            "provider_combos": None if matches else {
                c.value: self.catalog.observed_providers(c) for c in Category
            },
        }

        if unknown:
            return QueryResult(
                "validate", "warning", "unsupported-model",
                message=f"Model(s) not in the provider catalog for: {', '.join(unknown)}.",
                data=data,
            )
        if not matches:
            return QueryResult(
                "validate", "error", "no-exact-match",
                message="No exact benchmark match found for your stack.",
                data=data,
            )
        return QueryResult("validate", "ok", data=data)

    def scaffold(self, options: QueryOptions) -> QueryResult:
        if options.framework == "all":
            frameworks = [f.value for f in Framework]
            logger.warning('scaffold: framework "all" requested, a single framework is needed')
            return QueryResult(
                "scaffold", "error", "unsupported-framework",
                message=f"Scaffold needs a single framework. Pick one of: {', '.join(frameworks)}.",
                data={
                    "requested_framework": options.framework,
                    "frameworks": frameworks,
                    "supported_frameworks": compatibility_summary(),
                },
            )
        framework = Framework(options.framework or Framework.LIVEKIT.value)

        resolved = self.resolver.resolve_language(options.language or "")
        if isinstance(resolved, NotFound):
            return self._unsupported_language("scaffold", options.language)
        language = resolved.value
        use_case = self.resolver.resolve_use_case(options.use_case)

        matching = self.catalog.for_language(language)
        if not matching:
            return self._no_language_benchmarks("scaffold", language, use_case)

        ranked = rank_benchmarks(matching, use_case_weights(use_case, self.catalog, self.config))
        compatible = [r for r in ranked if is_scaffold_compatible(r.entry, framework)]
        if not compatible:
            logger.warning(f"scaffold: no {framework.value}-compatible stack for {language}")
            return QueryResult(
                "scaffold", "error", "no-scaffold-compatible-stack",
                message=(
                    f"No {language} benchmark maps to a {FRAMEWORK_LABELS[framework]} scaffold. "
                    f"Pick a supported provider combination or switch frameworks."
                ),
                data={
                    "framework": framework.value,
                    "language": language,
                    "supported_frameworks": compatibility_summary(),
                },
            )

        top, best = ranked[0], compatible[0]
        fallback_notice = None
        if best.entry.identity() != top.entry.identity():
            delta = round_half_up(abs(top.score - best.score))
            logger.info(f"scaffold: top stack not {framework.value}-compatible, using next best ({delta}pt lower)")
            if delta > self.config.fallback_notice_threshold:
                fallback_notice = (
                    f"Top-scoring stack ({stack_label(top.entry, ' + ')}) is not scaffoldable with "
                    f"{framework.value}. Using nearest supported stack ({delta:.1f}pt difference)."
                )

        default_name = f"{language.lower()}-{use_case}-agent"
        name = to_safe_slug(options.agent_name or default_name, self.config.slug_max_length)
        if not name:
            name = f"{int(time.time() * 1000)}-voice-agent"
        output_dir = options.output_dir or f"./{name}"

        ctx = ScaffoldContext(agent_name=name, language=language, use_case=use_case, entry=best.entry)
        try:
            files = self.generator(framework, ctx)
        except Exception as e:
            logger.error(f"scaffold: template generation failed for {name}: {e}")
            return QueryResult(
                "scaffold", "error", "template-generation-failed",
                message=f"Scaffold generation failed: {e}. Use a supported framework/provider combination.",
                data={"framework": framework.value, "agent_name": name, "error": str(e)},
            )

        entry = best.entry
        logger.info(f"scaffold: {len(files)} files for {name} ({framework.value})")
        return QueryResult("scaffold", "ok", data={
            "agent_name": name,
            "framework": framework.value,
            "framework_label": FRAMEWORK_LABELS[framework],
            "language": language,
            "use_case": use_case,
            "stack": {
                "stt": entry.stt, "stt_model": entry.stt_model,
                "llm": entry.llm, "llm_model": entry.llm_model,
                "tts": entry.tts, "tts_model": entry.tts_model,
            },
            "score": best.score,
            "top_ranked": top.to_dict(),
            "fallback_notice": fallback_notice,
            "output_dir": output_dir,
            "file_count": len(files),
            "files": [f.to_dict() for f in files],
            "expected": {
                "latency_ms": entry.latency_ms,
                "quality": entry.quality,
                "cost_per_min": entry.cost_per_min,
            },
        })

    def providers(self, options: QueryOptions) -> QueryResult:
        categories = list(Category) if options.category == "all" else [Category(options.category)]
        return QueryResult("providers", "ok", data={
            "category": options.category,
            "providers": {
                c.value: [info.to_dict() for info in self.catalog.provider_info(c).values()]
                for c in categories
            },
            "total": {c.value: len(self.catalog.provider_info(c)) for c in Category},
        })

    def health(self, options: QueryOptions) -> QueryResult:
        entries = list(self.catalog)
        summary = summarize(entries)
        coverage = [
            {"language": lang, "count": len(self.catalog.for_language(lang))}
            for lang in self.catalog.languages
        ]
        return QueryResult("health", "ok", data={
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "data_snapshot": self.config.data_snapshot,
            "total_benchmarks": len(entries),
            "supported_use_cases": len(self.catalog.use_case_priorities),
            "supported_languages": len(self.catalog.languages),
            "livekit_scaffoldable_rows": sum(is_scaffold_compatible(e, Framework.LIVEKIT) for e in entries),
            "nextjs_scaffoldable_rows": sum(is_scaffold_compatible(e, Framework.NEXTJS) for e in entries),
            "fastest": _entry_or_none(summary["fastest"]),
            "highest_quality": _entry_or_none(summary["best_quality"]),
            "cheapest": _entry_or_none(summary["cheapest"]),
            "coverage_by_language": coverage,
            "verbose": options.verbose,
        })

    def generate_config(self, options: QueryOptions) -> QueryResult:
        resolved_language = self.resolver.resolve_language(options.language or "English")
        if isinstance(resolved_language, NotFound):
            return self._unsupported_language("config", options.language)
        language = resolved_language.value
        use_case = self.resolver.resolve_use_case(options.use_case or "customer-support")

        requested = {c: getattr(options, f"{c.value}_provider") for c in Category}
        resolved = {c: self.resolver.resolve_provider(text) for c, text in requested.items()}
        if any(isinstance(r, NotFound) for r in resolved.values()):
            logger.warning(f"config: unresolved providers in {requested}")
            return QueryResult(
                "config", "error", "unresolved-provider",
                message="One or more providers could not be resolved.",
                data={"providers": {
                    c.value: r.value if isinstance(r, Found) else None for c, r in resolved.items()
                }},
            )

        providers = {c: r.value for c, r in resolved.items()}
        models = {c: (getattr(options, f"{c.value}_model") or "").strip() for c in Category}
        known, unknown = self._model_warnings(providers, models)
        agent_name = options.agent_name or f"{language.lower()}-{use_case}-agent"
        yaml = render_agent_config(agent_name, language, use_case, providers, models)

        config = {"agent_name": agent_name, "language": language, "use_case": use_case}
        config.update(_stack_fields(providers, models))
        data = {
            "config": config,
            "supported_models": {c.value: known[c] for c in Category},
            "unknown_models": {c.value: c.value in unknown for c in Category},
            "yaml": yaml,
        }
        if unknown:
            return QueryResult(
                "config", "warning", "unsupported-model",
                message=f"Model(s) not in the provider catalog for: {', '.join(unknown)}.",
                data=data,
            )
        return QueryResult("config", "ok", data=data)
