"""Resolve free-text provider, language and use-case names to canonical keys."""
import difflib
import logging

from aliases import LANGUAGE_ALIASES, PROVIDER_ALIASES, USE_CASE_ALIASES
from benchmarks import BenchmarkCatalog
from config import Config
from display_names import normalize_term, normalize_use_case
from models import Found, NotFound, ProviderMatch, Resolution

logger = logging.getLogger(__name__)


class Resolver:
    def __init__(self, catalog: BenchmarkCatalog | None = None, config: Config | None = None,
                 provider_aliases=PROVIDER_ALIASES, language_aliases=LANGUAGE_ALIASES,
                 use_case_aliases=USE_CASE_ALIASES):
        self.catalog = catalog or BenchmarkCatalog()
        self.config = config or Config()
        self.language_aliases = language_aliases
        self.use_case_aliases = use_case_aliases
        self.alias_catalog = self._build_alias_catalog(provider_aliases)

    @staticmethod
    def _build_alias_catalog(provider_aliases) -> list[tuple[str, str]]:
        """Flatten (provider, alias) pairs, longest alias first.

        "open ai" must be tried before "open" so the more specific alias wins.
        """
        pairs = []
        for provider, aliases in provider_aliases.items():
            seen: list[str] = []
            for alias in (provider, *aliases):
                norm = normalize_term(alias)
                if norm and norm not in seen:
                    seen.append(norm)
            pairs.extend((provider, alias) for alias in seen)
        pairs.sort(key=lambda pair: len(pair[1]), reverse=True)
        return pairs

    # --- Providers ---

    def match_provider(self, text: str) -> Resolution[ProviderMatch]:
        """Resolve a provider name, possibly followed by a model name.

        Accepts the alias itself, a leading fragment of an alias ("deep" →
        Deepgram), or the alias followed by more words ("open ai gpt-4.1").
        """
        normalized = normalize_term(text or "")
        min_len = self.config.min_provider_input_length
        if len(normalized) < min_len:
            logger.debug(f"Provider input {text!r} too short to resolve")
            return NotFound(text or "")

        for provider, alias in self.alias_catalog:
            if len(alias) < min_len:
                continue
            if alias == normalized or alias.startswith(normalized) or normalized.startswith(f"{alias} "):
                return Found(ProviderMatch(provider=provider, matched_alias=alias))
        logger.debug(f"No provider alias matches {text!r}")
        return NotFound(text)

    def resolve_provider(self, text: str) -> Resolution[str]:
        match = self.match_provider(text)
        if isinstance(match, Found):
            return Found(match.value.provider)
        return match

    def provider_matches(self, text: str, provider: str) -> bool:
        """True when `text` resolves to the same canonical provider as `provider`."""
        resolved = self.resolve_provider(text)
        if isinstance(resolved, NotFound):
            return False
        return normalize_term(resolved.value) == normalize_term(provider)

    # --- Languages ---

    def resolve_language(self, text: str) -> Resolution[str]:
        normalized = normalize_term(text or "")
        if not normalized:
            return NotFound(text or "")
        languages = self.catalog.languages

        for lang in languages:
            if normalize_term(lang) == normalized:
                return Found(lang)

        for canonical, aliases in self.language_aliases.items():
            if any(normalize_term(alias) == normalized for alias in aliases):
                for lang in languages:
                    if normalize_term(lang) == canonical:
                        return Found(lang)
                return Found(canonical)

        if len(normalized) >= self.config.min_language_prefix_length:
            for lang in languages:
                lang_norm = normalize_term(lang)
                if lang_norm.startswith(normalized) or normalized.startswith(lang_norm):
                    return Found(lang)

        logger.debug(f"Language {text!r} not recognized")
        return NotFound(text)

    def language_suggestions(self, text: str) -> list[str]:
        """Nearest supported languages for unrecognized input, never empty."""
        limit = self.config.max_language_suggestions
        languages = list(self.catalog.languages)
        normalized = normalize_term(text or "")
        if not normalized:
            return languages[:limit]

        by_name = [
            lang for lang in languages
            if normalized in normalize_term(lang) or normalize_term(lang) in normalized
        ]
        by_alias = [
            lang for lang in languages
            if any(normalized in normalize_term(alias)
                   for alias in self.language_aliases.get(normalize_term(lang), ()))
        ]
        by_lower = {normalize_term(lang): lang for lang in languages}
        by_spelling = [
            by_lower[name]
            for name in difflib.get_close_matches(normalized, list(by_lower), n=limit, cutoff=0.6)
        ]

        suggestions = list(dict.fromkeys(by_name + by_alias + by_spelling))
        if not suggestions:
            suggestions = languages
        return suggestions[:limit]

    # --- Use cases ---

    def resolve_use_case(self, text: str) -> str:
        """Canonical use-case key, or the normalized input when nothing matches."""
        normalized = normalize_use_case(text or "")
        if not normalized:
            return ""
        if self.catalog.weights_for(normalized) is not None:
            return normalized

        for use_case, aliases in self.use_case_aliases.items():
            if use_case == normalized:
                return use_case
            for alias in aliases:
                alias_norm = normalize_use_case(alias)
                if alias_norm == normalized or alias_norm.startswith(normalized) or normalized.startswith(alias_norm):
                    return use_case
        logger.debug(f"Use case {text!r} not recognized, passing through as {normalized!r}")
        return normalized
