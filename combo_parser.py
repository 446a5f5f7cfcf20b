"""Parse "Provider model + Provider model + Provider model" combo strings."""
import logging
import re

from benchmarks import BenchmarkCatalog
from display_names import models_match, normalize_term
from models import (
    BenchmarkEntry, Category, Found, NotFound, ParsedCombo, ParsedProviderModel, Resolution,
)
from resolver import Resolver

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"\s*(?:\+|,|->)\s*")

COMBO_EXAMPLES = (
    "Deepgram + OpenAI + Cartesia",
    "Deepgram nova-3 + OpenAI gpt-4.1-mini + Cartesia sonic-3",
    "Deepgram nova-3, OpenAI gpt-4.1-mini, Cartesia sonic-3",
)


def parse_provider_with_model(text: str, resolver: Resolver) -> Resolution[ParsedProviderModel]:
    """Split one segment into a canonical provider and the model as the user typed it."""
    match = resolver.match_provider(text)
    if isinstance(match, NotFound):
        return match
    provider, alias = match.value.provider, match.value.matched_alias

    remainder = normalize_term(text)[len(alias):].strip()
    if not remainder:
        return Found(ParsedProviderModel(provider=provider))

    # Skip as many original words as the alias spans to keep "gpt-4.1-mini" intact
    alias_words = len(alias.split())
    original_model = " ".join(text.split()[alias_words:]).strip()
    return Found(ParsedProviderModel(provider=provider, model=original_model or remainder))


def parse_combo_input(text: str, resolver: Resolver) -> Resolution[ParsedCombo]:
    parts = [p.strip() for p in _SEPARATORS.split(text or "")]
    parts = [p for p in parts if p]
    if len(parts) != 3:
        logger.debug(f"Combo {text!r} has {len(parts)} segments, expected 3")
        return NotFound(text or "")

    parsed = [parse_provider_with_model(part, resolver) for part in parts]
    for part, result in zip(parts, parsed):
        if isinstance(result, NotFound):
            logger.debug(f"Combo segment {part!r} does not name a known provider")
            return NotFound(text)
    stt, llm, tts = (result.value for result in parsed)
    return Found(ParsedCombo(stt=stt, llm=llm, tts=tts))


def describe_parsed_combo(combo: ParsedCombo) -> str:
    def _part(part: ParsedProviderModel) -> str:
        return f"{part.provider} {part.model}" if part.model else part.provider

    return " + ".join(_part(combo.part(category)) for category in Category)


def entry_matches_combo(entry: BenchmarkEntry, combo: ParsedCombo, resolver: Resolver) -> bool:
    for category in Category:
        part = combo.part(category)
        if not resolver.provider_matches(part.provider, entry.provider(category)):
            return False
        if part.model and not models_match(entry.model(category), part.model):
            return False
    return True


def match_combo(combo: ParsedCombo, catalog: BenchmarkCatalog, resolver: Resolver) -> list[BenchmarkEntry]:
    """All benchmark rows consistent with a parsed combo; several when models were omitted."""
    return [entry for entry in catalog if entry_matches_combo(entry, combo, resolver)]
