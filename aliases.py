"""Alias tables used to resolve free-text provider, language and use-case input."""
from types import MappingProxyType

# Canonical provider name -> aliases. The canonical name is always an alias of itself.
PROVIDER_ALIASES = MappingProxyType({
    "Deepgram": ("deepgram", "deep gram"),
    "AssemblyAI": ("assemblyai", "assembly ai", "assembly"),
    "OpenAI": ("openai", "open ai", "open-ai", "gpt", "chatgpt"),
    "Speechmatics": ("speechmatics", "speech-matics", "speech matics"),
    "Google": ("google", "gemini"),
    "Anthropic": ("anthropic", "claude", "claude ai"),
    "Groq": ("groq", "llama", "llama 4", "llama-4", "llama4"),
    "Cartesia": ("cartesia", "cartes ia"),
    "ElevenLabs": ("elevenlabs", "eleven labs", "eleven", "eleven-labs"),
    "PlayHT": ("playht", "play ht", "play-ht"),
    "Rime": ("rime", "rime ai"),
})

# Normalized language name -> aliases
LANGUAGE_ALIASES = MappingProxyType({
    "english": ("en", "eng", "american", "us", "gb"),
    "thai": ("th", "thai", "thai language"),
    "vietnamese": ("vi", "viet", "vietnamese"),
    "indonesian": ("id", "ind"),
    "filipino": ("tl", "filipino", "tagalog", "ph"),
    "japanese": ("ja", "jp", "nihongo"),
    "korean": ("ko", "kr", "hangul", "korean"),
    "cantonese": ("zh-yue", "cantonese", "kantonees", "cn-cant"),
    "mandarin": ("zh", "zh-cn", "zh-hans", "mandarin"),
    "malay": ("ms", "ms-my", "malay"),
})

# Speech API language codes for generated configs
LANGUAGE_CODES = MappingProxyType({
    "English": "en",
    "Thai": "th",
    "Vietnamese": "vi",
    "Indonesian": "id",
    "Filipino": "tl",
    "Japanese": "ja",
    "Korean": "ko",
    "Cantonese": "yue",
    "Mandarin": "zh",
    "Malay": "ms",
})

USE_CASE_ALIASES = MappingProxyType({
    "customer-support": ("customer support", "support", "cs", "customer"),
    "sales": ("sale", "sales", "revenue"),
    "debt-collections": ("debt collection", "collections", "collection", "collections team"),
    "scheduling": ("schedule", "calendar", "appointments", "booking"),
    "healthcare-triage": ("healthcare", "medical", "triage", "doctor", "clinic"),
    "insurance-claims": ("claims", "insurance", "insurance claim", "claims ops"),
    "lead-qualification": ("lead qualify", "leads", "qualification", "lead"),
    "appointment-reminders": ("reminder", "appointment", "notification", "nudge"),
    "banking-faq": ("banking", "faq", "finance", "compliance"),
    "recruitment-screening": ("recruiting", "recruitment", "screening", "hiring", "interviews"),
})
