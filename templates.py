"""Starter project files and agent configs rendered with Jinja2 templates."""
import json
import logging
from datetime import datetime, timezone

from jinja2 import Template

from aliases import LANGUAGE_CODES
from models import Category, Framework, ScaffoldContext, ScaffoldFile

logger = logging.getLogger(__name__)

# (category, provider) -> (livekit plugin module, constructor, API key env var)
LIVEKIT_PLUGINS = {
    (Category.STT, "Deepgram"): ("deepgram", "deepgram.STT", "DEEPGRAM_API_KEY"),
    (Category.STT, "OpenAI"): ("openai", "openai.STT", "OPENAI_API_KEY"),
    (Category.STT, "Google"): ("google", "google.STT", "GOOGLE_APPLICATION_CREDENTIALS"),
    (Category.LLM, "OpenAI"): ("openai", "openai.LLM", "OPENAI_API_KEY"),
    (Category.LLM, "Anthropic"): ("anthropic", "anthropic.LLM", "ANTHROPIC_API_KEY"),
    (Category.LLM, "Google"): ("google", "google.LLM", "GOOGLE_API_KEY"),
    (Category.TTS, "Cartesia"): ("cartesia", "cartesia.TTS", "CARTESIA_API_KEY"),
    (Category.TTS, "ElevenLabs"): ("elevenlabs", "elevenlabs.TTS", "ELEVEN_API_KEY"),
}


LIVEKIT_AGENT_TEMPLATE = Template("""\
\"\"\"{{ agent_name }}: {{ language }} voice agent for {{ use_case_label }}.\"\"\"
from dotenv import load_dotenv
from livekit import agents
from livekit.agents import Agent, AgentSession
from livekit.plugins import {{ plugin_modules | join(", ") }}

load_dotenv()

INSTRUCTIONS = (
    "You are a voice AI agent for {{ use_case_label }}. "
    "Communicate in {{ language }}. Keep responses to 1-2 sentences. "
    "Be natural, warm, and helpful."
)


class VoiceAgent(Agent):
    def __init__(self) -> None:
        super().__init__(instructions=INSTRUCTIONS)


async def entrypoint(ctx: agents.JobContext):
    session = AgentSession(
        stt={{ stt_ctor }}(model={{ stt_model }}, language={{ language_code }}),
        llm={{ llm_ctor }}(model={{ llm_model }}),
        tts={{ tts_ctor }}(model={{ tts_model }}),
        vad=silero.VAD.load(),
    )
    await session.start(room=ctx.room, agent=VoiceAgent())
    await ctx.connect()
    await session.generate_reply(instructions="Greet the caller and offer your help.")


if __name__ == "__main__":
    agents.cli.run_app(agents.WorkerOptions(entrypoint_fnc=entrypoint))
""")

LIVEKIT_REQUIREMENTS_TEMPLATE = Template("""\
livekit-agents>=1.0
{% for module in plugin_modules %}livekit-plugins-{{ module }}>=1.0
{% endfor %}python-dotenv>=1.0
""")

ENV_TEMPLATE = Template("""\
{% for var in env_vars %}{{ var }}=
{% endfor %}""")

README_TEMPLATE = Template("""\
# {{ agent_name }}

{{ language }} voice agent for {{ use_case_label }}, generated for {{ framework_label }}.

## Stack

| Stage | Provider | Model |
|-------|----------|-------|
| STT | {{ entry.stt }} | {{ entry.stt_model }} |
| LLM | {{ entry.llm }} | {{ entry.llm_model }} |
| TTS | {{ entry.tts }} | {{ entry.tts_model }} |

Expected: {{ entry.latency_ms }}ms latency, {{ entry.quality }}/5 quality, ${{ entry.cost_per_min }}/min.

## Run

```bash
{{ run_command }}
```
""")

NEXTJS_PACKAGE_TEMPLATE = Template("""\
{
  "name": {{ package_name }},
  "version": "0.1.0",
  "private": true,
  "scripts": {
    "dev": "next dev",
    "build": "next build",
    "start": "next start"
  },
  "dependencies": {
    "@elevenlabs/react": "^0.4.0",
    "next": "^15.0.0",
    "react": "^19.0.0",
    "react-dom": "^19.0.0"
  },
  "devDependencies": {
    "@types/react": "^19.0.0",
    "typescript": "^5.6.0"
  }
}
""")

NEXTJS_PAGE_TEMPLATE = Template("""\
"use client";

import { useConversation } from "@elevenlabs/react";
import { useCallback } from "react";

export default function Page() {
  const conversation = useConversation();

  const start = useCallback(async () => {
    await navigator.mediaDevices.getUserMedia({ audio: true });
    const res = await fetch("/api/signed-url");
    const { signedUrl } = await res.json();
    await conversation.startSession({ signedUrl });
  }, [conversation]);

  const stop = useCallback(() => conversation.endSession(), [conversation]);

  return (
    <main>
      <h1>{{ agent_name }}</h1>
      <p>{{ language }} voice agent for {{ use_case_label }}</p>
      <button onClick={start} disabled={conversation.status === "connected"}>Start</button>
      <button onClick={stop} disabled={conversation.status !== "connected"}>Stop</button>
      <p>Status: {conversation.status}</p>
    </main>
  );
}
""")

NEXTJS_ROUTE_TEMPLATE = Template("""\
import { NextResponse } from "next/server";

export async function GET() {
  const agentId = process.env.ELEVENLABS_AGENT_ID;
  const res = await fetch(
    `https://api.elevenlabs.io/v1/convai/conversation/get_signed_url?agent_id=${agentId}`,
    { headers: { "xi-api-key": process.env.ELEVENLABS_API_KEY ?? "" } },
  );
  if (!res.ok) {
    return NextResponse.json({ error: "Failed to get signed URL" }, { status: 500 });
  }
  const body = await res.json();
  return NextResponse.json({ signedUrl: body.signed_url });
}
""")

AGENT_CONFIG_TEMPLATE = Template("""\
# Voice agent configuration
# Generated {{ generated_at }}

agent:
  name: {{ agent_name }}
  version: "1.0.0"
  language: {{ language }}
  use_case: {{ use_case }}

pipeline:
  vad:
    provider: silero
    threshold: 0.5
    min_speech_duration_ms: 250

  stt:
    provider: {{ stt_provider }}
    model: {{ stt_model }}
    language: {{ language_code }}
    interim_results: true

  llm:
    provider: {{ llm_provider }}
    model: {{ llm_model }}
    temperature: 0.7
    max_tokens: 150
    system_prompt: |
      You are a voice AI agent for {{ use_case_label }}.
      Communicate in {{ language_plain }}. Keep responses to 1-2 sentences.
      Be natural, warm, and helpful.

  tts:
    provider: {{ tts_provider }}
    model: {{ tts_model }}
    stability: 0.5
    similarity_boost: 0.75

  quality_targets:
    latency_p95_ms: 250
    min_utmos: 4.0
    max_wer: 0.08
    max_cost_per_min: 0.015

monitoring:
  enabled: true
  log_level: info
  metrics_interval_s: 60
  alerts:
    latency_p95_threshold_ms: 350
    error_rate_threshold: 0.02
    quality_drop_threshold: 0.3

deployment:
  replicas: 2
  region: us-east-1
  canary:
    enabled: true
    percentage: 10
    duration_min: 30
""")


def _quoted(value: str) -> str:
    """JSON string literal, also valid as a YAML or Python string."""
    return json.dumps(value)


def _use_case_label(use_case: str) -> str:
    return use_case.replace("-", " ") if use_case else "general assistance"


def language_code(language: str) -> str:
    return LANGUAGE_CODES.get(language, language.lower()[:2])


def _livekit_plugin(category: Category, provider: str) -> tuple[str, str, str]:
    plugin = LIVEKIT_PLUGINS.get((category, provider))
    if plugin is None:
        raise ValueError(f"LiveKit template has no {category.value.upper()} plugin for {provider}")
    return plugin


def livekit_files(ctx: ScaffoldContext) -> list[ScaffoldFile]:
    entry = ctx.entry
    stt_module, stt_ctor, stt_env = _livekit_plugin(Category.STT, entry.stt)
    llm_module, llm_ctor, llm_env = _livekit_plugin(Category.LLM, entry.llm)
    tts_module, tts_ctor, tts_env = _livekit_plugin(Category.TTS, entry.tts)
    plugin_modules = sorted({stt_module, llm_module, tts_module, "silero"})
    env_vars = ["LIVEKIT_URL", "LIVEKIT_API_KEY", "LIVEKIT_API_SECRET"]
    env_vars += list(dict.fromkeys([stt_env, llm_env, tts_env]))
    use_case_label = _use_case_label(ctx.use_case)

    agent_py = LIVEKIT_AGENT_TEMPLATE.render(
        agent_name=ctx.agent_name,
        language=ctx.language,
        use_case_label=use_case_label,
        plugin_modules=plugin_modules,
        stt_ctor=stt_ctor, stt_model=_quoted(entry.stt_model),
        llm_ctor=llm_ctor, llm_model=_quoted(entry.llm_model),
        tts_ctor=tts_ctor, tts_model=_quoted(entry.tts_model),
        language_code=_quoted(language_code(ctx.language)),
    )
    readme = README_TEMPLATE.render(
        agent_name=ctx.agent_name,
        language=ctx.language,
        use_case_label=use_case_label,
        framework_label="LiveKit Agents (Python)",
        entry=entry,
        run_command="pip install -r requirements.txt && python agent.py dev",
    )
    return [
        ScaffoldFile("agent.py", agent_py),
        ScaffoldFile("requirements.txt", LIVEKIT_REQUIREMENTS_TEMPLATE.render(plugin_modules=plugin_modules)),
        ScaffoldFile(".env.example", ENV_TEMPLATE.render(env_vars=env_vars)),
        ScaffoldFile("README.md", readme),
    ]


def nextjs_files(ctx: ScaffoldContext) -> list[ScaffoldFile]:
    entry = ctx.entry
    if entry.tts != "ElevenLabs":
        raise ValueError(f"Next.js template requires ElevenLabs TTS, got {entry.tts}")
    use_case_label = _use_case_label(ctx.use_case)

    readme = README_TEMPLATE.render(
        agent_name=ctx.agent_name,
        language=ctx.language,
        use_case_label=use_case_label,
        framework_label="Next.js + ElevenLabs (TypeScript)",
        entry=entry,
        run_command="npm install && npm run dev",
    )
    page = NEXTJS_PAGE_TEMPLATE.render(
        agent_name=ctx.agent_name, language=ctx.language, use_case_label=use_case_label,
    )
    return [
        ScaffoldFile("package.json", NEXTJS_PACKAGE_TEMPLATE.render(package_name=_quoted(ctx.agent_name))),
        ScaffoldFile("app/page.tsx", page),
        ScaffoldFile("app/api/signed-url/route.ts", NEXTJS_ROUTE_TEMPLATE.render()),
        ScaffoldFile(".env.example", ENV_TEMPLATE.render(env_vars=["ELEVENLABS_API_KEY", "ELEVENLABS_AGENT_ID"])),
        ScaffoldFile("README.md", readme),
    ]


def generate_scaffold(framework: Framework, ctx: ScaffoldContext) -> list[ScaffoldFile]:
    """Starter files for a framework. Raises ValueError for stacks the template cannot wire up."""
    logger.debug(f"Rendering {framework.value} scaffold for {ctx.agent_name}")
    if framework is Framework.LIVEKIT:
        return livekit_files(ctx)
    return nextjs_files(ctx)


def render_agent_config(agent_name: str, language: str, use_case: str,
                        providers: dict, models: dict) -> str:
    """YAML pipeline config; `providers`/`models` are keyed by Category."""
    return AGENT_CONFIG_TEMPLATE.render(
        generated_at=datetime.now(timezone.utc).isoformat(),
        agent_name=_quoted(agent_name),
        language=_quoted(language),
        language_plain=language,
        language_code=_quoted(language_code(language)),
        use_case=_quoted(use_case),
        use_case_label=_use_case_label(use_case),
        stt_provider=providers[Category.STT].lower(),
        llm_provider=providers[Category.LLM].lower(),
        tts_provider=providers[Category.TTS].lower(),
        stt_model=_quoted(models[Category.STT]),
        llm_model=_quoted(models[Category.LLM]),
        tts_model=_quoted(models[Category.TTS]),
    )
