#!/usr/bin/env python3
"""Voice Stack Advisor — command line entry point."""
import argparse
import logging
import os
import sys

from config import Config
from models import QueryOptions
from output.structured import render
from queries import OPERATIONS, StackAdvisor

logger = logging.getLogger(__name__)


def _load_env(path: str = ".env"):
    """Load key=value pairs from .env file into os.environ."""
    if not os.path.exists(path):
        return
    with open(path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, _, value = line.partition("=")
                os.environ.setdefault(key.strip(), value.strip())


def _setup_logging(debug: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voice-stack-advisor",
        description="Rank, compare, validate and scaffold STT+LLM+TTS voice stacks.",
    )
    parser.add_argument("operation", choices=OPERATIONS)
    parser.add_argument("--language")
    parser.add_argument("--use-case", default="")
    parser.add_argument("--optimize-for", default="balanced", choices=["balanced", "latency", "quality", "cost"])
    parser.add_argument("--max-results", type=int, default=Config.default_max_results)
    parser.add_argument("--provider")
    for stage in ("stt", "llm", "tts"):
        parser.add_argument(f"--{stage}-provider", default="")
        parser.add_argument(f"--{stage}-model", default="")
    parser.add_argument("--combo-a", default="")
    parser.add_argument("--combo-b", default="")
    parser.add_argument("--sort-by", default="quality", choices=["latency", "quality", "cost"])
    parser.add_argument("--framework", choices=["livekit", "nextjs", "all"])
    parser.add_argument("--agent-name")
    parser.add_argument("--output-dir")
    parser.add_argument("--category", default="all", choices=["all", "stt", "llm", "tts"])
    parser.add_argument("--verbose", action="store_true", help="Per-language coverage in health output")
    parser.add_argument("--json", action="store_true", help="Machine-readable output")
    parser.add_argument("--fallback-threshold", type=float,
                        help="Score gap (points) before a scaffold fallback notice is shown")
    parser.add_argument("--debug", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    _load_env()
    args = build_parser().parse_args(argv)
    _setup_logging(args.debug)

    config = Config()
    if args.fallback_threshold is not None:
        config.fallback_notice_threshold = args.fallback_threshold

    options = QueryOptions(
        language=args.language,
        use_case=args.use_case,
        optimize_for=args.optimize_for,
        max_results=args.max_results,
        provider=args.provider,
        stt_provider=args.stt_provider,
        stt_model=args.stt_model,
        llm_provider=args.llm_provider,
        llm_model=args.llm_model,
        tts_provider=args.tts_provider,
        tts_model=args.tts_model,
        combo_a=args.combo_a,
        combo_b=args.combo_b,
        sort_by=args.sort_by,
        framework=args.framework,
        agent_name=args.agent_name,
        output_dir=args.output_dir,
        category=args.category,
        verbose=args.verbose,
        output_format="json" if args.json else "text",
    )

    advisor = StackAdvisor(config=config)
    result = advisor.run(args.operation, options)
    logger.debug(f"{args.operation}: status={result.status} reason={result.reason}")
    print(render(result, options.output_format))
    return 1 if result.status == "error" else 0


if __name__ == "__main__":
    sys.exit(main())
