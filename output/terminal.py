"""Terminal output using Rich library."""
import io

from rich.console import Console
from rich.table import Table
from rich.text import Text

from display_names import format_cost
from models import QueryResult


def _console() -> Console:
    return Console(record=True, width=200, file=io.StringIO(), emoji=False, highlight=False)


def _stage(row: dict, category: str) -> str:
    return f"{row[category]} {row[category + '_model']}"


def _label(row: dict) -> str:
    return " → ".join(_stage(row, c) for c in ("stt", "llm", "tts"))


def _providers(row: dict) -> str:
    return f"{row['stt']} + {row['llm']} + {row['tts']}"


def _stack_table(extra_first: str, extra_last: str | None = None) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column(extra_first, style="dim", width=4)
    table.add_column("STT", no_wrap=True)
    table.add_column("LLM", no_wrap=True)
    table.add_column("TTS", no_wrap=True)
    table.add_column("Latency", justify="right", no_wrap=True)
    table.add_column("Quality", justify="right", no_wrap=True)
    table.add_column("Cost/min", justify="right", no_wrap=True)
    if extra_last:
        table.add_column(extra_last, no_wrap=True)
    return table


def _stack_cells(row: dict) -> list[str]:
    return [
        _stage(row, "stt"),
        _stage(row, "llm"),
        _stage(row, "tts"),
        f"{row['latency_ms']}ms",
        f"{row['quality']}/5",
        f"${row['cost_per_min']:g}",
    ]


def _print_problem(console: Console, result: QueryResult):
    style = "bold yellow" if result.status in ("warning", "fallback") else "bold red"
    console.print(Text(f"{result.status.upper()} ({result.reason})", style=style))
    if result.message:
        console.print(Text(result.message))
    data = result.data
    if data.get("suggestions"):
        console.print(Text(f"Suggestions: {', '.join(data['suggestions'])}"))
    if data.get("supported_providers"):
        console.print(Text(f"Supported providers: {', '.join(data['supported_providers'])}"))
    if data.get("examples"):
        console.print(Text("Examples:"))
        for example in data["examples"]:
            console.print(Text(f'- "{example}"'))
    if data.get("matches_found"):
        found = data["matches_found"]
        console.print(Text(f"Matches found: A={found['a']}, B={found['b']}"))
    if data.get("expected_providers"):
        for category, names in data["expected_providers"].items():
            console.print(Text(f"- {category.upper()}: {', '.join(names)}"))
    if data.get("supported_frameworks"):
        for framework, policy in data["supported_frameworks"].items():
            allowed = "; ".join(
                f"{category.upper()}={', '.join(names) or 'any'}" for category, names in policy.items()
            )
            console.print(Text(f"- {framework}: {allowed}"))
    if data.get("error"):
        console.print(Text(f"Error: {data['error']}"))


def render_recommendation(result: QueryResult) -> str:
    console = _console()
    if not result.ok:
        _print_problem(console, result)
        return console.export_text()

    data = result.data
    console.print("[bold]Voice Stack Recommendation[/bold]")
    console.print(Text(
        f"Language: {data['language']} | Use case: {data['use_case'] or 'general'} | "
        f"Optimizing for: {data['optimize_for']}"
    ))
    table = _stack_table("Rank", "Score")
    for i, row in enumerate(data["top"], 1):
        table.add_row(str(i), *_stack_cells(row), str(row["score"]))
    console.print(table)

    best = data["top_pick"]
    mos = f" (MOS: {best['mos']})" if best.get("mos") else ""
    console.print("\n[bold]Top Pick Details[/bold]")
    console.print(Text(_label(best)))
    console.print(Text(f"- Latency: {best['latency_ms']}ms end-to-end"))
    console.print(Text(f"- Quality: {best['quality']}/5.0 UTMOS{mos}"))
    console.print(Text(f"- Cost: {format_cost(best['cost_per_min'])}"))
    if best.get("notes"):
        console.print(Text(f"- Notes: {best['notes']}"))
    console.print(Text("\nUse `scaffold` to generate a starter project with this stack."))
    return console.export_text()


def render_benchmarks(result: QueryResult) -> str:
    console = _console()
    if not result.ok:
        _print_problem(console, result)
        return console.export_text()

    data = result.data
    if not data["rows"]:
        console.print("[bold red]No benchmark rows match the selected filters.[/bold red]")
        return console.export_text()

    scope = ""
    if data["language"]:
        scope += f" for {data['language']}"
    if data["provider"]:
        scope += f" with {data['provider']}"
    console.print("[bold]Voice Stack Benchmarks[/bold]")
    console.print(Text(f"{data['count']} combinations{scope} (sorted by {data['sort_by']})"))

    table = _stack_table("#", "Languages")
    for i, row in enumerate(data["rows"], 1):
        table.add_row(str(i), *_stack_cells(row), ", ".join(row["languages"][:3]))
    console.print(table)

    summary = data["summary"]
    console.print("\n[bold]Key Insights[/bold]")
    console.print(Text(f"- Fastest: {_providers(summary['fastest'])} ({summary['fastest']['latency_ms']}ms)"))
    console.print(Text(
        f"- Best quality: {_providers(summary['best_quality'])} ({summary['best_quality']['quality']}/5)"
    ))
    console.print(Text(
        f"- Cheapest: {_providers(summary['cheapest'])} ({format_cost(summary['cheapest']['cost_per_min'])})"
    ))
    return console.export_text()


def _print_stack(console: Console, row: dict, title: str):
    mos = f" (MOS: {row['mos']})" if row.get("mos") else ""
    console.print(Text(f"{title}: {_label(row)}", style="bold"))
    console.print(Text(f"- Latency: {row['latency_ms']}ms"))
    console.print(Text(f"- Quality: {row['quality']}/5.0{mos}"))
    console.print(Text(f"- Cost: {format_cost(row['cost_per_min'])}"))
    console.print(Text(f"- Languages: {', '.join(row['languages'])}"))
    if row.get("notes"):
        console.print(Text(f"- Notes: {row['notes']}"))


def render_comparison(result: QueryResult) -> str:
    console = _console()
    if not result.ok:
        _print_problem(console, result)
        return console.export_text()

    data = result.data
    a, b = data["stack_a"], data["stack_b"]
    winners, deltas = data["winners"], data["deltas"]
    console.print("[bold]Voice Stack Comparison[/bold]\n")
    _print_stack(console, a, "Stack A")
    console.print()
    _print_stack(console, b, "Stack B")

    table = Table(title="Head-to-Head", show_header=True, header_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Stack A", justify="right")
    table.add_column("Stack B", justify="right")
    table.add_column("Winner")
    table.add_row(
        "Latency", f"{a['latency_ms']}ms", f"{b['latency_ms']}ms",
        f"Stack {winners['latency']} ({deltas['latency_ms']}ms faster)",
    )
    table.add_row("Quality", f"{a['quality']}/5", f"{b['quality']}/5", f"Stack {winners['quality']}")
    table.add_row(
        "Cost", format_cost(a["cost_per_min"]), format_cost(b["cost_per_min"]),
        f"Stack {winners['cost']} (${deltas['cost_per_min']:.3f} cheaper)",
    )
    console.print()
    console.print(table)

    overlap = data["overlap_languages"]
    console.print("\n[bold]Language Coverage[/bold]")
    console.print(Text(f"- Both support: {', '.join(overlap['both']) or 'none'}"))
    if overlap["only_a"]:
        console.print(Text(f"- Only Stack A: {', '.join(overlap['only_a'])}"))
    if overlap["only_b"]:
        console.print(Text(f"- Only Stack B: {', '.join(overlap['only_b'])}"))

    ambiguous = [f"Stack {side.upper()}" for side, flag in data["ambiguity"].items() if flag]
    if ambiguous:
        console.print(Text(
            f"\nMultiple benchmark matches were found for {' and '.join(ambiguous)}; "
            f"selected best-scoring rows automatically.",
            style="yellow",
        ))
    return console.export_text()


def render_validation(result: QueryResult) -> str:
    console = _console()
    data = result.data
    if result.status != "ok":
        _print_problem(console, result)
        if "supported_models" not in data:
            return console.export_text()
        requested = data["requested_stack"]
        for category, models in data["supported_models"].items():
            known = ", ".join(models) or "unknown"
            console.print(Text(f"- {category.upper()} ({requested[category + '_provider']}): {known}"))
        if data["provider_combos"]:
            combos = data["provider_combos"]
            console.print(Text(
                f"Providers with benchmark rows: STT={', '.join(combos['stt'])}, "
                f"LLM={', '.join(combos['llm'])}, TTS={', '.join(combos['tts'])}."
            ))
        if not data["matched_benchmark"]:
            return console.export_text()
        console.print()

    top = data["matched_benchmark"]
    support = data["framework_support"]
    console.print("[bold]Voice Stack Validation[/bold]")
    console.print(Text(f"Matched benchmark: {_label(top)}"))
    console.print(Text(f"Latency: {top['latency_ms']}ms"))
    console.print(Text(f"Quality: {top['quality']}/5"))
    console.print(Text(f"Cost: {format_cost(top['cost_per_min'])}"))
    console.print(Text(f"\nBenchmark matches: {data['benchmark_matches']}"))
    console.print(Text(f"- LiveKit scaffold: {'supported' if support['livekit'] else 'not supported'}"))
    console.print(Text(f"- Next.js/ElevenLabs scaffold: {'supported' if support['nextjs'] else 'not supported'}"))
    if data["framework_warning"]:
        console.print(Text(f"\n{data['framework_warning']}", style="yellow"))
    return console.export_text()


def _fence_language(path: str) -> str:
    for suffix, lang in ((".py", "python"), (".tsx", "tsx"), (".ts", "ts"), (".json", "json"),
                         (".yaml", "yaml"), (".md", "markdown")):
        if path.endswith(suffix):
            return lang
    return ""


def render_scaffold(result: QueryResult) -> str:
    console = _console()
    data = result.data
    if not result.ok:
        _print_problem(console, result)
        if result.status == "fallback":
            stack = data["stack"]
            console.print(Text(
                f"Default stack: {stack['stt']} {stack['stt_model']} + {stack['llm']} {stack['llm_model']} + "
                f"{stack['tts']} {stack['tts_model']}"
            ))
        return console.export_text()

    stack = data["stack"]
    expected = data["expected"]
    console.print(Text(f"Voice Agent Scaffold: {data['agent_name']}", style="bold"))
    console.print(Text(f"Stack: {_label(stack)}"))
    console.print(Text(f"Framework: {data['framework_label']}"))
    if data["fallback_notice"]:
        console.print(Text(data["fallback_notice"], style="yellow"))
    console.print(Text(
        f"Expected: {expected['latency_ms']}ms latency, {expected['quality']}/5 quality, "
        f"{format_cost(expected['cost_per_min'])}"
    ))
    console.print(Text(f"\nFiles to create in {data['output_dir']}/\n", style="bold"))

    for f in data["files"]:
        # README bodies contain ``` themselves
        fence = "````" if "```" in f["content"] else "```"
        console.print(Text(f"--- {f['path']}"))
        console.print(fence + _fence_language(f["path"]), markup=False, soft_wrap=True)
        console.print(f["content"], markup=False, soft_wrap=True)
        console.print(fence, markup=False)
        console.print()

    run = (
        "pip install -r requirements.txt && python agent.py dev"
        if data["framework"] == "livekit" else "npm install && npm run dev"
    )
    console.print("[bold]Next Steps[/bold]")
    console.print(Text("1. Create the directory and files above"))
    console.print(Text("2. Fill in your API keys in .env"))
    console.print(Text(f"3. Run: {run}"))
    console.print(Text("4. Test with a real conversation"))
    return console.export_text()


def render_providers(result: QueryResult) -> str:
    console = _console()
    console.print("[bold]Provider Directory[/bold]")
    for category, infos in result.data["providers"].items():
        table = Table(title=f"{category.upper()} Providers", show_header=True, header_style="bold cyan")
        table.add_column("Provider", no_wrap=True)
        table.add_column("Models")
        table.add_column("Strengths")
        table.add_column("URL", no_wrap=True)
        for info in infos:
            table.add_row(info["provider"], ", ".join(info["models"]), info["strengths"], info["url"])
        console.print(table)
    return console.export_text()


def render_health(result: QueryResult) -> str:
    console = _console()
    data = result.data
    console.print("[bold]Voice Stack Advisor Health[/bold]")
    lines = [
        f"- Total benchmark rows: {data['total_benchmarks']}",
        f"- Supported use case profiles: {data['supported_use_cases']}",
        f"- Supported languages: {data['supported_languages']}",
        f"- LiveKit scaffoldable rows: {data['livekit_scaffoldable_rows']}",
        f"- Next.js scaffoldable rows: {data['nextjs_scaffoldable_rows']}",
    ]
    if data["fastest"]:
        lines += [
            f"- Fastest observed: {_providers(data['fastest'])} ({data['fastest']['latency_ms']}ms)",
            f"- Highest quality: {_providers(data['highest_quality'])} ({data['highest_quality']['quality']}/5)",
            f"- Cheapest: {_providers(data['cheapest'])} ({format_cost(data['cheapest']['cost_per_min'])})",
        ]
    for line in lines:
        console.print(Text(line))
    if data["verbose"]:
        console.print("\n[bold]Coverage[/bold]")
        for item in data["coverage_by_language"]:
            console.print(Text(f"- {item['language']}: {item['count']}"))
    console.print(Text(f"\nChecked at: {data['timestamp']}"))
    console.print(Text(f"Data snapshot: {data['data_snapshot']}"))
    return console.export_text()


def render_config(result: QueryResult) -> str:
    console = _console()
    data = result.data
    if result.status == "error":
        _print_problem(console, result)
        return console.export_text()

    console.print(Text(f"Agent Config: {data['config']['agent_name']}", style="bold"))
    console.print("```yaml", markup=False)
    console.print(data["yaml"], markup=False, soft_wrap=True)
    console.print("```", markup=False)
    console.print(Text("\nSave this as voice-agent.yaml in your project root."))
    if result.status == "warning":
        console.print(Text("\nModel warnings:", style="yellow"))
        for category, unknown in data["unknown_models"].items():
            if unknown:
                known = ", ".join(data["supported_models"][category])
                model = data["config"][f"{category}_model"]
                provider = data["config"][f"{category}_provider"]
                console.print(Text(f'- {category.upper()} model "{model}" is not in known {provider} catalog: {known}'))
    return console.export_text()


RENDERERS = {
    "recommend": render_recommendation,
    "benchmark": render_benchmarks,
    "compare": render_comparison,
    "validate": render_validation,
    "scaffold": render_scaffold,
    "providers": render_providers,
    "health": render_health,
    "config": render_config,
}


def render_text(result: QueryResult) -> str:
    return RENDERERS[result.kind](result)
