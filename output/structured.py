"""Machine-readable output and output-format dispatch."""
import json

from models import OutputFormat, QueryResult
from output.terminal import render_text


def render_json(result: QueryResult) -> str:
    return json.dumps(result.to_payload(), indent=2, ensure_ascii=False)


def render(result: QueryResult, output_format: OutputFormat | str = OutputFormat.TEXT) -> str:
    """Render a result; the payload is the same for both formats, only its rendering differs."""
    if OutputFormat(output_format) is OutputFormat.JSON:
        return render_json(result)
    return render_text(result)
