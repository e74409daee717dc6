#!/usr/bin/env python3
"""
Run text through a search engine analyzer from the command line.

Usage:
  esclient-analyze "quick brown fox" --index docs --analyzer standard
  esclient-analyze "quick brown fox" --json
"""

from __future__ import annotations

import json
from typing import Optional

import click

from esclient.adapters.search_client import SearchClient
from esclient.core.errors import EsError, TransportError
from esclient.core.otel import init_tracer
from esclient.schemas.analyze import AnalyzeResult


def format_tokens(result: AnalyzeResult) -> list[str]:
    lines = []
    for t in result:
        lines.append(f"{t.position:>4}  {t.start_offset}-{t.end_offset:<6} {t.token_type:<12} {t.token}")
    return lines


@click.command()
@click.argument("text")
@click.option("--index", default=None, help="Index whose analyzer configuration to use")
@click.option("--analyzer", default=None, help="Analyzer name, e.g. standard")
@click.option("--url", default=None, help="Search engine URL (default: ES_URL or http://localhost:9200)")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw tokens as JSON")
@click.option("--trace", is_flag=True, default=False, help="Export an OpenTelemetry span for the call")
def main(text: str, index: Optional[str], analyzer: Optional[str], url: Optional[str], as_json: bool, trace: bool) -> None:
    try:
        if trace:
            init_tracer()
        with SearchClient(base_url=url) as client:
            result = client.analyze(text, index=index, analyzer=analyzer)
    except TransportError as e:
        msg = str(e)
        if isinstance(e.details, str):
            msg += f"\n{e.details}"
        elif e.details:
            msg += f"\n{json.dumps(e.details, ensure_ascii=False)}"
        raise click.ClickException(msg) from e
    except EsError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(result.to_json(), ensure_ascii=False, indent=2))
        return
    if not len(result):
        click.echo("No tokens")
        return
    for line in format_tokens(result):
        click.echo(line)


if __name__ == "__main__":
    main()
