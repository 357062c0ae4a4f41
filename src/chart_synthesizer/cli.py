"""
Command line interface.

Usage:
    chart-synthesizer "bar chart of A=1, B=2, C=3 titled Totals"
    chart-synthesizer "monthly revenue as a line chart" --file sales.csv --image-out chart.png
"""

import argparse
import asyncio
import base64
import json
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.json import JSON
from rich.panel import Panel

from chart_synthesizer.core.exceptions import ChartSynthesisError
from chart_synthesizer.models.documents import ChartSynthesisResult, UploadedDocument
from chart_synthesizer.pipeline import synthesize
from chart_synthesizer.utils.logger import setup_logging

console = Console()

mimetypes.add_type("text/tab-separated-values", ".tsv")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chart-synthesizer",
        description="Generate a chart image and embeddable HTML from a natural language request",
    )
    parser.add_argument("question", help="Natural language chart request")
    parser.add_argument("--file", "-f", type=Path, help="Tabular document grounding the request")
    parser.add_argument(
        "--media-type",
        help="Media type of --file (guessed from the extension when omitted)",
    )
    parser.add_argument("--image-out", type=Path, help="Write the rendered image here")
    parser.add_argument("--html-out", type=Path, help="Write the HTML snippet here")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def load_document(path: Path, media_type: Optional[str] = None) -> UploadedDocument:
    """Read a file into an UploadedDocument, guessing its media type if needed."""
    if media_type is None:
        media_type, _ = mimetypes.guess_type(path.name)
    return UploadedDocument(
        media_type=media_type or "application/octet-stream",
        content=path.read_bytes(),
        filename=path.name,
    )


def decode_data_url(data_url: str) -> bytes:
    _, encoded = data_url.split(",", 1)
    return base64.b64decode(encoded)


def write_outputs(
    result: ChartSynthesisResult,
    image_out: Optional[Path],
    html_out: Optional[Path],
) -> None:
    if image_out is not None:
        image_out.write_bytes(decode_data_url(result.image_data_url))
        console.print(f"[green]✓[/green] Image written to {image_out}")
    if html_out is not None:
        html_out.write_text(result.embeddable_html, encoding="utf-8")
        console.print(f"[green]✓[/green] HTML snippet written to {html_out}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else "WARNING")

    try:
        document = load_document(args.file, args.media_type) if args.file else None
        with console.status("[bold green]Generating chart..."):
            result = asyncio.run(synthesize(args.question, document))
    except (ChartSynthesisError, ValueError, OSError) as e:
        console.print(
            Panel(str(e), title=f"[bold red]{type(e).__name__}", border_style="red")
        )
        return 1

    spec_json = json.dumps(result.to_dict()["chartSpec"], indent=2)
    console.print(Panel(JSON(spec_json), title="ChartSpec", border_style="blue"))
    write_outputs(result, args.image_out, args.html_out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
