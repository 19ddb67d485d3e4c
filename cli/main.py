# cli/main.py
# ============================================================
# docingest — Command Line Interface
# ============================================================
# Typer-based CLI for document ingestion: normalize an upload
# into its canonical form, forward it to the generation
# service, or check that the rendering backend is available.
#
# Usage:
#   python -m cli.main extract report.pdf
#   python -m cli.main extract scan.pdf --output scan.json
#   python -m cli.main generate notes.docx --type briefingNote
#   python -m cli.main health
#   python -m cli.main --verbose extract scan.pdf
# ============================================================

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config.settings import settings
from docingest.document.models import CanonicalDocument, ImagePages, TextContent
from docingest.errors import ExtractionError, GenerationError, RendererUnavailableError
from docingest.generation.client import GenerationClient, OutputType
from docingest.pdf.renderer import PageRenderer, bootstrap_renderer
from docingest.pipeline.ingestor import DocumentIngestor
from docingest.utils.logger import set_log_level

# ============================================================
# CLI App Setup
# ============================================================

app = typer.Typer(
    name="docingest",
    help=(
        "📄 docingest — Document Ingestion Pipeline\n\n"
        "Normalizes .txt, .md, .pdf, .docx, .xlsx and .xls uploads into text,\n"
        "or into page images when a PDF has no usable text layer."
    ),
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    if verbose:
        set_log_level("DEBUG")


# ============================================================
# Commands
# ============================================================

@app.command()
def extract(
    input_path: Path = typer.Argument(..., help="Path to the document to ingest."),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Write the transport payload (text or page images) as JSON to this file.",
    ),
    min_chars: Optional[int] = typer.Option(
        None,
        "--min-chars",
        help=f"PDF text sufficiency threshold (default: {settings.ocr_fallback_min_chars}).",
    ),
    scale: Optional[float] = typer.Option(
        None,
        "--scale",
        help=f"PDF rasterization scale (default: {settings.pdf_render_scale}).",
    ),
):
    """
    📄 Extract a document into its canonical form.

    Prints the extracted text, or a page summary when the document
    came back as page images.
    """
    if not input_path.is_file():
        console.print(f"[red]Error:[/red] Input file not found: {escape(str(input_path))}")
        raise typer.Exit(code=1)

    console.print(Panel(
        f"Input:  {escape(str(input_path))}\n"
        f"Output: {escape(str(output or 'stdout'))}",
        title="📄 docingest",
        border_style="blue",
    ))

    ingestor = DocumentIngestor(
        renderer=_try_bootstrap_renderer(),
        min_text_chars=min_chars,
        render_scale=scale,
    )
    document = _run_extraction(ingestor, input_path)

    _print_document_table(input_path, document)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            json.dumps({"documentContent": document.to_payload()}, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        console.print(f"Saved payload to [bold]{escape(str(output))}[/bold]")
        return

    match document:
        case TextContent(content=text):
            console.print("\n[bold]Extracted Text:[/bold]\n")
            console.print(text, markup=False, highlight=False)
        case ImagePages(pages=pages):
            console.print(
                f"\n[yellow]Text layer too sparse; {len(pages)} page images are ready "
                f"for OCR.[/yellow] Use --output to save them."
            )


@app.command()
def generate(
    input_path: Path = typer.Argument(..., help="Path to the document to ingest."),
    output_type: OutputType = typer.Option(
        OutputType.SUMMARY,
        "--type", "-t",
        help="Kind of prose to generate.",
    ),
    api_url: Optional[str] = typer.Option(
        None,
        "--api-url",
        help=f"Generation service base URL (default: {settings.generation_api_url}).",
    ),
):
    """
    ✍️ Ingest a document and send it to the generation service.
    """
    if not input_path.is_file():
        console.print(f"[red]Error:[/red] Input file not found: {escape(str(input_path))}")
        raise typer.Exit(code=1)

    ingestor = DocumentIngestor(renderer=_try_bootstrap_renderer())
    document = _run_extraction(ingestor, input_path)

    client = GenerationClient(base_url=api_url)
    try:
        text = client.generate(document, output_type)
    except GenerationError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(code=1)

    console.print(Panel(escape(text), title=f"✍️ {output_type.value}", border_style="green"))


@app.command()
def health():
    """
    🏥 Check that the PDF rendering backend is available.
    """
    table = Table(title="docingest Health", show_header=False)
    table.add_column("Property", style="bold")
    table.add_column("Value")

    healthy = True
    try:
        renderer = bootstrap_renderer()
        table.add_row("Renderer", f"[green]{renderer.backend_id()}[/green]")
    except RendererUnavailableError as e:
        healthy = False
        table.add_row("Renderer", "[red]unavailable[/red]")
        table.add_row("Error", f"[red]{escape(e.message)}[/red]")

    table.add_row("OCR fallback threshold", f"{settings.ocr_fallback_min_chars} chars")
    table.add_row("Render scale", f"{settings.pdf_render_scale}x")
    table.add_row("Page image format", settings.page_image_format)
    table.add_row("Generation API", escape(settings.generation_api_url))

    console.print(table)

    if not healthy:
        raise typer.Exit(code=1)


# ============================================================
# Helper Functions
# ============================================================

def _try_bootstrap_renderer() -> Optional[PageRenderer]:
    """Set up the renderer once; text-only formats still work without it."""
    try:
        return bootstrap_renderer()
    except RendererUnavailableError as e:
        console.print(f"[yellow]Warning:[/yellow] {escape(e.message)}")
        return None


def _run_extraction(ingestor: DocumentIngestor, input_path: Path) -> CanonicalDocument:
    try:
        return asyncio.run(ingestor.extract_file(input_path))
    except ExtractionError as e:
        console.print(f"[red]Error ({e.kind.value}):[/red] {escape(e.user_message)}")
        raise typer.Exit(code=1)


def _print_document_table(input_path: Path, document: CanonicalDocument) -> None:
    """Print a summary table for an extracted document."""
    table = Table(title="Extraction Summary")
    table.add_column("File")
    table.add_column("Result", justify="center")
    table.add_column("Size", justify="right")

    match document:
        case TextContent():
            table.add_row(escape(input_path.name), "[green]text[/green]", f"{document.char_count} chars")
        case ImagePages(pages=pages):
            total_kb = sum(len(p.data) for p in pages) / 1024
            table.add_row(
                escape(input_path.name),
                "[cyan]page images[/cyan]",
                f"{len(pages)} pages ({total_kb:.0f} KB)",
            )

    console.print(table)


# ============================================================
# Entry Point
# ============================================================

if __name__ == "__main__":
    app()
