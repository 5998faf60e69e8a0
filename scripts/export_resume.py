#!/usr/bin/env python3
"""
Resume and Cover Letter Export CLI

Renders resume and cover-letter YAML/JSON files with a registered template.

Commands:
    export  - Export a resume to pdf, docx, latex or html
    cover   - Export a cover letter
    list    - List registered templates
    preview - Render a template's sample-data preview to HTML
    presets - List customization presets

Examples:\n

    export_resume.py export data/jane_doe.yaml                           # PDF, default template

    export_resume.py export data/jane_doe.yaml -t modern-sidebar -f docx

    export_resume.py export data/jane_doe.yaml -f pdf --engine latex     # Compile with LaTeX

    export_resume.py export data/jane_doe.yaml -p colors_navy -p spacing_compact

    export_resume.py cover data/letter.yaml -t modern -f pdf

    export_resume.py list --kind cover_letter
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.rendering.exceptions import ExportError
from folio.contexts.rendering.export_service import (
    EXPORT_EXTENSIONS,
    RESULTS_PATH,
    ExportService,
)
from folio.contexts.rendering.logger import setup_rendering_logger
from folio.contexts.rendering.validator import check_pdf_parseability
from folio.contexts.templating.config_resolver import apply_presets, load_customization_presets
from folio.contexts.templating.exceptions import (
    InvalidResumeDataError,
    TemplateNotRegisteredError,
    TemplateRenderError,
    UnsupportedExportFormatError,
)
from folio.contexts.templating.logger import setup_templating_logger
from folio.contexts.templating.resume_data_structure import CoverLetterData, ResumeData
from folio.contexts.templating.template_factory import (
    DOCUMENT_KINDS,
    TemplateFactory,
    register_cover_letter_templates,
    register_templates,
    resolve_template,
)
from folio.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outputs/logs"))

EXPORT_ERRORS = (
    ExportError,
    InvalidResumeDataError,
    TemplateNotRegisteredError,
    TemplateRenderError,
    UnsupportedExportFormatError,
    ValueError,
)

app = typer.Typer(
    help="Export resumes and cover letters with FOLIO templates",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _export_document(
    kind: str,
    data,
    template_id: str,
    fmt: str,
    output_dir: Path,
    presets: List[str],
    engine: Optional[str],
    check: bool,
) -> None:
    typer.secho(f"\nExporting with '{template_id}' as {fmt}", fg=typer.colors.BLUE, bold=True)

    log_file = setup_rendering_logger(LOGS_PATH / f"export_{now()}")

    try:
        template = resolve_template(template_id, kind=kind)
        if presets:
            customization = apply_presets(template.customization, presets)
            template.update_customization(customization.to_dict())
        result = ExportService(pdf_engine=engine).export_to_file(
            template, data, fmt, output_dir=output_dir, kind=kind
        )
    except EXPORT_ERRORS as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  File: {result.path} ({result.size} bytes)")
    if result.page_count is not None:
        typer.echo(f"  Pages: {result.page_count}")

    exit_code = 0
    if check and result.format == "pdf":
        parse_result = check_pdf_parseability(result.path, data, template=template)
        if parse_result.is_parseable:
            typer.secho("  ✓ Text layer contains name, email and headings", fg=typer.colors.GREEN)
        else:
            typer.secho(
                f"  ✗ Missing from text layer: {', '.join(parse_result.missing_fields)}",
                fg=typer.colors.RED,
            )
            exit_code = 1

    typer.echo(f"  Log: {log_file}")
    typer.echo("")
    raise typer.Exit(code=exit_code)


def _load(loader, path: Path):
    try:
        return loader(path)
    except (InvalidResumeDataError, OSError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


TemplateOption = Annotated[
    Optional[str],
    typer.Option(
        "--template", "-t", help="Template id (default: the data's template, then default)"
    ),
]
FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help=f"Export format: {', '.join(EXPORT_EXTENSIONS)}"),
]
OutputOption = Annotated[
    Optional[Path],
    typer.Option("--output-dir", "-o", help="Output directory (default: RESULTS_PATH)"),
]
PresetOption = Annotated[
    Optional[List[str]],
    typer.Option("--preset", "-p", help="Customization preset, repeatable (e.g., colors_navy)"),
]
EngineOption = Annotated[
    Optional[str],
    typer.Option("--engine", "-e", help="PDF engine: reportlab or latex (default: PDF_ENGINE)"),
]
CheckOption = Annotated[
    bool,
    typer.Option("--check/--no-check", help="Check the PDF text layer after export"),
]


def _factory(kind: str) -> TemplateFactory:
    """Factory for a document kind with the built-in templates registered."""
    if kind not in DOCUMENT_KINDS:
        typer.secho(
            f"Error: Unknown document kind '{kind}'. Use one of: {DOCUMENT_KINDS}\n",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
    return register_templates() if kind == "resume" else register_cover_letter_templates()


def _template_id(kind: str, requested: Optional[str], data) -> str:
    if requested:
        return requested
    if data.template:
        return data.template
    return _factory(kind).get_default_template().id


@app.command("export")
def export_command(
    resume_file: Annotated[Path, typer.Argument(help="Resume YAML or JSON file", exists=True)],
    template: TemplateOption = None,
    fmt: FormatOption = "pdf",
    output_dir: OutputOption = None,
    presets: PresetOption = None,
    engine: EngineOption = None,
    check: CheckOption = True,
):
    """
    Export a resume.

    Examples:\n

        $ export_resume.py export data/jane_doe.yaml

        $ export_resume.py export data/jane_doe.yaml -t minimalist-ats -f html
    """
    resume = _load(ResumeData.from_file, resume_file)
    template_id = _template_id("resume", template, resume)
    _export_document(
        "resume", resume, template_id, fmt, output_dir or RESULTS_PATH, presets or [], engine, check
    )


@app.command("cover")
def cover_command(
    letter_file: Annotated[
        Path, typer.Argument(help="Cover letter YAML or JSON file", exists=True)
    ],
    template: TemplateOption = None,
    fmt: FormatOption = "pdf",
    output_dir: OutputOption = None,
    presets: PresetOption = None,
    engine: EngineOption = None,
    check: CheckOption = True,
):
    """
    Export a cover letter.

    Examples:\n

        $ export_resume.py cover data/letter.yaml -t professional -f docx
    """
    letter = _load(CoverLetterData.from_file, letter_file)
    template_id = _template_id("cover_letter", template, letter)
    _export_document(
        "cover_letter",
        letter,
        template_id,
        fmt,
        output_dir or RESULTS_PATH,
        presets or [],
        engine,
        check,
    )


@app.command("list")
def list_command(
    kind: Annotated[
        str, typer.Option("--kind", "-k", help=f"Document kind: {', '.join(DOCUMENT_KINDS)}")
    ] = "resume",
    ats_only: Annotated[
        bool, typer.Option("--ats-only", help="Only templates optimized for ATS parsing")
    ] = False,
):
    """List registered templates for a document kind."""
    factory = _factory(kind)
    default_id = factory.get_default_template().id
    templates = (
        factory.get_ats_optimized_templates()
        if ats_only
        else [factory.get_template(t) for t in factory.get_registered_types()]
    )

    typer.secho(f"\n{kind} templates:", fg=typer.colors.BLUE, bold=True)
    for t in templates:
        markers = []
        if t.id == default_id:
            markers.append("default")
        if t.metadata.is_ats_optimized:
            markers.append("ATS")
        suffix = f" [{', '.join(markers)}]" if markers else ""
        typer.echo(f"  {t.id:<18} {t.name}{suffix}")
        typer.echo(f"  {'':<18} {t.description}")
    typer.echo("")


@app.command("preview")
def preview_command(
    template: Annotated[str, typer.Argument(help="Template id")],
    kind: Annotated[
        str, typer.Option("--kind", "-k", help=f"Document kind: {', '.join(DOCUMENT_KINDS)}")
    ] = "resume",
    output_dir: OutputOption = None,
):
    """
    Render a template with its built-in sample data to an HTML file.

    Examples:\n

        $ export_resume.py preview elegant-divider

        $ export_resume.py preview modern --kind cover_letter
    """
    log_file = setup_templating_logger(LOGS_PATH / f"preview_{now()}", phase="preview")

    try:
        instance = resolve_template(template, kind=kind)
        html = instance.get_preview()
    except EXPORT_ERRORS as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output_dir = output_dir or RESULTS_PATH
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"preview_{kind}_{instance.id}.html"
    path.write_text(html, encoding="utf-8")
    typer.secho(f"\n✓ Preview written to {path}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Log: {log_file}\n")


@app.command("presets")
def presets_command(
    category: Annotated[
        Optional[str],
        typer.Argument(help="Customization group to filter (e.g., 'colors', 'spacing')"),
    ] = None,
):
    """List customization presets usable with --preset."""
    presets = load_customization_presets()
    names = [name for name in presets if category is None or name.startswith(f"{category}_")]
    if not names:
        typer.secho(f"No presets in category '{category}'\n", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    typer.secho("\nPresets:", fg=typer.colors.BLUE, bold=True)
    for name in names:
        values = next(iter(presets[name].values()))
        settings = ", ".join(f"{k}={v}" for k, v in values.items())
        typer.echo(f"  {name:<22} {settings}")
    typer.echo("")


if __name__ == "__main__":
    app()
