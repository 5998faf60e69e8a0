#!/usr/bin/env python3
"""
ATS Scoring CLI

Scores a resume against a target job and shows where it falls short.

Commands:
    score    - Score a resume (job description from the resume or a file)
    keywords - Show the keywords extracted from a job description

Examples:\n

    score_resume.py score data/jane_doe.yaml

    score_resume.py score data/jane_doe.yaml --job jobs/acme.txt --title "Data Engineer"

    score_resume.py score data/jane_doe.yaml --extraction llm --json

    score_resume.py keywords jobs/acme.txt
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.scoring.ats_scorer import calculate_ats_score
from folio.contexts.scoring.keyword_extractor import EXTRACTION_MODES, KeywordExtractor
from folio.contexts.scoring.logger import setup_scoring_logger
from folio.contexts.templating.exceptions import InvalidResumeDataError
from folio.contexts.templating.resume_data_structure import ResumeData
from folio.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outputs/logs"))

PRIORITY_COLORS = {
    "high": typer.colors.RED,
    "medium": typer.colors.YELLOW,
    "low": typer.colors.GREEN,
}

app = typer.Typer(
    help="Score resumes for ATS compatibility against a job description",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


ExtractionOption = Annotated[
    Optional[str],
    typer.Option(
        "--extraction",
        "-x",
        help=f"Keyword extraction: {', '.join(EXTRACTION_MODES)} (default: KEYWORD_EXTRACTION)",
    ),
]


def _extractor(mode: Optional[str]) -> KeywordExtractor:
    try:
        return KeywordExtractor(mode=mode)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _score_color(score: int) -> str:
    if score >= 80:
        return typer.colors.GREEN
    if score >= 60:
        return typer.colors.YELLOW
    return typer.colors.RED


@app.command("score")
def score_command(
    resume_file: Annotated[Path, typer.Argument(help="Resume YAML or JSON file", exists=True)],
    job_file: Annotated[
        Optional[Path],
        typer.Option("--job", "-j", help="Job description text file (overrides the resume's)"),
    ] = None,
    title: Annotated[
        Optional[str],
        typer.Option("--title", help="Target job title (overrides the resume's)"),
    ] = None,
    extraction: ExtractionOption = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the full result as JSON")
    ] = False,
):
    """
    Score a resume for ATS compatibility.

    Examples:\n

        $ score_resume.py score data/jane_doe.yaml

        $ score_resume.py score data/jane_doe.yaml -j jobs/acme.txt --title "Data Engineer"
    """
    try:
        resume = ResumeData.from_file(resume_file)
        if job_file is not None:
            resume.job_description = job_file.read_text(encoding="utf-8")
    except (InvalidResumeDataError, OSError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    if title:
        resume.target_job_title = title

    extractor = _extractor(extraction)
    log_file = setup_scoring_logger(LOGS_PATH / f"score_{now()}")

    result = calculate_ats_score(resume, extractor=extractor)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        raise typer.Exit()

    typer.secho(
        f"\nATS score: {result.general_score}/100",
        fg=_score_color(result.general_score),
        bold=True,
    )
    if result.job_specific_score is not None:
        typer.echo(f"Keyword match: {result.job_specific_score}/100")

    if result.feedback.general_feedback:
        typer.echo("\nBreakdown:")
        for item in result.feedback.general_feedback:
            typer.secho(
                f"  {item.category:<22} {item.score:>3}  {item.feedback}",
                fg=PRIORITY_COLORS.get(item.priority),
            )

    keywords = result.feedback.keywords_feedback
    if keywords.all:
        typer.echo(f"\nKeywords found ({len(keywords.found)}): {', '.join(keywords.found)}")
        typer.echo(f"Keywords missing ({len(keywords.missing)}): {', '.join(keywords.missing)}")

    if result.feedback.overall_suggestions:
        typer.echo("\nSuggestions:")
        for suggestion in result.feedback.overall_suggestions:
            typer.echo(f"  - {suggestion}")

    typer.echo(f"\nLog: {log_file}\n")


@app.command("keywords")
def keywords_command(
    job_file: Annotated[Path, typer.Argument(help="Job description text file", exists=True)],
    extraction: ExtractionOption = None,
):
    """
    Show the keywords extracted from a job description, by category.

    Examples:\n

        $ score_resume.py keywords jobs/acme.txt --extraction llm
    """
    extractor = _extractor(extraction)
    data = extractor.extract(job_file.read_text(encoding="utf-8"))

    if not data.keywords:
        typer.secho("\nNo keywords found\n", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    typer.secho(
        f"\n{len(data.keywords)} keywords ({data.source} extraction)",
        fg=typer.colors.BLUE,
        bold=True,
    )
    for category, terms in data.categories.items():
        if terms:
            typer.echo(f"  {category}: {', '.join(terms)}")
    typer.echo("")


if __name__ == "__main__":
    app()
