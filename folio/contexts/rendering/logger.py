"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session

    Returns:
        Path to log file

    Example:
        from folio.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir)
        _log_info("Starting export...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "PDF engine": os.getenv("PDF_ENGINE", "reportlab"),
            "LaTeX compiler": os.getenv("LATEX_COMPILER", "xelatex"),
        },
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(template_id: str, fmt: str, document_name: str) -> None:
    """Log start of an export."""
    _log_info(f"Exporting {document_name or 'document'} with '{template_id}' as {fmt}")


def log_export_result(template_id: str, fmt: str, size: int, elapsed_time: float) -> None:
    """Log a successful export."""
    _log_success(f"{template_id}: {fmt} export succeeded ({size} bytes, {elapsed_time:.2f}s)")


def log_compilation_start(tex_file: Path, num_passes: int, working_dir: Path) -> None:
    """Log start of LaTeX compilation."""
    _log_info(f"Compiling {tex_file.name} ({num_passes} passes)")
    _log_debug(f"Working directory: {working_dir}")


def log_compilation_result(result, elapsed_time: float, verbose: bool = False) -> None:
    """
    Log LaTeX compilation result.

    Args:
        result: CompilationResult from compile_latex()
        elapsed_time: Time taken
        verbose: Log every warning instead of a count
    """
    if result.success:
        _log_success(f"Compilation succeeded ({elapsed_time:.2f}s, {result.page_count} pages)")
    else:
        _log_error(f"Compilation failed with {len(result.errors)} errors ({elapsed_time:.2f}s)")
        for error in result.errors[:10]:
            _log_error(f"  {error}")

    if verbose:
        for warning in result.warnings:
            _log_debug(f"  Warning: {warning}")
    elif result.warnings:
        _log_debug(f"{len(result.warnings)} LaTeX warnings")
