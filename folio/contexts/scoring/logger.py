"""
Scoring context logger.

Provides logging interface for scoring context with automatic [score] prefix.
All scoring modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[score]"


def setup_scoring_logger(log_dir: Path) -> Path:
    """
    Setup logger for scoring context.

    Args:
        log_dir: Directory for this scoring session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="score",
        log_dir=log_dir,
        extra_provenance={
            "Keyword extraction": os.getenv("KEYWORD_EXTRACTION", "basic"),
            "LLM provider": os.getenv("LLM_PROVIDER", "openai"),
        },
    )


# Wrapper functions with automatic [score] prefix


def _log_info(message: str) -> None:
    """Log info message with [score] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [score] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [score] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [score] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [score] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level scoring-specific logging helpers


def log_sub_scores(scores: dict, weights: dict) -> None:
    """Log each sub-score with the weight applied to it."""
    for name, score in scores.items():
        _log_debug(f"  {name}: {score} (weight {weights[name]:.2f})")


def log_score_result(result) -> None:
    """
    Log the outcome of an ATS scoring run.

    Args:
        result: ATSScoreResult from calculate_ats_score()
    """
    keywords = result.feedback.keywords_feedback
    _log_success(
        f"ATS score {result.general_score} "
        f"(keywords {len(keywords.found)}/{len(keywords.all)}, "
        f"{len(result.feedback.overall_suggestions)} suggestions)"
    )
