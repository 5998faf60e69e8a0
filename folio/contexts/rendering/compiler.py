"""
LaTeX Compilation Module

Compiles generated .tex documents to PDF with xelatex (or pdflatex). Used by the
"latex" PDF engine; the default engine renders PDFs in-process with reportlab.
"""

import os
import re
import shutil
import subprocess
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from folio.contexts.rendering.exceptions import LaTeXCompilationError
from folio.contexts.rendering.logger import (
    _log_debug,
    log_compilation_result,
    log_compilation_start,
)
from folio.utils.pdf_processing import page_count

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "xelatex")
KEEP_LATEX_ARTIFACTS = os.getenv("KEEP_LATEX_ARTIFACTS", "false").lower() == "true"
LATEX_TIMEOUT_S = int(os.getenv("LATEX_TIMEOUT_S", "120"))

# LaTeX intermediate files created during compilation
LATEX_ARTIFACTS = [".aux", ".log", ".out", ".toc"]


@dataclass
class CompilationResult:
    """
    Result of LaTeX compilation.

    Attributes:
        success: Whether compilation succeeded
        pdf_path: Path to generated PDF (None if failed)
        stdout: Standard output from the compiler
        stderr: Standard error from the compiler
        errors: List of parsed LaTeX errors
        warnings: List of parsed LaTeX warnings
        page_count: Number of pages in generated PDF (None if not available)
    """

    success: bool
    pdf_path: Optional[Path] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def latex_compiler_available(compiler: str = None) -> bool:
    """Check whether the configured LaTeX compiler is on PATH."""
    return shutil.which(compiler or LATEX_COMPILER) is not None


def _parse_latex_log(log_content: str) -> tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # "! Error message" and "file.tex:12: Error message" (-file-line-error)
    error_pattern = re.compile(r"^(?:! |[^:\n]+\.tex:\d+: )(.+)$", re.MULTILINE)
    for match in error_pattern.finditer(log_content):
        message = match.group(1).strip()
        if message not in errors:
            errors.append(message)

    for pattern in (r"Emergency stop", r"File ended while scanning use of"):
        match = re.search(rf"({pattern}.*?)$", log_content, re.MULTILINE)
        if match and match.group(1) not in errors:
            errors.append(match.group(1))

    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]
    for pattern in warning_patterns:
        for match in re.finditer(pattern, log_content, re.MULTILINE):
            warnings.append(match.group(1).strip())

    return errors, warnings


def _remove_artifacts(tex_path: Path) -> None:
    """Remove intermediate LaTeX files next to tex_path."""
    base_path = tex_path.parent / tex_path.stem

    for ext in LATEX_ARTIFACTS:
        artifact_path = base_path.with_suffix(ext)
        if artifact_path.exists():
            artifact_path.unlink()


def compile_latex(
    tex_file: Path,
    compile_dir: Optional[Path] = None,
    num_passes: int = 2,
    keep_artifacts: bool = KEEP_LATEX_ARTIFACTS,
    compiler: str = None,
) -> CompilationResult:
    """
    Compile a LaTeX file to PDF.

    Args:
        tex_file: Path to the .tex file to compile
        compile_dir: Output directory (must exist). Defaults to the tex file's directory
        num_passes: Number of compiler passes (default: 2 for cross-references)
        keep_artifacts: Keep intermediate files (default: from KEEP_LATEX_ARTIFACTS env)
        compiler: Compiler executable (default: from LATEX_COMPILER env)

    Returns:
        CompilationResult with success status and diagnostic information
    """
    tex_file = Path(tex_file)
    if not tex_file.exists():
        return CompilationResult(success=False, errors=[f"TeX file not found: {tex_file}"])

    compiler = compiler or LATEX_COMPILER
    if not latex_compiler_available(compiler):
        return CompilationResult(
            success=False, errors=[f"LaTeX compiler '{compiler}' not found on PATH"]
        )

    original_tex_file = tex_file
    if compile_dir is None:
        compile_dir = tex_file.parent.resolve()
    else:
        compile_dir = Path(compile_dir)
        tex_file = compile_dir / tex_file.name
        if tex_file.resolve() != original_tex_file.resolve():
            shutil.copy2(original_tex_file, tex_file)

    # Stale outputs would make success detection ambiguous
    stem = tex_file.stem
    for ext in [".pdf"] + LATEX_ARTIFACTS:
        old_file = compile_dir / f"{stem}{ext}"
        if old_file.exists():
            old_file.unlink()

    log_compilation_start(tex_file, num_passes, compile_dir)
    start_time = time.time()

    all_stdout = []
    all_stderr = []
    success = True

    for _ in range(num_passes):
        cmd = [compiler, "-interaction=nonstopmode", "-file-line-error", tex_file.name]

        try:
            result = subprocess.run(
                cmd,
                cwd=compile_dir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=LATEX_TIMEOUT_S,
            )
        except subprocess.TimeoutExpired:
            all_stderr.append(f"{compiler} timed out after {LATEX_TIMEOUT_S}s")
            success = False
            break

        all_stdout.append(result.stdout)
        all_stderr.append(result.stderr)

        if result.returncode != 0:
            success = False
            break

    log_file = compile_dir / f"{stem}.log"
    errors = []
    warnings = []

    if log_file.exists():
        # TeX logs are not guaranteed UTF-8
        errors, warnings = _parse_latex_log(log_file.read_text(encoding="latin-1"))

    pdf_path = compile_dir / f"{stem}.pdf"
    if not pdf_path.exists():
        success = False
        if not errors:
            errors.append("PDF file was not generated")
    elif not errors:
        # Non-zero exit with a PDF and no errors means warnings only
        success = True
    else:
        success = False

    if not keep_artifacts:
        _remove_artifacts(tex_file)

    if original_tex_file.resolve() != tex_file.resolve() and tex_file.exists():
        tex_file.unlink()

    compilation = CompilationResult(
        success=success,
        pdf_path=pdf_path if pdf_path.exists() else None,
        stdout="\n".join(all_stdout),
        stderr="\n".join(all_stderr),
        errors=errors,
        warnings=warnings,
        page_count=page_count(pdf_path) if pdf_path.exists() else None,
    )
    log_compilation_result(compilation, time.time() - start_time)
    return compilation


def compile_latex_source(source: str, name: str = "document", num_passes: int = 2) -> bytes:
    """
    Compile LaTeX source text to PDF bytes in a throwaway directory.

    Args:
        source: Complete LaTeX document
        name: File stem used for the temporary .tex file
        num_passes: Number of compiler passes

    Returns:
        PDF file content

    Raises:
        LaTeXCompilationError: If compilation fails or the compiler is missing
    """
    with tempfile.TemporaryDirectory(prefix="folio_latex_") as tmp:
        tex_file = Path(tmp) / f"{name}.tex"
        tex_file.write_text(source, encoding="utf-8")

        result = compile_latex(tex_file, num_passes=num_passes, keep_artifacts=False)
        if not result.success:
            raise LaTeXCompilationError("LaTeX compilation failed", errors=result.errors)

        _log_debug(f"Compiled {name}.tex to {result.page_count} page(s)")
        return result.pdf_path.read_bytes()
