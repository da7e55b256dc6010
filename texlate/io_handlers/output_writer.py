"""
Writes the rendered document and its answers file for texlate.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..answers import AnswerStore
from ..constants import TEX_EXTENSION, VALUES_EXTENSION
from ..exceptions import OutputWriteError
from .error_handler import WriteFailureHandler

logger = logging.getLogger(__name__)


@dataclass
class OutputPaths:
    """Absolute locations of the files written for one run."""
    output_dir: Path
    tex_file: Path
    values_file: Path


def output_paths(output_filename: str, base_dir: Optional[Union[str, Path]] = None) -> OutputPaths:
    """
    Resolve the paired output files for a base filename.

    Args:
        output_filename: Base filename declared by the template, without extension
        base_dir: Directory relative paths are resolved against (cwd if not provided)

    Returns:
        OutputPaths sharing the base filename as their stem
    """
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    stem = Path(os.path.abspath(base / output_filename))
    return OutputPaths(
        output_dir=stem.parent,
        tex_file=stem.with_name(stem.name + TEX_EXTENSION),
        values_file=stem.with_name(stem.name + VALUES_EXTENSION),
    )


def _raise_write_error(error: Exception, path: Path) -> None:
    result = WriteFailureHandler.analyze_write_error(str(error), str(path))
    raise OutputWriteError(result.message, result.remediation_steps) from error


def write_outputs(
    rendered: str,
    store: AnswerStore,
    output_filename: str,
    base_dir: Optional[Union[str, Path]] = None
) -> OutputPaths:
    """
    Write the rendered document and the answers next to each other.

    Missing parent directories are created and existing files overwritten.

    Args:
        rendered: The rendered LaTeX document
        store: Answers to persist
        output_filename: Base filename declared by the template
        base_dir: Directory relative paths are resolved against (cwd if not provided)

    Returns:
        The paths that were written

    Raises:
        OutputWriteError: If a directory or file cannot be written
    """
    paths = output_paths(output_filename, base_dir)

    try:
        paths.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        _raise_write_error(e, paths.output_dir)

    try:
        paths.tex_file.write_text(rendered, encoding="utf-8")
    except (OSError, UnicodeError) as e:
        _raise_write_error(e, paths.tex_file)
    logger.debug(f"Wrote rendered document to {paths.tex_file}")

    try:
        store.write_file(paths.values_file)
    except OutputWriteError as e:
        cause = e.__cause__ if isinstance(e.__cause__, OSError) else OSError(str(e))
        _raise_write_error(cause, paths.values_file)

    return paths
