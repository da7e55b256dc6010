"""
External typesetter runner for texlate.
Runs pdflatex (or a configured replacement) over the rendered document.
"""
import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..constants import (
    DEFAULT_RENDER_PASSES,
    DEFAULT_RENDERER,
    DEFAULT_RENDERER_ARGS,
    TEXINPUTS_SEARCH_PATH,
)

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Result of one typesetter pass."""
    command: List[str]
    return_code: int
    pass_number: int = 1
    error: str = ""

    @property
    def success(self) -> bool:
        """Check if the pass succeeded."""
        return self.return_code == 0


def texinputs_for(template_dir: Union[str, Path]) -> str:
    """TEXINPUTS value that keeps the default search path and adds the template directory."""
    return os.pathsep.join([*TEXINPUTS_SEARCH_PATH, str(template_dir)])


class RendererRunner:
    """
    Runs the typesetter in the output directory.

    The typesetter's own output goes straight to the terminal. Multiple passes
    let LaTeX resolve cross-references; a failed pass stops the remaining ones.
    """

    def __init__(
        self,
        command: str = DEFAULT_RENDERER,
        args: Optional[Sequence[str]] = None,
        passes: int = DEFAULT_RENDER_PASSES
    ) -> None:
        """
        Initialize the runner.

        Args:
            command: Typesetter executable
            args: Arguments placed before the document path
            passes: Number of times to run the typesetter
        """
        self._command = command
        self._args = list(DEFAULT_RENDERER_ARGS if args is None else args)
        self._passes = max(int(passes), 0)

    def build_env(self, template_path: Union[str, Path]) -> dict:
        """Environment for the typesetter, with the template directory on TEXINPUTS."""
        template_dir = Path(template_path).resolve().parent
        return {**os.environ, "TEXINPUTS": texinputs_for(template_dir)}

    def run(
        self,
        tex_path: Union[str, Path],
        template_path: Union[str, Path],
        output_dir: Union[str, Path]
    ) -> List[RenderResult]:
        """
        Typeset a rendered document.

        Args:
            tex_path: The rendered .tex file
            template_path: Template the document came from
            output_dir: Working directory for the typesetter

        Returns:
            One RenderResult per pass that was attempted
        """
        args = [self._command, *self._args, str(tex_path)]
        results: List[RenderResult] = []

        if self._passes and shutil.which(self._command) is None:
            logger.warning(f"Typesetter '{self._command}' not found on PATH")
            results.append(RenderResult(
                command=args,
                return_code=-1,
                error=f"{self._command} not found"
            ))
            return results

        env = self.build_env(template_path)
        for pass_number in range(1, self._passes + 1):
            logger.debug(f"Typesetter pass {pass_number}/{self._passes}: {' '.join(args)}")
            result = self._run_pass(args, pass_number, output_dir, env)
            results.append(result)
            if not result.success:
                logger.warning(
                    f"Typesetter pass {pass_number} failed with exit code "
                    f"{result.return_code}{': ' + result.error if result.error else ''}"
                )
                break

        return results

    @staticmethod
    def _run_pass(
        args: List[str],
        pass_number: int,
        output_dir: Union[str, Path],
        env: dict
    ) -> RenderResult:
        try:
            completed = subprocess.run(args, cwd=str(output_dir), env=env, check=False)
        except OSError as e:
            return RenderResult(command=args, return_code=-1, pass_number=pass_number, error=str(e))

        return RenderResult(
            command=args,
            return_code=completed.returncode,
            pass_number=pass_number
        )
