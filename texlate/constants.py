"""
Constants and configuration defaults for texlate.
"""
import os
from pathlib import Path
from typing import Final

APP_NAME: Final[str] = "texlate"
APP_VERSION: Final[str] = os.environ.get("TEXLATE_BUILD_VERSION", "0.3.0")
APP_DESCRIPTION: Final[str] = "Generate an interactive wizard from a LaTeX template"

CONFIG_DIR: Final[Path] = Path.home() / ".texlate"
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.json"

# Reserved answers key holding the path of the template that produced them
TEMPLATE_KEY: Final[str] = "_template"

TEX_EXTENSION: Final[str] = ".tex"
VALUES_EXTENSION: Final[str] = ".json"

DEFAULT_RENDERER: Final[str] = "pdflatex"
DEFAULT_RENDERER_ARGS: Final[tuple] = ("-halt-on-error",)
DEFAULT_RENDER_PASSES: Final[int] = 2
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

# kpathsea expands these variables itself; the template directory is appended
TEXINPUTS_SEARCH_PATH: Final[tuple] = (
    "$TEXMFDOTDIR",
    "$TEXMF/tex/{$progname,generic,latex,}//",
)

VARIABLE_START: Final[str] = r"\begin{template}"
VARIABLE_END: Final[str] = r"\end{template}"
BLOCK_START: Final[str] = r"\begin{template*}"
BLOCK_END: Final[str] = r"\end{template*}"
COMMENT_START: Final[str] = r"\begin{template#}"
COMMENT_END: Final[str] = r"\end{template#}"

# Environment overrides
ENV_CONFIG: Final[str] = "TEXLATE_CONFIG"
ENV_RENDERER: Final[str] = "TEXLATE_RENDERER"
ENV_RENDER_PASSES: Final[str] = "TEXLATE_RENDER_PASSES"
ENV_LOG_LEVEL: Final[str] = "TEXLATE_LOG_LEVEL"
