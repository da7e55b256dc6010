"""
Template driver for texlate.

Executes a Jinja template whose callbacks ask the user questions. LaTeX uses
curly braces everywhere, so the template syntax is marked with LaTeX-looking
environments instead:

    \\begin{template}prompt_string("title", "Document title?")\\end{template}
    \\begin{template*}if prompt_bool("draft", "Draft?")\\end{template*}
    \\usepackage{draftwatermark}
    \\begin{template*}endif\\end{template*}
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from .answers import AnswerStore
from .config import DelimiterConfig
from .escaping import tex_escape
from .exceptions import ConfigurationError, PromptAbortedError, TemplateRenderError
from .rich_ui import Prompter

logger = logging.getLogger(__name__)


class Wizard:
    """
    Callback surface exposed to templates.

    Every prompt goes through the Prompter, which reads and writes the
    answer store. The output filename declared by the template is kept here
    for the caller to read once rendering is done.
    """

    def __init__(self, store: AnswerStore, prompter: Optional[Prompter] = None) -> None:
        self.store = store
        self.prompter = prompter or Prompter(store)
        self.output_filename = ""

    def get(self, key: str) -> str:
        return self.store.get(key)

    def prompt_bool(self, key: str, question: str) -> bool:
        return self.prompter.prompt_bool(key, question)

    def prompt_string(self, key: str, question: str) -> str:
        return self.prompter.prompt_string(key, question)

    def prompt_select(self, key: str, question: str, *options: str) -> str:
        return self.prompter.prompt_select(key, question, *options)

    def format_date(self, fmt: str) -> str:
        """Format the current local time with a strftime format string."""
        return datetime.now().strftime(fmt)

    def set_output_filename(self, filename: str) -> str:
        """Record where the rendered document goes. Renders as nothing."""
        self.output_filename = str(filename)
        logger.debug(f"Template set output filename to '{self.output_filename}'")
        return ""

    def callbacks(self) -> Dict[str, Callable[..., Any]]:
        """Names made available to the template."""
        return {
            "wizard": self,
            "get": self.get,
            "prompt_bool": self.prompt_bool,
            "prompt_string": self.prompt_string,
            "prompt_select": self.prompt_select,
            "format_date": self.format_date,
            "set_output_filename": self.set_output_filename,
        }


def _tex_filter(value: Any) -> str:
    return tex_escape(str(value))


class TemplateDriver:
    """Loads templates with texlate's delimiters and renders them into a buffer."""

    def __init__(self, delimiters: Optional[DelimiterConfig] = None) -> None:
        self._delimiters = delimiters or DelimiterConfig()

    def _environment(self, template_dir: Path) -> Environment:
        d = self._delimiters
        env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            block_start_string=d.block_start,
            block_end_string=d.block_end,
            variable_start_string=d.variable_start,
            variable_end_string=d.variable_end,
            comment_start_string=d.comment_start,
            comment_end_string=d.comment_end,
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        env.filters["tex"] = _tex_filter
        return env

    def render(self, template_path: Union[str, Path], wizard: Wizard) -> str:
        """
        Execute a template against a wizard.

        Args:
            template_path: Path of the template file
            wizard: Callback target holding the answer store

        Returns:
            The complete rendered document

        Raises:
            ConfigurationError: If the template file does not exist
            TemplateRenderError: If the template fails to parse or execute
            PromptAbortedError: If the user aborted a question
        """
        path = Path(template_path).resolve()
        env = self._environment(path.parent)

        try:
            template = env.get_template(path.name)
        except TemplateNotFound as e:
            raise ConfigurationError(f"Template not found: {template_path}") from e
        except TemplateSyntaxError as e:
            raise TemplateRenderError(e.message or str(e), str(template_path), e.lineno) from e

        logger.debug(f"Rendering template {path}")
        try:
            return template.render(**wizard.callbacks())
        except PromptAbortedError:
            raise
        except TemplateError as e:
            raise TemplateRenderError(
                str(e), str(template_path), _error_lineno(e, template.filename)
            ) from e
        except Exception as e:
            raise TemplateRenderError(
                f"{type(e).__name__}: {e}", str(template_path),
                _error_lineno(e, template.filename)
            ) from e


def _error_lineno(error: BaseException, filename: str) -> Optional[int]:
    """Line in the template where execution failed, from the rewritten traceback."""
    lineno = getattr(error, "lineno", None)
    tb = error.__traceback__
    while tb is not None:
        if tb.tb_frame.f_code.co_filename == filename:
            lineno = tb.tb_lineno
        tb = tb.tb_next
    return lineno
