"""
Interactive question prompts for texlate templates.

Each prompt reads its default from the answer store, asks the user, and
writes the canonical answer back before returning it to the template.
"""
import logging
from typing import IO, Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.text import Text

from ..answers import AnswerStore
from ..escaping import tex_escape
from ..exceptions import InvalidDefaultError, PromptAbortedError
from .theme import make_console

logger = logging.getLogger(__name__)

TRUE_VALUES = frozenset({"1", "t", "true", "y", "yes", "on"})
FALSE_VALUES = frozenset({"0", "f", "false", "n", "no", "off"})


def parse_bool(value: str) -> Optional[bool]:
    """
    Parse the string encoding of a boolean.

    Returns:
        True or False, or None when the value is not a recognised boolean
    """
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return None


def format_bool(value: bool) -> str:
    """Canonical string encoding stored for boolean answers."""
    return "true" if value else "false"


class _ChannelStream:
    """
    Input stream wrapper that behaves like input(): the line ending is
    dropped and end of input raises EOFError.
    """

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def readline(self) -> str:
        line = self._stream.readline()
        if not line:
            raise EOFError("input stream closed")
        return line.rstrip("\r\n")


class Prompter:
    """
    Asks template questions on the terminal, backed by an AnswerStore.

    Text and select answers are stored raw and returned LaTeX-escaped, so the
    next run shows the answer exactly as it was typed.
    """

    def __init__(
        self,
        store: AnswerStore,
        console: Optional[Console] = None,
        stream: Optional[IO[str]] = None
    ) -> None:
        """
        Initialize the prompter.

        Args:
            store: Answer store providing defaults and receiving answers
            console: Console used for questions (themed stderr console if not provided)
            stream: Input stream to read answers from (the terminal if not provided)
        """
        self._store = store
        self._console = console or make_console(stderr=True)
        self._stream = _ChannelStream(stream) if stream is not None else None

    @property
    def store(self) -> AnswerStore:
        return self._store

    def prompt_bool(self, key: str, question: str) -> bool:
        """Ask a yes/no question. Unset or unparsable defaults count as no."""
        default = parse_bool(self._store.get(key)) or False
        answer = self._ask(Confirm, key, question, default=default)
        self._store.set(key, format_bool(answer))
        return answer

    def prompt_string(self, key: str, question: str) -> str:
        """Ask for free text and return it escaped."""
        default = self._store.get(key)
        answer = self._ask(Prompt, key, question, default=default, show_default=bool(default))
        self._store.set(key, answer)
        return tex_escape(answer)

    def prompt_select(self, key: str, question: str, *options: str) -> str:
        """
        Ask the user to pick one of a fixed list of options.

        Raises:
            InvalidDefaultError: If there are no options, or the stored answer
                is not one of them
        """
        choices = [str(option) for option in options]
        if not choices:
            raise InvalidDefaultError(f"Question '{key}' has no options to select from")

        default = self._store.get(key)
        if default and default not in choices:
            raise InvalidDefaultError(
                f"Stored answer '{default}' for '{key}' is not one of: {', '.join(choices)}"
            )

        self._console.print(Text(question, style="prompt"))
        for i, choice in enumerate(choices, 1):
            marker = ">" if choice == default else " "
            line = Text(f"  {marker} ")
            line.append(f"[{i}]", style="option_index")
            line.append(f" {choice}", style="option_default" if choice == default else "")
            self._console.print(line)

        while True:
            selection = self._ask(
                Prompt, key, "Enter number or option",
                default=default, show_default=bool(default)
            )
            answer = self._resolve_choice(selection.strip(), choices)
            if answer is not None:
                break
            self._console.print(Text("Please select one of the listed options", style="error_msg"))

        self._store.set(key, answer)
        return tex_escape(answer)

    @staticmethod
    def _resolve_choice(selection: str, choices: Sequence[str]) -> Optional[str]:
        if selection in choices:
            return selection
        if selection.isdigit():
            idx = int(selection) - 1
            if 0 <= idx < len(choices):
                return choices[idx]
        return None

    def _ask(self, prompt_cls, key: str, question: str, **kwargs):
        try:
            return prompt_cls.ask(
                Text(question, style="prompt"),
                console=self._console,
                stream=self._stream,
                **kwargs
            )
        except (EOFError, KeyboardInterrupt, OSError) as e:
            logger.debug(f"Prompt for '{key}' aborted: {e!r}")
            raise PromptAbortedError(f"No answer for '{key}': {str(e) or type(e).__name__}") from e
