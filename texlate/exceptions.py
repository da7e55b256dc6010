"""
Exception hierarchy for texlate.

Every error the CLI treats as fatal derives from TexlateError. Typesetter
failures are not exceptions; they are reported as failed RenderResults.
"""
from typing import List, Optional


class TexlateError(Exception):
    """Base class for texlate errors."""


class ConfigurationError(TexlateError):
    """Missing or invalid template, values file or configuration."""


class ValuesFileError(ConfigurationError):
    """A persisted answers file could not be deserialized."""


class PromptAbortedError(TexlateError):
    """The interactive channel failed or the user interrupted a prompt."""


class InvalidDefaultError(TexlateError):
    """A stored default cannot be presented for the question being asked."""


class TemplateRenderError(TexlateError):
    """Template parsing or execution failed."""

    def __init__(self, message: str, template: str = "", lineno: Optional[int] = None) -> None:
        self.template = template
        self.lineno = lineno
        location = template
        if template and lineno:
            location = f"{template}:{lineno}"
        super().__init__(f"{location}: {message}" if location else message)


class OutputWriteError(TexlateError):
    """Writing the rendered document or the answers file failed."""

    def __init__(self, message: str, remediation_steps: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.remediation_steps = remediation_steps or []