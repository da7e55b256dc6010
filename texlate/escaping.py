"""
LaTeX escaping for user supplied answers.
"""
import re
from typing import Dict

_REPLACEMENTS: Dict[str, str] = {
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~ ": r"\textasciitilde\space ",
    "~": r"\textasciitilde ",
    "^ ": r"\textasciicircum\space ",
    "^": r"\textasciicircum ",
    "\\ ": r"\textbackslash\space ",
    "\\": r"\textbackslash ",
}

# Two-character forms come first so they win over their single-character
# counterparts at the same position.
_ESCAPE_PATTERN = re.compile(
    r"~ |\^ |\\ "
    r"|[&%$#_{}~^\\]"
)


def _replace(match: "re.Match[str]") -> str:
    token = match.group(0)
    return _REPLACEMENTS[token]


def tex_escape(text: str) -> str:
    """
    Escape text so it can be embedded verbatim in a LaTeX document.

    The input is scanned once, so escape sequences produced here are never
    escaped a second time. Every backslash in the input becomes
    ``\\textbackslash``, including one typed in front of another special.

    Args:
        text: Raw text, typically an answer typed by the user

    Returns:
        Text that LaTeX renders as the original characters
    """
    if not text:
        return ""
    return _ESCAPE_PATTERN.sub(_replace, text)
