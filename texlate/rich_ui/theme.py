"""
Theme for texlate's Rich console output.
"""
from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console
from rich.theme import Theme as RichTheme


@dataclass
class ThemeStyles:
    """Style definitions for the wizard's console elements."""
    # Question text
    prompt: str = "bold #00d7d7"
    # Numbered choice markers in select questions
    option_index: str = "#00d7d7"
    # Marker for the stored default in select questions
    option_default: str = "bold #00ff00"
    # Error message style - red
    error_message: str = "bold #ff0000"
    # Warning message style - yellow
    warning_message: str = "bold #ffff00"
    # Success messages (files written, render finished)
    success: str = "#00ff00"
    # Secondary text such as paths
    muted: str = "#666666"


@dataclass
class Theme:
    """Complete theme definition."""
    name: str = "default"
    styles: ThemeStyles = field(default_factory=ThemeStyles)

    def to_rich_theme(self) -> RichTheme:
        """Convert to Rich Theme object."""
        return RichTheme({
            "prompt": self.styles.prompt,
            "option_index": self.styles.option_index,
            "option_default": self.styles.option_default,
            "error_msg": self.styles.error_message,
            "warning_msg": self.styles.warning_message,
            "success": self.styles.success,
            "muted": self.styles.muted,
        })


def make_console(theme: Optional[Theme] = None, stderr: bool = False) -> Console:
    """
    Create a Rich console using the texlate theme.

    Args:
        theme: Theme to apply (default theme if not provided)
        stderr: Write to stderr instead of stdout

    Returns:
        Configured Console instance
    """
    theme = theme or Theme()
    return Console(theme=theme.to_rich_theme(), stderr=stderr)
