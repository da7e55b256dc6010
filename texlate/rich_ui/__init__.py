"""Rich UI components for texlate."""
from .prompter import Prompter, parse_bool, format_bool
from .theme import Theme, ThemeStyles, make_console

__all__ = [
    'Prompter', 'parse_bool', 'format_bool',
    'Theme', 'ThemeStyles', 'make_console',
]
