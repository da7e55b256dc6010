"""Answer storage for texlate."""
from .store import AnswerStore

__all__ = ['AnswerStore']
