"""Desktop simulator host for dinorun."""

from .input import KeyboardInputAdapter
from .layout import fit_viewport

__all__ = ["KeyboardInputAdapter", "fit_viewport"]
