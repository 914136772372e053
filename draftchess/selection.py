"""Selection state.

No selection is represented by None. A selected own piece may have its
special mode engaged; an opponent piece can only be previewed.
"""
from dataclasses import dataclass
from typing import Optional, Union

from .piece import Piece


@dataclass
class OwnSelection:
    """A piece the acting player may commit actions with (or place, during placement)."""
    piece: Piece
    special_mode: bool = False


@dataclass(frozen=True)
class PreviewSelection:
    """Read-only look at an opponent piece's moves and specials."""
    piece: Piece


Selection = Optional[Union[OwnSelection, PreviewSelection]]
