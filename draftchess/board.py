"""Board management for the game."""
from typing import List, Optional

from .piece import Piece
from .constants import BOARD_COLS, BOARD_ROWS


class Board:
    """
    5x5 game board.

    Layout (player 1 at bottom, player 2 at top):

        Col:  0   1   2   3   4
            ┌───┬───┬───┬───┬───┐
    Row 0   │   │   │   │   │   │  <- Player 2 home row
            ├───┼───┼───┼───┼───┤
    Row 1   │   │   │   │   │   │
            ├───┼───┼───┼───┼───┤
    Row 2   │   │   │   │   │   │
            ├───┼───┼───┼───┼───┤
    Row 3   │   │   │   │   │   │
            ├───┼───┼───┼───┼───┤
    Row 4   │   │   │   │   │   │  <- Player 1 home row
            └───┴───┴───┴───┴───┘

    A piece appears in at most one cell, and its stored position always
    matches the cell holding it.
    """

    def __init__(self, rows: int = BOARD_ROWS, cols: int = BOARD_COLS):
        self.rows = rows
        self.cols = cols
        self.cells: List[List[Optional[Piece]]] = [[None] * cols for _ in range(rows)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def home_row(self, player: int) -> int:
        """Last row for player 1, first row for player 2."""
        return self.rows - 1 if player == 1 else 0

    def get_piece(self, row: int, col: int) -> Optional[Piece]:
        """Get piece at a cell (None when empty or out of bounds)."""
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self.cells[row][col] is None

    def get_all_pieces(self, player: Optional[int] = None) -> List[Piece]:
        """All pieces on the board, optionally filtered by owner (row-major order)."""
        pieces = []
        for row in self.cells:
            for piece in row:
                if piece is not None and (player is None or piece.player == player):
                    pieces.append(piece)
        return pieces

    def place_piece(self, piece: Piece, row: int, col: int) -> bool:
        """Bind an unplaced piece to an empty cell. Returns True if successful."""
        if not self.in_bounds(row, col) or self.cells[row][col] is not None:
            return False
        if piece.position is not None:
            return False
        self.cells[row][col] = piece
        piece.position = (row, col)
        return True

    def remove_piece(self, piece: Piece) -> bool:
        """Clear a piece's cell and its position."""
        if piece.position is None:
            return False
        row, col = piece.position
        if self.get_piece(row, col) is piece:
            self.cells[row][col] = None
        piece.position = None
        return True

    def relocate(self, piece: Piece, row: int, col: int) -> bool:
        """Move a placed piece to an empty cell."""
        if piece.position is None or not self.is_empty(row, col):
            return False
        from_row, from_col = piece.position
        if self.cells[from_row][from_col] is not piece:
            return False
        self.cells[from_row][from_col] = None
        self.cells[row][col] = piece
        piece.position = (row, col)
        return True

    def pretty(self) -> str:
        """Human-readable dump: abbreviations, lowercase for player 2, '*' marks captains."""
        lines = []
        for row in self.cells:
            out = []
            for piece in row:
                if piece is None:
                    out.append(" . ")
                    continue
                abbr = piece.abbr if piece.player == 1 else piece.abbr.lower()
                out.append(abbr + ("*" if piece.is_captain else " "))
            lines.append("".join(out).rstrip())
        return "\n".join(lines)
