"""Pygame rendering - board, pieces, highlights, sidebar, clocks and log."""
import pygame
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from .clock import format_time
from .constants import (
    WINDOW_WIDTH, WINDOW_HEIGHT,
    BOARD_ROWS, BOARD_COLS, CELL_SIZE, BOARD_OFFSET_X, BOARD_OFFSET_Y,
    SIDEBAR_X, SIDEBAR_WIDTH,
    COLOR_BG, COLOR_BOARD_LIGHT, COLOR_BOARD_DARK, COLOR_GRID_LINE,
    COLOR_PLAYER1, COLOR_PLAYER2, COLOR_CAPTAIN, COLOR_FORTIFIED, COLOR_SELECTED,
    COLOR_MOVE_HIGHLIGHT, COLOR_SPECIAL_HIGHLIGHT, COLOR_CAPTURE_HIGHLIGHT,
    COLOR_PLACEMENT_HIGHLIGHT, COLOR_TEXT, COLOR_TEXT_DIM,
    COLOR_CLOCK_ACTIVE, COLOR_CLOCK_IDLE,
    GamePhase,
)
from .piece_types import PIECE_TYPES
from .selection import OwnSelection
from .ui import FontManager, draw_button_simple

if TYPE_CHECKING:
    from .game import Game
    from .piece import Piece


PLAYER_COLORS = {1: COLOR_PLAYER1, 2: COLOR_PLAYER2}
LOG_LINES = 8


@dataclass
class ViewState:
    """Front-end state that is not part of the game (modal, local choices, status line)."""
    mode_prompt: bool = True
    random_draft: bool = False
    captain_choices: Dict[int, Optional[str]] = field(default_factory=lambda: {1: None, 2: None})
    status: str = ""
    vs_ai: bool = False  # Last chosen mode, highlighted in the prompt

    @classmethod
    def from_settings(cls, settings: dict) -> 'ViewState':
        return cls(random_draft=bool(settings.get("random_draft")),
                   vs_ai=bool(settings.get("vs_ai")))


@dataclass
class ButtonHit:
    """A clickable region registered while drawing."""
    rect: pygame.Rect
    action: str
    payload: Any = None
    enabled: bool = True
    style: str = 'default'


class Renderer:
    """Draws the whole window and answers hit-tests for clicks."""

    BASE_WIDTH = WINDOW_WIDTH
    BASE_HEIGHT = WINDOW_HEIGHT

    def __init__(self, window: pygame.Surface):
        self.window = window
        # Render surface at fixed resolution - all drawing goes here
        self.screen = pygame.Surface((self.BASE_WIDTH, self.BASE_HEIGHT))
        self.scale = 1.0
        self.offset_x = 0
        self.offset_y = 0
        self._update_scale()

        FontManager.init()
        self.font_title = FontManager.get('title')
        self.font_large = FontManager.get('large')
        self.font_medium = FontManager.get('medium')
        self.font_small = FontManager.get('small')
        self.font_piece = FontManager.get('piece')
        self.font_clock = FontManager.get('clock')

        self.buttons: List[ButtonHit] = []
        self.mouse_pos: Tuple[int, int] = (0, 0)

        # Surfaces for highlighting (with transparency)
        self.move_highlight = self._highlight(COLOR_MOVE_HIGHLIGHT)
        self.capture_highlight = self._highlight(COLOR_CAPTURE_HIGHLIGHT)
        self.special_highlight = self._highlight(COLOR_SPECIAL_HIGHLIGHT)
        self.placement_highlight = self._highlight(COLOR_PLACEMENT_HIGHLIGHT)

    @staticmethod
    def _highlight(color) -> pygame.Surface:
        surface = pygame.Surface((CELL_SIZE, CELL_SIZE), pygame.SRCALPHA)
        surface.fill(color)
        return surface

    # =========================================================================
    # SCALING / HIT-TESTING
    # =========================================================================

    def _update_scale(self):
        """Fit the base surface into the window, keeping aspect ratio."""
        win_w, win_h = self.window.get_size()
        self.scale = min(win_w / self.BASE_WIDTH, win_h / self.BASE_HEIGHT)
        self.offset_x = (win_w - int(self.BASE_WIDTH * self.scale)) // 2
        self.offset_y = (win_h - int(self.BASE_HEIGHT * self.scale)) // 2

    def handle_resize(self, new_window: pygame.Surface):
        self.window = new_window
        self._update_scale()

    def screen_to_game_coords(self, screen_x: int, screen_y: int) -> Tuple[int, int]:
        return (int((screen_x - self.offset_x) / self.scale),
                int((screen_y - self.offset_y) / self.scale))

    def set_mouse_pos(self, screen_x: int, screen_y: int):
        self.mouse_pos = self.screen_to_game_coords(screen_x, screen_y)

    def cell_rect(self, row: int, col: int) -> pygame.Rect:
        return pygame.Rect(BOARD_OFFSET_X + col * CELL_SIZE, BOARD_OFFSET_Y + row * CELL_SIZE,
                           CELL_SIZE, CELL_SIZE)

    def get_cell_at(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        """Board square under a game-space point, or None."""
        col = (x - BOARD_OFFSET_X) // CELL_SIZE
        row = (y - BOARD_OFFSET_Y) // CELL_SIZE
        if x < BOARD_OFFSET_X or y < BOARD_OFFSET_Y:
            return None
        if 0 <= row < BOARD_ROWS and 0 <= col < BOARD_COLS:
            return (row, col)
        return None

    def get_clicked_button(self, x: int, y: int) -> Optional[ButtonHit]:
        # Last drawn wins (modal buttons are drawn on top)
        for hit in reversed(self.buttons):
            if hit.enabled and hit.rect.collidepoint(x, y):
                return hit
        return None

    def _button(self, rect: pygame.Rect, text: str, action: str, payload: Any = None,
                style: str = 'default', enabled: bool = True, font=None):
        hovered = enabled and rect.collidepoint(self.mouse_pos)
        draw_button_simple(self.screen, rect, text, font or self.font_medium,
                           style=style, hovered=hovered, enabled=enabled)
        self.buttons.append(ButtonHit(rect, action, payload, enabled, style))

    def _text(self, text: str, x: int, y: int, font=None, color=COLOR_TEXT) -> int:
        """Blit one line of text; returns the y below it."""
        font = font or self.font_medium
        surface = font.render(text, True, color)
        self.screen.blit(surface, (x, y))
        return y + surface.get_height() + 4

    def _wrapped(self, text: str, x: int, y: int, width: int, font=None, color=COLOR_TEXT) -> int:
        font = font or self.font_small
        line = ""
        for word in text.split():
            candidate = f"{line} {word}".strip()
            if font.size(candidate)[0] > width and line:
                y = self._text(line, x, y, font, color)
                line = word
            else:
                line = candidate
        if line:
            y = self._text(line, x, y, font, color)
        return y

    # =========================================================================
    # FRAME
    # =========================================================================

    def draw(self, game: 'Game', view: ViewState):
        self.buttons = []
        self.screen.fill(COLOR_BG)

        self.draw_header(game, view)
        self.draw_board(game)
        self.draw_highlights(game)
        self.draw_pieces(game)
        self.draw_sidebar(game, view)
        if view.mode_prompt:
            # Only the prompt's buttons are live while it is open
            self.buttons = []
            self.draw_mode_prompt(view)

        scaled = pygame.transform.smoothscale(
            self.screen,
            (int(self.BASE_WIDTH * self.scale), int(self.BASE_HEIGHT * self.scale)))
        self.window.fill((0, 0, 0))
        self.window.blit(scaled, (self.offset_x, self.offset_y))

    def draw_header(self, game: 'Game', view: ViewState):
        self._text("Draft Chess", BOARD_OFFSET_X, 14, self.font_title)
        status = view.status
        if game.is_over:
            status = game.result_message or status
        if status:
            self._text(status, BOARD_OFFSET_X + 210, 24, self.font_medium, COLOR_TEXT_DIM)

    def draw_board(self, game: 'Game'):
        """Draw the board grid (home rows tinted with their owner's colour)."""
        for row in range(BOARD_ROWS):
            for col in range(BOARD_COLS):
                rect = self.cell_rect(row, col)
                color = COLOR_BOARD_LIGHT if (row + col) % 2 == 0 else COLOR_BOARD_DARK
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, COLOR_GRID_LINE, rect, 1)
        for col in range(BOARD_COLS):
            self.screen.fill(COLOR_PLAYER2, (BOARD_OFFSET_X + col * CELL_SIZE, BOARD_OFFSET_Y - 4, CELL_SIZE, 3))
            self.screen.fill(COLOR_PLAYER1, (BOARD_OFFSET_X + col * CELL_SIZE,
                                             BOARD_OFFSET_Y + BOARD_ROWS * CELL_SIZE + 1, CELL_SIZE, 3))

    def draw_highlights(self, game: 'Game'):
        """Placement squares, or moves/special targets of the selected piece."""
        piece = game.selected_piece
        if piece is None:
            return

        if game.phase == GamePhase.PLACEMENT:
            row = game.board.home_row(game.placement_player)
            for col in range(game.board.cols):
                if game.board.is_empty(row, col):
                    self.screen.blit(self.placement_highlight, self.cell_rect(row, col))
            return

        if game.phase != GamePhase.PLAY or piece.position is None:
            return

        if game.special_mode:
            for target in game.get_special_targets(piece):
                self.screen.blit(self.special_highlight, self.cell_rect(target.row, target.col))
        else:
            for row, col in game.get_legal_moves(piece):
                surface = self.move_highlight if game.board.is_empty(row, col) else self.capture_highlight
                self.screen.blit(surface, self.cell_rect(row, col))

        border = COLOR_SELECTED if isinstance(game.selection, OwnSelection) else COLOR_TEXT_DIM
        pygame.draw.rect(self.screen, border, self.cell_rect(piece.row, piece.col), 3)

    def draw_pieces(self, game: 'Game'):
        for piece in game.board.get_all_pieces():
            self.draw_piece(piece, self.cell_rect(piece.row, piece.col))

    def draw_piece(self, piece: 'Piece', rect: pygame.Rect):
        center = rect.center
        radius = CELL_SIZE // 2 - 12
        pygame.draw.circle(self.screen, PLAYER_COLORS[piece.player], center, radius)
        if piece.is_captain:
            pygame.draw.circle(self.screen, COLOR_CAPTAIN, center, radius, 4)
        if piece.is_fortified:
            pygame.draw.circle(self.screen, COLOR_FORTIFIED, center, radius + 5, 3)

        label = self.font_piece.render(piece.abbr, True, COLOR_TEXT)
        self.screen.blit(label, label.get_rect(center=center))

        # Special still available
        if not piece.special_used:
            pygame.draw.circle(self.screen, COLOR_SPECIAL_HIGHLIGHT[:3],
                               (rect.right - 14, rect.top + 14), 5)

    # =========================================================================
    # SIDEBAR
    # =========================================================================

    def draw_sidebar(self, game: 'Game', view: ViewState):
        x = SIDEBAR_X
        y = self.draw_clocks(game, x, BOARD_OFFSET_Y)
        y = self._text(f"Phase: {game.phase.name}", x, y + 6, self.font_small, COLOR_TEXT_DIM)

        if game.phase == GamePhase.DRAFT:
            y = self.draw_draft_panel(game, x, y)
        elif game.phase == GamePhase.CAPTAIN:
            y = self.draw_captain_panel(game, view, x, y)
        elif game.phase == GamePhase.PLACEMENT:
            y = self.draw_placement_panel(game, x, y)
        elif game.phase == GamePhase.PLAY:
            y = self.draw_play_panel(game, x, y)
        else:
            y = self.draw_game_over_panel(game, x, y)

        self.draw_log(game, x, max(y + 10, WINDOW_HEIGHT - 20 - LOG_LINES * 18))

    def draw_clocks(self, game: 'Game', x: int, y: int) -> int:
        width = (SIDEBAR_WIDTH - 10) // 2
        for i, player in enumerate((1, 2)):
            rect = pygame.Rect(x + i * (width + 10), y, width, 44)
            running = game.clock.active_player == player
            pygame.draw.rect(self.screen, COLOR_CLOCK_ACTIVE if running else COLOR_CLOCK_IDLE,
                             rect, border_radius=4)
            pygame.draw.rect(self.screen, PLAYER_COLORS[player], rect, 2, border_radius=4)
            label = f"P{player}{' (AI)' if game.ai_enabled.get(player) else ''}"
            self._text(label, rect.x + 8, rect.y + 4, self.font_small, COLOR_TEXT_DIM)
            clock_text = self.font_clock.render(format_time(game.time_left(player)), True, COLOR_TEXT)
            self.screen.blit(clock_text, (rect.right - clock_text.get_width() - 8,
                                          rect.bottom - clock_text.get_height() - 4))
        return y + 50

    def draw_draft_panel(self, game: 'Game', x: int, y: int) -> int:
        player = game.draft_player
        state = game.players[player]
        y = self._text(f"Draft - {state.name}", x, y, self.font_large)
        y = self._text("Pick unique pieces (4 total). Alternate picks.", x, y, self.font_small, COLOR_TEXT_DIM)

        for piece_type in PIECE_TYPES.values():
            picked = piece_type.id in state.drafted
            rect = pygame.Rect(x, y, 110, 28)
            self._button(rect, "Picked" if picked else f"Pick {piece_type.abbr}", 'pick', piece_type.id,
                         style='p1' if player == 1 else 'p2',
                         enabled=not picked and not state.draft_complete, font=self.font_small)
            self._text(piece_type.name, x + 120, y, self.font_medium)
            y = self._wrapped(piece_type.description, x + 120, y + 20, SIDEBAR_WIDTH - 120) + 4

        for p in (1, 2):
            picks = ' '.join(PIECE_TYPES[t].abbr for t in game.players[p].drafted) or '-'
            y = self._text(f"P{p}: {picks}", x, y, self.font_medium, PLAYER_COLORS[p])
        return y

    def draw_captain_panel(self, game: 'Game', view: ViewState, x: int, y: int) -> int:
        y = self._text("Assign Captains", x, y, self.font_large)
        y = self._text("Choose one drafted piece per player as the Captain.", x, y,
                       self.font_small, COLOR_TEXT_DIM)
        for player in (1, 2):
            state = game.players[player]
            y = self._text(state.name, x, y + 4, self.font_medium, PLAYER_COLORS[player])
            if game.ai_enabled.get(player):
                y = self._text("Chosen by the AI.", x, y, self.font_small, COLOR_TEXT_DIM)
                continue
            bx = x
            for type_id in game.captain_candidates(player) or []:
                chosen = view.captain_choices.get(player) == type_id
                rect = pygame.Rect(bx, y, 84, 28)
                self._button(rect, PIECE_TYPES[type_id].name, 'captain', (player, type_id),
                             style='chosen' if chosen else 'default', font=self.font_small)
                bx += 90
            y += 34

        humans = [p for p in (1, 2) if not game.ai_enabled.get(p)]
        ready = all(view.captain_choices.get(p) for p in humans)
        self._button(pygame.Rect(x, y + 8, 180, 34), "Confirm Captains", 'confirm_captains',
                     style='primary', enabled=ready)
        return y + 50

    def draw_placement_panel(self, game: 'Game', x: int, y: int) -> int:
        placer = game.placement_player
        state = game.players[placer]
        y = self._text(f"Placement - {state.name}", x, y, self.font_large)
        side = "bottom" if placer == 1 else "top"
        y = self._text(f"Place one piece on the {side} home row.", x, y, self.font_small, COLOR_TEXT_DIM)

        bx = x
        selected = game.selected_piece
        for piece in state.bench:
            label = piece.name + (" *" if piece.is_captain else "")
            style = 'chosen' if piece is selected else ('p1' if placer == 1 else 'p2')
            self._button(pygame.Rect(bx, y, 84, 28), label, 'bench', piece.id,
                         style=style, font=self.font_small)
            bx += 90
        y += 36
        return self._text("Click a bench piece, then a highlighted square.", x, y,
                          self.font_small, COLOR_TEXT_DIM)

    def draw_play_panel(self, game: 'Game', x: int, y: int) -> int:
        turn = game.active_player
        y = self._text(f"Turn - {game.players[turn].name}", x, y, self.font_large, PLAYER_COLORS[turn])

        piece = game.selected_piece
        own = isinstance(game.selection, OwnSelection)
        if piece is not None:
            heading = "Selected" if own else "Preview"
            y = self._text(f"{heading}: {piece.display_name}", x, y + 4, self.font_medium)
            y = self._wrapped(piece.piece_type.description, x, y, SIDEBAR_WIDTH)
            y = self._text(f"Special: {'USED' if piece.special_used else 'Ready'}", x, y,
                           self.font_small, COLOR_TEXT_DIM)
            if piece.is_fortified:
                y = self._text("Fortified", x, y, self.font_small, COLOR_FORTIFIED)

        can_special = own and piece is not None and not piece.special_used
        label = "Cancel Special" if game.special_mode else "Use Special"
        self._button(pygame.Rect(x, y + 8, 150, 32), label, 'special', enabled=can_special)
        self._button(pygame.Rect(x + 160, y + 8, 190, 32), "Activate Self Special", 'self_special',
                     enabled=can_special and piece.piece_type.self_targeted)
        return y + 48

    def draw_game_over_panel(self, game: 'Game', x: int, y: int) -> int:
        y = self._text("Game Over", x, y, self.font_large)
        if game.winner is not None:
            y = self._text(f"{game.players[game.winner].name} wins ({game.win_reason.value}).",
                           x, y, self.font_medium, PLAYER_COLORS[game.winner])
        self._button(pygame.Rect(x, y + 8, 150, 34), "New Game", 'restart', style='primary')
        return y + 50

    def draw_log(self, game: 'Game', x: int, y: int):
        y = self._text("Log", x, y, self.font_small, COLOR_TEXT_DIM)
        for msg in game.messages[-LOG_LINES:]:
            y = self._text(msg, x, y - 2, self.font_small)

    # =========================================================================
    # MODE PROMPT
    # =========================================================================

    def draw_mode_prompt(self, view: ViewState):
        overlay = pygame.Surface((self.BASE_WIDTH, self.BASE_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        self.screen.blit(overlay, (0, 0))

        panel = pygame.Rect(0, 0, 380, 230)
        panel.center = (self.BASE_WIDTH // 2, self.BASE_HEIGHT // 2)
        pygame.draw.rect(self.screen, (40, 40, 50), panel, border_radius=6)
        pygame.draw.rect(self.screen, (80, 80, 100), panel, 2, border_radius=6)

        title = self.font_large.render("Choose Mode", True, COLOR_TEXT)
        self.screen.blit(title, title.get_rect(midtop=(panel.centerx, panel.y + 16)))

        self._button(pygame.Rect(panel.x + 30, panel.y + 64, 320, 38), "Local 2 Players", 'mode_local',
                     style='default' if view.vs_ai else 'primary')
        self._button(pygame.Rect(panel.x + 30, panel.y + 112, 320, 38), "Play vs AI (AI is P2)", 'mode_ai',
                     style='primary' if view.vs_ai else 'default')
        toggle = f"Random draft: {'On' if view.random_draft else 'Off'}"
        self._button(pygame.Rect(panel.x + 30, panel.y + 170, 320, 34), toggle, 'random_draft',
                     style='chosen' if view.random_draft else 'default', font=self.font_small)
