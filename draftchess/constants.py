"""Game constants and enums."""
from enum import Enum, auto


# Board dimensions
BOARD_ROWS = 5
BOARD_COLS = 5

# Rules
START_MS = 90_000        # 1.5 minutes per player
DRAFT_SIZE = 4           # Unique piece types each player drafts
TICK_MS = 100            # Clock resolution
AI_DELAY_MS = 400        # Simulated AI "thinking" time
MAX_LOG_MESSAGES = 100

PLAYER_NAMES = {1: "Player 1", 2: "Player 2"}

# Display settings
WINDOW_WIDTH = 1000
WINDOW_HEIGHT = 640
FPS = 60

CELL_SIZE = 104
BOARD_OFFSET_X = 40
BOARD_OFFSET_Y = 70
SIDEBAR_X = BOARD_OFFSET_X + BOARD_COLS * CELL_SIZE + 30
SIDEBAR_WIDTH = WINDOW_WIDTH - SIDEBAR_X - 20

# Colors
COLOR_BG = (30, 30, 40)
COLOR_BOARD_LIGHT = (70, 70, 82)
COLOR_BOARD_DARK = (50, 50, 60)
COLOR_GRID_LINE = (80, 80, 90)
COLOR_PLAYER1 = (70, 130, 180)  # Steel blue
COLOR_PLAYER2 = (180, 70, 70)   # Indian red
COLOR_CAPTAIN = (255, 215, 0)   # Gold
COLOR_FORTIFIED = (120, 220, 240)
COLOR_SELECTED = (255, 215, 0)
COLOR_MOVE_HIGHLIGHT = (100, 200, 100, 128)
COLOR_SPECIAL_HIGHLIGHT = (180, 100, 220, 150)
COLOR_CAPTURE_HIGHLIGHT = (200, 100, 100, 160)
COLOR_PLACEMENT_HIGHLIGHT = (220, 200, 90, 110)
COLOR_TEXT = (240, 240, 240)
COLOR_TEXT_DIM = (150, 150, 160)
COLOR_CLOCK_ACTIVE = (60, 110, 60)
COLOR_CLOCK_IDLE = (45, 45, 55)


class GamePhase(Enum):
    """Game phases."""
    DRAFT = auto()       # Alternating unique picks
    CAPTAIN = auto()     # Each side names a captain
    PLACEMENT = auto()   # Alternating placement on home rows
    PLAY = auto()        # Timed play
    GAME_OVER = auto()   # Terminal


class WinReason(Enum):
    """Why a game ended."""
    CAPTAIN_CAPTURED = "captain captured"
    TIME_EXPIRED = "time expiration"


def other_player(player: int) -> int:
    """Get the opponent's player number."""
    if player not in (1, 2):
        raise ValueError(f"Invalid player: {player}")
    return 2 if player == 1 else 1


def player_label(player: int) -> str:
    """Short label used in log lines ("P1"/"P2")."""
    return f"P{player}"
