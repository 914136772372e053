"""Pytest fixtures for Draft Chess testing."""
import random

import pytest

from draftchess.clock import ManualTimeSource
from draftchess.constants import GamePhase
from draftchess.game import Game
from draftchess.piece import Piece


@pytest.fixture
def fake_time() -> ManualTimeSource:
    """Millisecond clock that only moves when advanced."""
    return ManualTimeSource()


@pytest.fixture
def new_game(fake_time) -> Game:
    """A fresh game in the draft phase with a seeded rng."""
    return Game(time_source=fake_time, rng=random.Random(0))


@pytest.fixture
def game(new_game: Game) -> Game:
    """Create a game in PLAY phase with an empty board.

    Player 1 is to move and their clock is running.
    Use the place fixture to add pieces.
    """
    g = new_game
    g.phase = GamePhase.PLAY
    g.active_player = 1
    g.clock.start(1)
    return g


@pytest.fixture
def place(game: Game):
    """Factory fixture to put pieces straight onto the board.

    Usage:
        warrior = place('warrior', player=1, row=2, col=2)
        captain = place('sentinel', player=2, row=0, col=0, captain=True)
    """
    def _place(type_id: str, player: int, row: int, col: int,
               captain: bool = False, fortified: int = 0) -> Piece:
        piece = game.create_piece(type_id, player)
        piece.is_captain = captain
        piece.fortified_turns_left = fortified
        assert game.board.place_piece(piece, row, col)
        return piece

    return _place


# Default drafts used by the phase fixtures (draft order)
P1_DRAFT = ['warrior', 'mage', 'rogue', 'sentinel']
P2_DRAFT = ['ranger', 'mage', 'rogue', 'sentinel']


def run_draft(g: Game, p1=P1_DRAFT, p2=P2_DRAFT):
    for p1_pick, p2_pick in zip(p1, p2):
        assert g.pick(p1_pick)
        assert g.pick(p2_pick)


def run_placement(g: Game):
    """Place both benches left to right, alternating."""
    while g.phase == GamePhase.PLACEMENT:
        player = g.placement_player
        piece = g.players[player].bench[0]
        row = g.board.home_row(player)
        col = next(c for c in range(g.board.cols) if g.board.is_empty(row, c))
        assert g.select_bench_piece(piece.id)
        assert g.place_at(row, col)


@pytest.fixture
def captain_game(new_game: Game) -> Game:
    """A game that has just finished drafting."""
    run_draft(new_game)
    return new_game


@pytest.fixture
def placement_game(captain_game: Game) -> Game:
    """A game at the start of placement (captains: P1 warrior, P2 sentinel)."""
    assert captain_game.confirm_captains('warrior', 'sentinel')
    return captain_game


@pytest.fixture
def started_game(placement_game: Game) -> Game:
    """A game that went through draft and placement and is now in PLAY."""
    run_placement(placement_game)
    return placement_game
