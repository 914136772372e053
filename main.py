"""
Draft Chess
Hot-seat or vs-AI play on the same computer.
"""
import logging
import sys

import pygame

from draftchess.constants import FPS, GamePhase
from draftchess.commands import (
    cmd_pick, cmd_nominate_captain, cmd_select_bench_piece, cmd_click_square,
    cmd_deselect, cmd_toggle_special, cmd_activate_self_special,
    cmd_random_draft, cmd_restart,
)
from draftchess.match import LocalMatch
from draftchess.renderer import Renderer, ViewState
from draftchess.settings import load_settings, set_mode_defaults

logger = logging.getLogger(__name__)

# Buttons that work while the mode prompt is open
PROMPT_ACTIONS = ('mode_local', 'mode_ai', 'random_draft')


# =============================================================================
# CLICK HANDLING HELPERS
# =============================================================================

def send_command(match: LocalMatch, view: ViewState, cmd) -> bool:
    """Submit a command and show the rejection reason, if any."""
    result = match.submit(cmd)
    view.status = "" if result.accepted else (result.error or "")
    return result.accepted


def acting_player(match: LocalMatch) -> int:
    """Hot-seat input always acts for whoever holds the turn."""
    return match.game.current_player or 1


def start_mode(match: LocalMatch, view: ViewState, vs_ai: bool):
    """Close the mode prompt and set up the chosen mode."""
    view.mode_prompt = False
    view.vs_ai = vs_ai
    if view.random_draft:
        send_command(match, view, cmd_random_draft(1))
    match.set_ai(1, False)
    match.set_ai(2, vs_ai)
    set_mode_defaults(vs_ai, view.random_draft)
    logger.info("Starting %s game (random draft: %s)", "vs AI" if vs_ai else "local", view.random_draft)


def handle_button(match: LocalMatch, view: ViewState, action: str, payload):
    game = match.game

    if action == 'mode_local':
        start_mode(match, view, vs_ai=False)
    elif action == 'mode_ai':
        start_mode(match, view, vs_ai=True)
    elif action == 'random_draft':
        view.random_draft = not view.random_draft

    elif action == 'pick':
        send_command(match, view, cmd_pick(acting_player(match), payload))
    elif action == 'captain':
        player, type_id = payload
        view.captain_choices[player] = type_id
    elif action == 'confirm_captains':
        # Both sides nominate; the second nomination confirms
        for player in (1, 2):
            if game.ai_enabled.get(player):
                continue
            if not send_command(match, view, cmd_nominate_captain(player, view.captain_choices[player])):
                break
    elif action == 'bench':
        send_command(match, view, cmd_select_bench_piece(acting_player(match), payload))

    elif action == 'special':
        send_command(match, view, cmd_toggle_special(acting_player(match)))
    elif action == 'self_special':
        send_command(match, view, cmd_activate_self_special(acting_player(match)))

    elif action == 'restart':
        send_command(match, view, cmd_restart())
        view.mode_prompt = True
        view.captain_choices = {1: None, 2: None}


def handle_left_click(match: LocalMatch, renderer: Renderer, view: ViewState, mx: int, my: int):
    hit = renderer.get_clicked_button(mx, my)
    if hit is not None and (not view.mode_prompt or hit.action in PROMPT_ACTIONS):
        handle_button(match, view, hit.action, hit.payload)
        return
    if view.mode_prompt:
        return

    cell = renderer.get_cell_at(mx, my)
    if cell is not None:
        row, col = cell
        send_command(match, view, cmd_click_square(acting_player(match), row, col))


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    pygame.init()
    pygame.display.set_caption("Draft Chess")
    width, height = settings["resolution"]
    flags = pygame.FULLSCREEN if settings["fullscreen"] else pygame.RESIZABLE
    window = pygame.display.set_mode((width, height), flags)
    clock = pygame.time.Clock()

    match = LocalMatch(time_source=pygame.time.get_ticks, ai_delay_ms=settings["ai_delay_ms"])
    renderer = Renderer(window)
    view = ViewState.from_settings(settings)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.VIDEORESIZE and not settings["fullscreen"]:
                window = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                renderer.handle_resize(window)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE and match.game.phase == GamePhase.PLAY:
                    send_command(match, view, cmd_deselect(acting_player(match)))

            elif event.type == pygame.MOUSEMOTION:
                renderer.set_mouse_pos(*event.pos)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                mx, my = renderer.screen_to_game_coords(*event.pos)
                if event.button == 1:
                    handle_left_click(match, renderer, view, mx, my)
                elif event.button == 3 and match.game.selection is not None:
                    send_command(match, view, cmd_deselect(acting_player(match)))

        match.update()
        renderer.draw(match.game, view)
        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
