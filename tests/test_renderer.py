"""Tests for the renderer's button registry and the mode prompt."""
import pygame
import pytest

from draftchess.renderer import Renderer, ViewState
from draftchess.ui import FONT_SPECS, FontManager

PROMPT_ACTIONS = {'mode_local', 'mode_ai', 'random_draft'}


@pytest.fixture
def renderer(monkeypatch):
    """Renderer on a hidden window at the base resolution."""
    monkeypatch.setenv('SDL_VIDEODRIVER', 'dummy')
    pygame.init()
    window = pygame.display.set_mode((Renderer.BASE_WIDTH, Renderer.BASE_HEIGHT))
    yield Renderer(window)
    pygame.quit()


def actions(renderer):
    return {hit.action for hit in renderer.buttons}


class TestModePrompt:
    """Test that the prompt is modal."""

    def test_only_prompt_buttons_while_open(self, renderer, new_game):
        """Draft buttons under the overlay are not clickable."""
        renderer.draw(new_game, ViewState())
        assert actions(renderer) == PROMPT_ACTIONS

    def test_covered_pick_button_not_hit(self, renderer, new_game):
        """A click where a pick button sits does not reach it."""
        renderer.draw(new_game, ViewState(mode_prompt=False))
        pick = next(hit for hit in renderer.buttons if hit.action == 'pick')

        renderer.draw(new_game, ViewState())
        hit = renderer.get_clicked_button(*pick.rect.center)
        assert hit is None or hit.action in PROMPT_ACTIONS

    def test_draft_buttons_after_close(self, renderer, new_game):
        renderer.draw(new_game, ViewState(mode_prompt=False))
        assert 'pick' in actions(renderer)
        assert not actions(renderer) & PROMPT_ACTIONS

    def test_saved_mode_highlighted(self, renderer, new_game):
        """The remembered vs-AI choice is the primary button."""
        view = ViewState.from_settings({"vs_ai": True, "random_draft": True})
        assert view.random_draft
        renderer.draw(new_game, view)
        styles = {hit.action: hit.style for hit in renderer.buttons}
        assert styles['mode_ai'] == 'primary'
        assert styles['mode_local'] == 'default'
        assert styles['random_draft'] == 'chosen'

    def test_local_highlighted_by_default(self, renderer, new_game):
        renderer.draw(new_game, ViewState.from_settings({}))
        styles = {hit.action: hit.style for hit in renderer.buttons}
        assert styles['mode_local'] == 'primary'
        assert styles['mode_ai'] == 'default'


class TestFonts:
    """Test the font cache."""

    def test_every_role_loaded(self, renderer):
        for role in FONT_SPECS:
            assert FontManager.get(role).get_height() > 0

    def test_unknown_role(self, renderer):
        with pytest.raises(KeyError):
            FontManager.get('huge')
