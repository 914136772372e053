"""
Reusable UI components for consistent styling.
"""
import pygame
from typing import Tuple
from dataclasses import dataclass


@dataclass
class ButtonStyle:
    """Style configuration for buttons."""
    bg: Tuple[int, int, int] = (60, 60, 70)
    bg_hover: Tuple[int, int, int] = (80, 80, 90)
    bg_disabled: Tuple[int, int, int] = (40, 40, 45)
    border: Tuple[int, int, int] = (100, 100, 110)
    border_hover: Tuple[int, int, int] = (120, 120, 130)
    border_disabled: Tuple[int, int, int] = (70, 70, 80)
    text: Tuple[int, int, int] = (240, 240, 240)
    text_disabled: Tuple[int, int, int] = (100, 100, 110)
    border_width: int = 2
    border_radius: int = 4


# Predefined button styles
BUTTON_STYLES = {
    'default': ButtonStyle(),
    'primary': ButtonStyle(
        bg=(50, 100, 50),
        bg_hover=(60, 120, 60),
        border=(80, 150, 80),
    ),
    'p1': ButtonStyle(
        bg=(45, 75, 105),
        bg_hover=(60, 95, 130),
        border=(70, 130, 180),
    ),
    'p2': ButtonStyle(
        bg=(105, 45, 45),
        bg_hover=(130, 60, 60),
        border=(180, 70, 70),
    ),
    'chosen': ButtonStyle(
        bg=(110, 95, 30),
        bg_hover=(130, 115, 40),
        border=(255, 215, 0),
    ),
}


def draw_button_simple(
    surface: pygame.Surface,
    rect: pygame.Rect,
    text: str,
    font: pygame.font.Font,
    style: str = 'default',
    hovered: bool = False,
    enabled: bool = True,
) -> pygame.Rect:
    """
    Draw a button without tracking state (stateless utility).

    Args:
        surface: Surface to draw on
        rect: Button rectangle
        text: Button label
        font: Font for text
        style: Style name from BUTTON_STYLES
        hovered: Whether to draw in hovered state
        enabled: Disabled buttons are drawn greyed out

    Returns:
        The button rect (for click detection)
    """
    btn_style = BUTTON_STYLES.get(style, BUTTON_STYLES['default'])

    if not enabled:
        bg, border, text_color = btn_style.bg_disabled, btn_style.border_disabled, btn_style.text_disabled
    elif hovered:
        bg, border, text_color = btn_style.bg_hover, btn_style.border_hover, btn_style.text
    else:
        bg, border, text_color = btn_style.bg, btn_style.border, btn_style.text

    pygame.draw.rect(surface, bg, rect, border_radius=btn_style.border_radius)
    if btn_style.border_width > 0:
        pygame.draw.rect(surface, border, rect, btn_style.border_width,
                         border_radius=btn_style.border_radius)

    # Draw text centered
    text_surface = font.render(text, True, text_color)
    text_x = rect.x + (rect.width - text_surface.get_width()) // 2
    text_y = rect.y + (rect.height - text_surface.get_height()) // 2
    surface.blit(text_surface, (text_x, text_y))

    return rect
