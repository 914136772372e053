"""Cached pygame fonts for the renderer."""
from typing import Dict, Tuple

import pygame

# Role -> (system font, size at 1.0 scale)
FONT_SPECS: Dict[str, Tuple[str, int]] = {
    'title': ('arial', 30),
    'large': ('arial', 22),
    'medium': ('arial', 17),
    'small': ('arial', 13),
    'piece': ('arial', 30),
    'clock': ('consolas', 24),
}


class FontManager:
    """Creates every role's font once.

    Usage:
        FontManager.init()  # after pygame.init()
        font = FontManager.get('clock')
    """

    _fonts: Dict[str, pygame.font.Font] = {}

    @classmethod
    def init(cls, scale: float = 1.0):
        if not pygame.font.get_init():
            pygame.font.init()
        cls._fonts = {
            role: pygame.font.SysFont(family, int(size * scale))
            for role, (family, size) in FONT_SPECS.items()
        }

    @classmethod
    def get(cls, role: str) -> pygame.font.Font:
        """Font for a role in FONT_SPECS. Unknown roles raise KeyError."""
        if not cls._fonts:
            cls.init()
        return cls._fonts[role]
