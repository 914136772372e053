"""UI helpers: cached fonts and stateless button drawing."""
from .fonts import FontManager, FONT_SPECS
from .components import ButtonStyle, BUTTON_STYLES, draw_button_simple

__all__ = ['FontManager', 'FONT_SPECS', 'ButtonStyle', 'BUTTON_STYLES', 'draw_button_simple']
