"""Draft Chess - a two-player draft-and-captain chess variant on a 5x5 board."""
from .version import __version__

__all__ = ['__version__']
