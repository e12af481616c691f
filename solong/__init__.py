"""A tile-based puzzle game: map validation, game state, XPM loading and a pygame front end."""

__version__ = "0.1.0"