"""Wasteland: world generation, navigation and faction AI for a hex-map strategy game."""

__version__ = "0.1.0"
