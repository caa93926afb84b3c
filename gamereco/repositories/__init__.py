"""
Repository layer for the game catalog.
"""

from .game_repository import GameRepository

__all__ = ["GameRepository"]
