"""Page views for Boomero."""

from boomero.ui.views.game import render_game_page

__all__ = ["render_game_page"]
