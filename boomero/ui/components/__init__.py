"""UI components for Boomero."""

from boomero.ui.components.dart_pad import render_dart_pad
from boomero.ui.components.dialogs import render_dialog
from boomero.ui.components.scoreboard import render_scoreboard

__all__ = [
    "render_dart_pad",
    "render_dialog",
    "render_scoreboard",
]
