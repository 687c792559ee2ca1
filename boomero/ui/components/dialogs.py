"""Decision dialogs — double/triple choice, circle choice and turn summary."""

from __future__ import annotations

import streamlit as st

from boomero.engine.base import TurnDarts
from boomero.engine.dialogs import (
    CircleChoice,
    DialogState,
    DoubleChoice,
    TripleChoice,
    TurnSummary,
)
from boomero.realtime.store import GameStore


def _dart_line(darts: TurnDarts) -> str:
    return "  ".join(d.label if d is not None else "—" for d in darts)


def render_dialog(dialog: DialogState, store: GameStore) -> bool:
    """Render the pending decision, if any, and forward the answer to the store.

    Returns:
        ``True`` if the player answered and the page should rerun.
    """
    if isinstance(dialog, (DoubleChoice, TripleChoice)):
        is_double = isinstance(dialog, DoubleChoice)
        word = "Double" if is_double else "Triple"
        resolve = store.resolve_double_choice if is_double else store.resolve_triple_choice
        hits = 2 if is_double else 3

        st.info(f"{word} {dialog.number}: score it on the {word.upper()} row or as {hits} hits on {dialog.number}?")
        cols = st.columns(3)
        with cols[0]:
            if st.button(f"{word}s category", key="dlg_category", type="primary", use_container_width=True):
                resolve(dialog.number, dialog.dart_index, True)
                return True
        with cols[1]:
            if st.button(f"{hits} × {dialog.number}", key="dlg_numbers", use_container_width=True):
                resolve(dialog.number, dialog.dart_index, False)
                return True
        with cols[2]:
            if st.button("Cancel dart", key="dlg_cancel", use_container_width=True):
                store.dismiss_dialog()
                return True
        return False

    if isinstance(dialog, CircleChoice):
        st.info(f"Circle! {_dart_line(dialog.darts)} — worth {dialog.points} points.")
        cols = st.columns(2)
        with cols[0]:
            if st.button("Score as circle", key="dlg_circle", type="primary", use_container_width=True):
                store.resolve_circle_choice(True)
                return True
        with cols[1]:
            if st.button("Keep as numbers", key="dlg_keep", use_container_width=True):
                store.resolve_circle_choice(False)
                return True
        return False

    if isinstance(dialog, TurnSummary):
        st.success(
            f"Player {dialog.current_player}: {_dart_line(dialog.darts)} — "
            f"{dialog.points_scored} points this turn"
        )
        cols = st.columns(2)
        with cols[0]:
            if st.button("Confirm turn", key="dlg_confirm", type="primary", use_container_width=True):
                store.confirm_turn()
                return True
        with cols[1]:
            if st.button("Reset turn", key="dlg_reset", use_container_width=True):
                store.reset_turn()
                return True
        return False

    return False
