"""Game page — dart pad, pending decisions and scoreboard."""

from __future__ import annotations

import streamlit as st

from boomero.engine.dialogs import NoDialog
from boomero.engine.scoring import ScoringEngine
from boomero.realtime.events import EventPayload, GameEvent
from boomero.realtime.store import GameStore
from boomero.ui.components.dart_pad import render_dart_pad
from boomero.ui.components.dialogs import render_dialog
from boomero.ui.components.scoreboard import render_scoreboard


def _show_messages() -> None:
    """Flush notices queued by the store since the last run."""
    queue: list[str] = st.session_state.setdefault("_messages", [])
    for message in queue:
        st.toast(message)
    queue.clear()


def _play_events() -> None:
    """Flush game events queued by the store; a won game gets a celebration."""
    queue: list[EventPayload] = st.session_state.setdefault("_events", [])
    if any(payload.event == GameEvent.GAME_WON for payload in queue):
        st.balloons()
    queue.clear()


def _render_game_over(store: GameStore) -> None:
    state = store.state
    winner = ScoringEngine.winner(state)
    if winner is None:
        st.header("Game over — it's a tie!")
    else:
        st.header(f"Game over — Player {winner} wins!")
    st.write(f"Final score: {state.player1_score} – {state.player2_score}")
    if st.button("New game", key="btn_new_game_over", type="primary"):
        store.new_game()
        st.rerun()


def render_game_page(store: GameStore) -> None:
    """Render the main game page."""
    _show_messages()
    _play_events()

    state = store.state
    dialog = store.dialog

    game_col, score_col = st.columns([3, 2])

    with score_col:
        render_scoreboard(state)
        if st.button("New game", key="btn_new_game"):
            store.new_game()
            st.rerun()

    with game_col:
        if state.is_game_over and isinstance(dialog, NoDialog):
            _render_game_over(store)
            return

        st.subheader(f"Player {state.current_player}'s Turn")
        darts = "  ".join(d.label if d is not None else "·" for d in state.current_turn_darts)
        st.markdown(f"**Darts:** {darts} &nbsp; **Turn points:** {state.points_this_turn}")

        if render_dialog(dialog, store):
            st.rerun()

        pressed = render_dart_pad(
            turns_left=state.turns_left,
            disabled=not isinstance(dialog, NoDialog),
        )
        if pressed is not None:
            kind, value = pressed
            store.throw_dart(kind, value)
            st.rerun()

        if state.recorded_darts and isinstance(dialog, NoDialog):
            if st.button("Reset turn", key="btn_reset_turn"):
                store.reset_turn()
                st.rerun()
