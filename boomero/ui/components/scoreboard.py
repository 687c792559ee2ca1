"""Scoreboard component — scores, turn indicator and the hit matrix."""

from __future__ import annotations

import streamlit as st

from boomero.engine.base import CLOSED_AT, Category, GameState
from boomero.engine.scoring import ScoringEngine

_MARKS = {0: "", 1: "/", 2: "X", 3: "&#9711;"}


def _marks(hits: int) -> str:
    """Board marks for a hit counter; hits past closing are shown as a count."""
    if hits <= CLOSED_AT:
        return _MARKS[hits]
    return f"&#9711; +{hits - CLOSED_AT}"


def render_scoreboard(state: GameState) -> None:
    """Render both players' scores and the 24-row hit matrix.

    Args:
        state: Current game state.
    """
    score_cols = st.columns(2)
    for player, col in zip((1, 2), score_cols):
        with col:
            active = player == state.current_player and not state.is_game_over
            label = f"{'&#127919; ' if active else ''}Player {player}"
            delta = state.points_this_turn if active and state.points_this_turn else None
            st.markdown(f"**{label}**", unsafe_allow_html=True)
            st.metric(
                label=f"Player {player} score",
                value=state.score_of(player),
                delta=f"+{delta}" if delta else None,
                label_visibility="collapsed",
            )

    html = ['<table class="matrix">']
    html.append("<tr><th>P1</th><th></th><th>P2</th></tr>")
    for row in range(Category.ROW_COUNT):
        p1, p2 = state.hits(row, 1), state.hits(row, 2)
        closed = p1 >= CLOSED_AT and p2 >= CLOSED_AT
        row_class = ' class="closed"' if closed else ""
        html.append(
            f"<tr{row_class}>"
            f"<td>{_marks(p1)}</td>"
            f"<th>{ScoringEngine.category_label(row)}</th>"
            f"<td>{_marks(p2)}</td>"
            "</tr>"
        )
    html.append("</table>")
    st.markdown("".join(html), unsafe_allow_html=True)
