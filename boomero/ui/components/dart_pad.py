"""Dart pad — one button per board target and multiplier."""

from __future__ import annotations

import streamlit as st

from boomero.engine.base import DARTS_PER_TURN, DartKind

_MULTIPLIERS = {
    "Single": DartKind.SINGLE,
    "Double": DartKind.DOUBLE,
    "Triple": DartKind.TRIPLE,
}


def render_dart_pad(turns_left: int, disabled: bool = False) -> tuple[DartKind, int] | None:
    """Render the throw entry pad.

    Args:
        turns_left: Darts still to throw this turn, shown to the player.
        disabled: Grey out every button (dialog pending or game over).

    Returns:
        ``(kind, value)`` of the pressed target, or ``None``.
    """
    st.caption(f"Dart {DARTS_PER_TURN - max(turns_left, 1) + 1} of {DARTS_PER_TURN}")
    label = st.radio(
        "Multiplier",
        options=list(_MULTIPLIERS),
        horizontal=True,
        key="pad_multiplier",
        disabled=disabled,
        label_visibility="collapsed",
    )
    kind = _MULTIPLIERS[label]

    for start in (1, 6, 11, 16):
        cols = st.columns(5)
        for offset, col in enumerate(cols):
            number = start + offset
            with col:
                if st.button(
                    str(number),
                    key=f"pad_{number}",
                    use_container_width=True,
                    disabled=disabled,
                ):
                    return kind, number

    cols = st.columns(3)
    with cols[0]:
        if st.button("Bull (25)", key="pad_bull", use_container_width=True, disabled=disabled):
            return DartKind.BULLSEYE, 1
    with cols[1]:
        if st.button("Bull (50)", key="pad_dbull", use_container_width=True, disabled=disabled):
            return DartKind.BULLSEYE, 2
    with cols[2]:
        if st.button("Miss", key="pad_miss", use_container_width=True, disabled=disabled):
            return DartKind.MISS, 0
    return None
