"""Boomero — Streamlit Application Entrypoint."""

from __future__ import annotations

import streamlit as st

from boomero.config.settings import configure_logging, get_settings
from boomero.database.snapshots import build_snapshot_store
from boomero.realtime.events import EventPayload
from boomero.realtime.store import GameStore

_RULES = """\
**Goal:** Close numbers 10-20 and every category, ahead on points.

**Closing:**
- Three hits close a row for you
- Further hits score the row's value while your opponent has not closed it
- Once both players close a row, it is dead

**Special rows:**
| Row | Hit by |
|---|---|
| DBL | A double (always for 1-9, by choice for 10-20) |
| TPL | A triple (always for 1-9, by choice for 10-20) |
| BULL | Bullseye (double bull = two hits) |
| CIRC | Three darts on the same target |
"""

_CSS = """
<style>
table.matrix { border-collapse: collapse; margin: 0 auto; }
table.matrix td, table.matrix th { padding: 2px 14px; text-align: center; }
table.matrix tr.closed { opacity: 0.4; text-decoration: line-through; }
</style>
"""


def _get_store() -> GameStore:
    """One store per browser session, with messages and events queued for the next run."""
    ss = st.session_state
    if "store" not in ss:
        store = GameStore(build_snapshot_store(get_settings()))
        messages: list[str] = ss.setdefault("_messages", [])
        events: list[EventPayload] = ss.setdefault("_events", [])
        store.messages.subscribe(messages.append)
        store.events.subscribe(events.append)
        ss["store"] = store
    return ss["store"]


def main() -> None:
    """Application entrypoint. Must call ``st.set_page_config`` first."""
    st.set_page_config(
        page_title="Boomero",
        page_icon="🎯",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    configure_logging(get_settings())
    st.markdown(_CSS, unsafe_allow_html=True)

    with st.sidebar:
        st.markdown("### Rules")
        st.markdown(_RULES)

    from boomero.ui.views.game import render_game_page
    render_game_page(_get_store())


if __name__ == "__main__":
    main()
