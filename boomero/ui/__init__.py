"""Streamlit presentation layer for Boomero."""
