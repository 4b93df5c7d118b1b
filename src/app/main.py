"""Main Streamlit application entry point."""

import sys
from pathlib import Path

# Add project root to path for direct execution
_project_root = Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import streamlit as st

from src.app.pages import game
from src.config import configure_logging


def main() -> None:
    """Run the main application."""
    configure_logging()
    st.set_page_config(
        page_title="Game Score Tracker",
        page_icon="🏆",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    game.render()


if __name__ == "__main__":
    main()
