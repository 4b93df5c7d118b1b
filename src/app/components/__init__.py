"""Reusable UI components for the score tracker."""

from .round_form import ordinal, rank_options, render_round_form
from .scoreboard import format_points, rename_target, render_scoreboard, winner_banner
from .validation_display import render_error, render_validation

__all__ = [
    "format_points",
    "ordinal",
    "rank_options",
    "render_error",
    "render_round_form",
    "rename_target",
    "render_scoreboard",
    "render_validation",
    "winner_banner",
]
