"""Validation display component for showing form validation results."""

import streamlit as st

from ...analysis import ValidationResult
from ...models import ValidationError


def render_validation(result: ValidationResult, success_message: str = "") -> None:
    """
    Render validation results with errors and warnings.

    Args:
        result: Validation result to display.
        success_message: Shown when there is nothing to report.
    """
    if result.is_valid and not result.warnings:
        if success_message:
            st.success(success_message)
        return

    for error in result.errors:
        st.error(f"❌ {error.message}")

    for warning in result.warnings:
        st.warning(f"⚠️ {warning}")


def render_error(error: ValidationError) -> None:
    """Show every violation carried by a rejected operation."""
    for violation in error.violations:
        st.error(f"❌ {violation.message}")
