"""
EcoTracks Viewer - Rendering components for the Streamlit app.

This module provides:
- Quiz question, countdown and result rendering
- Lesson check question feedback
"""

from .quiz import (
    get_quiz_css,
    format_countdown,
    render_quiz_question,
    render_answer_feedback,
    render_quiz_result,
)

__all__ = [
    "get_quiz_css",
    "format_countdown",
    "render_quiz_question",
    "render_answer_feedback",
    "render_quiz_result",
]
