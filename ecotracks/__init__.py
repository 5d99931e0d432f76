"""
EcoTracks - Curriculum progression engine for gamified learning tracks.

Subpackages:
- schemas: Pydantic models for tracks, progress records and quizzes
- classroom: registry, progress store, unlock rules, quiz sessions
- viewer: HTML rendering helpers for the Streamlit app
- utils: catalog loading
"""

__version__ = "0.1.0"
