"""
Moodify

Mood detection from spoken or typed phrases, and mood-matched playlists
served over a small FastAPI backend.
"""

__version__ = "1.0.0"
