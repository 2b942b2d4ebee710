"""Gita Pro - reveal a new Bhagavad Gita verse every day.

This package provides tools for:
- Fetching random verses from the Bhagavad Gita API
- Tracking which verses have already been revealed
- Saving revealed verses as lessons
"""

__version__ = "0.1.0"
