"""NiceGUI interface - thin presentation layer for the chat widget.

Responsibilities:
    - Chat bubbles with incremental rendering of streamed replies
    - Suggestion chips (defaults on load, follow-ups after each reply)
    - Viewport-aware chip count

Contains no model logic. Talks to the relay over HTTP only.
"""
