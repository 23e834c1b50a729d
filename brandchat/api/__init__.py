"""FastAPI endpoints for the chat relay.

Endpoints:
    - POST /api/chat: Chunked plain-text relay of the model's reply
    - POST /api/suggest: Follow-up question suggestions
    - GET /api/health: Service health status
    - GET /api/debug-env: Non-secret configuration report
"""

from brandchat.api.app import app, create_app

__all__ = ["app", "create_app"]
