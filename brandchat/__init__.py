"""Brand Chat - a branded chat widget backed by a hosted language model.

Combines FastAPI for the streaming relay, Agno for model orchestration,
NiceGUI for the chat page, and Pydantic for data validation.

Components:
    - api: Chat relay, suggestions and health endpoints
    - agent: Model access, brand persona and suggestion parsing
    - ui: Chat page with incremental rendering and suggestion chips
    - models: Request/response schemas and conversation turns
"""

__version__ = "0.1.0"
