"""Integration tests for the relay endpoints and the page's HTTP client.

Requests go through httpx's ASGITransport into the real FastAPI app; only
the Agno agents behind the service are faked.
"""
