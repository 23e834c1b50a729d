"""Test package for the brand chat widget.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP workflow tests against the ASGI app

Model calls are replaced by in-process fakes, so no test needs network
access or a real API key. Leverages pytest with pytest-check for soft
assertions.
"""
