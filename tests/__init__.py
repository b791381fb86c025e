"""Test package for Webhook Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: Engine, transport, and host app workflows

Webhook traffic is simulated with httpx.MockTransport; no real network calls.
Leverages pytest with pytest-check for soft assertions.
"""
