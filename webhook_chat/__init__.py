"""Webhook Chat - conversational web client for a single text-generation webhook.

Combines NiceGUI for the chat interface, httpx for the webhook protocol,
markdown2 and nh3 for safe reply rendering, and Pydantic for data validation.

Components:
    - session: per-client session identity
    - parsing: reply extraction from heterogeneous webhook payloads
    - transport: HTTP protocol with the webhook endpoint
    - rendering: markdown formatting and sanitization of replies
    - engine: conversation state machine
    - api: FastAPI host application
    - ui: Web interface for chat interactions
    - models: message and request schemas
"""

__version__ = "0.1.0"
