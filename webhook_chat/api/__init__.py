"""FastAPI host for the chat client.

Serves the NiceGUI interface and a health endpoint for container probes.

Endpoints:
    - GET /health: Service health status
    - GET /: Chat interface (mounted by NiceGUI)
"""

from webhook_chat.api.app import app, create_app

__all__ = ["app", "create_app"]
