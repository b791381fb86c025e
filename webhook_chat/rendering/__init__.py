"""Reply rendering - markdown to sanitized HTML.

Formatting (markdown2) and sanitization (nh3) are independent capabilities
resolved at startup. Rendering works before either is ready, degrading to
escaped preformatted text, and never raises.
"""

from webhook_chat.rendering.pipeline import (
    Capability,
    MarkdownFormatter,
    RenderPipeline,
    default_pipeline,
    escape_html,
    get_render_pipeline,
    preformatted,
)

__all__ = [
    "Capability",
    "MarkdownFormatter",
    "RenderPipeline",
    "default_pipeline",
    "escape_html",
    "get_render_pipeline",
    "preformatted",
]
