"""Render pipeline for assistant and user message content.

The output of RenderPipeline.render is the only HTML that may be injected
into the page. Message content must never be injected directly.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

import markdown2
import nh3

logger = logging.getLogger(__name__)

T = TypeVar("T")

# GitHub-flavoured behaviour: single newlines become <br>.
MARKDOWN_EXTRAS: dict[str, dict[str, bool] | None] = {
    "breaks": {"on_newline": True},
    "fenced-code-blocks": None,
    "tables": None,
    "strike": None,
    "cuddled-lists": None,
    "task_list": None,
}

# Task list checkboxes are the only form control allowed through.
SANITIZER_TAGS = nh3.ALLOWED_TAGS | {"input"}
SANITIZER_ATTRIBUTES = {**nh3.ALLOWED_ATTRIBUTES, "input": {"type", "checked", "disabled"}}


def escape_html(raw: str) -> str:
    """Escape the five HTML-significant characters."""
    return (
        raw.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def preformatted(raw: str) -> str:
    """Render text literally inside a <pre> block."""
    return f"<pre>\n{escape_html(raw)}\n</pre>"


class Capability(Generic[T]):
    """A lazily loaded rendering resource with a one-way readiness flag.

    Readiness only moves from not-ready to ready, so the render path can
    read it without locking.
    """

    def __init__(self, name: str, loader: Callable[[], T]) -> None:
        self.name = name
        self._loader = loader
        self._value: T | None = None
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def value(self) -> T | None:
        return self._value

    def load(self) -> bool:
        """Run the loader synchronously.

        Returns:
            Whether the capability is ready afterwards.
        """
        if self._ready:
            return True
        try:
            value = self._loader()
        except Exception as e:
            logger.warning(f"Render capability '{self.name}' failed to load: {e}")
            return False
        self._value = value
        self._ready = True
        logger.info(f"Render capability '{self.name}' ready")
        return True

    async def resolve(self) -> bool:
        """Load the capability without blocking the event loop."""
        if self._ready:
            return True
        return await asyncio.to_thread(self.load)


class MarkdownFormatter:
    """markdown2 converters for trusted and untrusted output paths.

    When no sanitizer is available, raw HTML embedded in the markdown is
    escaped instead of passed through.
    """

    def __init__(self) -> None:
        self._html = markdown2.Markdown(extras=MARKDOWN_EXTRAS)
        self._escaped = markdown2.Markdown(extras=MARKDOWN_EXTRAS, safe_mode="escape")

    def convert(self, text: str, *, allow_html: bool = True) -> str:
        converter = self._html if allow_html else self._escaped
        return str(converter.convert(text))


def _checkbox_only(tag: str, attribute: str, value: str) -> str | None:
    if tag == "input" and attribute == "type" and value != "checkbox":
        return None
    return value


def sanitize_html(html: str) -> str:
    """Strip script-capable markup, keeping nh3 defaults plus task list checkboxes."""
    return nh3.clean(
        html,
        tags=SANITIZER_TAGS,
        attributes=SANITIZER_ATTRIBUTES,
        attribute_filter=_checkbox_only,
    )


class RenderPipeline:
    """Turns markdown text into display-safe HTML."""

    def __init__(
        self,
        formatter: Capability[MarkdownFormatter],
        sanitizer: Capability[Callable[[str], str]],
    ) -> None:
        self.formatter = formatter
        self.sanitizer = sanitizer
        self._warned_unsanitized = False

    async def resolve_all(self) -> None:
        """Resolve both capabilities concurrently."""
        await asyncio.gather(self.formatter.resolve(), self.sanitizer.resolve())

    def render(self, markdown_text: str) -> str:
        """Render markdown to HTML safe for injection.

        Args:
            markdown_text: Untrusted message content.

        Returns:
            HTML fragment. Falls back to escaped preformatted text when
            formatting is unavailable or fails.
        """
        sanitizer = self.sanitizer.value if self.sanitizer.ready else None
        try:
            if self.formatter.ready and self.formatter.value is not None:
                html = self.formatter.value.convert(markdown_text, allow_html=sanitizer is not None)
            else:
                html = preformatted(markdown_text)

            if sanitizer is not None:
                return sanitizer(html)

            if not self._warned_unsanitized:
                logger.warning("Rendering without sanitizer; raw HTML in replies is escaped")
                self._warned_unsanitized = True
            return html
        except Exception as e:
            logger.debug(f"Markdown rendering failed, using plain text: {e}")
            return preformatted(markdown_text)


def default_pipeline() -> RenderPipeline:
    """Create a pipeline with unresolved markdown2 and nh3 capabilities."""
    return RenderPipeline(
        formatter=Capability("markdown", MarkdownFormatter),
        sanitizer=Capability("sanitizer", lambda: sanitize_html),
    )


# Module-level singleton instance
_render_pipeline: RenderPipeline | None = None


def get_render_pipeline() -> RenderPipeline:
    """Get or create the global render pipeline.

    Returns:
        The shared RenderPipeline instance.
    """
    global _render_pipeline
    if _render_pipeline is None:
        _render_pipeline = default_pipeline()
    return _render_pipeline
