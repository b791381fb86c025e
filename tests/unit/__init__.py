"""Unit tests for individual components in isolation.

Coverage:
    - session/: Identity generation on both random sources
    - parsing/: Reply extraction precedence
    - rendering/: Markdown, sanitization, and fallbacks
    - config: Environment-driven configuration
"""
