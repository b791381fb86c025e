"""Integration tests for engine, transport, and host application."""
