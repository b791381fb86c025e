"""NiceGUI interface - thin visualization layer for the conversation engine.

Responsibilities:
    - Chat message display through the render pipeline
    - Suggested prompts for an empty conversation
    - Enter-to-send input with Shift+Enter for newlines
    - Pending indicator and error display

Contains no business logic. Delegates all state changes to the engine.
"""
