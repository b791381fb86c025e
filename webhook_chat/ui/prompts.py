"""Suggested prompts shown before the first message.

Choosing a prompt submits its text immediately.
"""

from pydantic import BaseModel


class PromptGroup(BaseModel):
    """A titled group of example prompts."""

    category: str
    items: list[str]


SUGGESTED_PROMPTS: list[PromptGroup] = [
    PromptGroup(
        category="General & High-Level",
        items=[
            "Can you give me a brief overview of your professional experience?",
            "Tell me about yourself and your background.",
            "What are your key technical skills?",
        ],
    ),
    PromptGroup(
        category="Project Deep Dives",
        items=[
            "Can you walk me through a project you're particularly proud of?",
            "Tell me about the most technically challenging project you've worked on.",
            "What was the business impact or result working at recent company?",
        ],
    ),
    PromptGroup(
        category="Behavioral & Career Goals",
        items=[
            "What are you looking for in your next role?",
            "What kind of team environment do you thrive in?",
            "How do you handle tight deadlines or high-pressure situations?",
        ],
    ),
]
