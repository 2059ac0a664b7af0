"""Inference backends: the local rule table and hosted chat APIs."""

from .base import InferenceBackend
from .local import LocalInference, Rule
from .remote import AnthropicChatBackend, OpenAIChatBackend, RemoteChatBackend

__all__ = [
    "InferenceBackend",
    "LocalInference",
    "Rule",
    "AnthropicChatBackend",
    "OpenAIChatBackend",
    "RemoteChatBackend",
]
