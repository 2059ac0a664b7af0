"""Conversation engine, its state, chat sessions and the setup sequence."""

from .engine import ConversationEngine
from .sessions import SessionActivated, SessionDeleted, SessionEvent, SessionManager, welcome_message
from .setup import SetupSequence
from .state import ConversationState, default_model

__all__ = [
    "ConversationEngine",
    "ConversationState",
    "SessionActivated",
    "SessionDeleted",
    "SessionEvent",
    "SessionManager",
    "SetupSequence",
    "default_model",
    "welcome_message",
]
