from __future__ import annotations

"""Inference backend contract.

A backend turns the conversation so far into the next assistant reply. The
local backend is a deterministic rule table; remote backends call a hosted
chat API and raise ``InferenceError`` on any failure.
"""

from typing import TYPE_CHECKING, Protocol, Sequence

from ..schemas.domain import Message

if TYPE_CHECKING:
    from ..conversation.state import ConversationState


class InferenceBackend(Protocol):
    async def complete(self, conversation: Sequence[Message], state: ConversationState) -> str:
        """
        Produce the assistant reply for ``conversation``.

        Args:
            conversation: Messages so far; the last one is the new user message.
            state: Mutable conversation state (mode, credentials, pending intents).

        Returns:
            The assistant reply text.
        """
        ...
