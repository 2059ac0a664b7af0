from __future__ import annotations

"""Mutable per-conversation state owned by the ConversationEngine.

The state is never persisted with a Session; it is reset whenever the active
session changes.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..schemas.domain import AgentConfig, InferenceMode, Message

DEFAULT_MODELS = {
    InferenceMode.openai: "gpt-4o-mini",
    InferenceMode.anthropic: "claude-3-haiku-20240307",
    InferenceMode.local: "phi-3-mini",
}

MODEL_DISPLAY_NAMES = {
    InferenceMode.local: "Phi-3 Mini (Local)",
    InferenceMode.openai: "GPT-4o Mini",
    InferenceMode.anthropic: "Claude 3 Haiku",
}


def default_model(mode: InferenceMode) -> str:
    return DEFAULT_MODELS[mode]


@dataclass
class ConversationState:
    """Inference mode, credentials and the two pending-intent flags.

    ``api_key`` is set iff ``mode`` is a remote provider.
    ``pending_setup_confirmation`` and ``drafted_agent`` drive the
    multi-turn rules of local inference.
    """

    mode: InferenceMode = InferenceMode.local
    api_key: Optional[str] = None
    model: Optional[str] = None
    pending_setup_confirmation: bool = False
    drafted_agent: Optional[AgentConfig] = None
    history: List[Message] = field(default_factory=list)

    @property
    def is_remote(self) -> bool:
        return self.mode is not InferenceMode.local and bool(self.api_key)

    @property
    def model_name(self) -> str:
        """Display name of the active model."""
        if self.mode is InferenceMode.local:
            return MODEL_DISPLAY_NAMES[InferenceMode.local]
        return self.model or MODEL_DISPLAY_NAMES[self.mode]

    def use_local(self) -> None:
        self.mode = InferenceMode.local
        self.api_key = None
        self.model = default_model(InferenceMode.local)

    def use_remote(self, mode: InferenceMode, api_key: str, model: Optional[str] = None) -> None:
        self.mode = mode
        self.api_key = api_key
        self.model = model or default_model(mode)

    def reset(self) -> None:
        """Drop the history and both pending-intent flags."""
        self.history = []
        self.pending_setup_confirmation = False
        self.drafted_agent = None
