"""Conversation engine.

Routes each user message to the active inference backend and keeps the
in-memory history for the active session.

Behavior
--------

- In local mode the rule table answers directly.
- In remote mode the matching hosted backend answers; any failure of that
  call is logged and the local rule table answers the same text instead,
  so ``send_message`` never raises for remote failures.
- A turn whose local reply fails is answered with a short error text, so
  every user message in the history is followed by an assistant message.
- Provider selection is persisted as the ``llm_provider``, ``llm_api_key``
  and ``llm_model`` settings and every switch appends a system log entry.
- One turn at a time: ``send_message`` holds an ``asyncio.Lock``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Optional

from ..inference import prompts
from ..inference.base import InferenceBackend
from ..inference.local import LocalInference
from ..repos.interfaces import LogRepository, SettingsRepository
from ..schemas.domain import (
    SYSTEM_AGENT_ID,
    InferenceMode,
    LogStatus,
    Message,
    MessageRole,
    SettingKey,
)
from .sessions import SessionActivated, SessionDeleted, SessionEvent
from .state import ConversationState

logger = logging.getLogger(__name__)


class ConversationEngine:
    def __init__(
        self,
        *,
        settings: SettingsRepository,
        logs: LogRepository,
        local: LocalInference,
        remotes: Mapping[InferenceMode, InferenceBackend],
    ) -> None:
        self._settings = settings
        self._logs = logs
        self._local = local
        self._remotes = dict(remotes)
        self.state = ConversationState()
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Restore the provider selection from settings.

        Both a provider and an API key must be stored for a remote mode;
        anything else, including an unreadable store or an unknown provider
        name, starts in local mode.
        """
        try:
            provider = await self._settings.get(SettingKey.llm_provider.value)
            api_key = await self._settings.get(SettingKey.llm_api_key.value)
            model = await self._settings.get(SettingKey.llm_model.value)
        except Exception as e:
            logger.warning(f"Could not read saved LLM settings, using local mode: {e}")
            self.state.use_local()
            return

        if not (provider and api_key):
            self.state.use_local()
            return
        try:
            mode = InferenceMode(provider)
        except ValueError:
            logger.warning(f"Unknown saved LLM provider '{provider}', using local mode")
            self.state.use_local()
            return
        if mode is InferenceMode.local:
            self.state.use_local()
            return
        self.state.use_remote(mode, api_key, model)
        logger.info(f"Restored LLM provider {mode.value} (model={self.state.model})")

    def get_mode(self) -> InferenceMode:
        return self.state.mode

    @property
    def model_name(self) -> str:
        return self.state.model_name

    async def switch_provider(self, provider: InferenceMode | str, api_key: str, model: Optional[str] = None) -> None:
        """Select a hosted provider and persist the choice.

        Raises:
            ValueError: If ``api_key`` is blank for a hosted provider.
        """
        mode = InferenceMode(provider)
        if mode is InferenceMode.local:
            await self.switch_to_local()
            return
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValueError(f"An API key is required for {mode.value}")
        self.state.use_remote(mode, api_key, model)
        await self._settings.set(SettingKey.llm_provider.value, mode.value)
        await self._settings.set(SettingKey.llm_api_key.value, api_key)
        await self._settings.set(SettingKey.llm_model.value, self.state.model or "")
        await self._logs.add(
            SYSTEM_AGENT_ID,
            f"LLM switched to {mode.value}",
            LogStatus.success,
            f"Model: {self.state.model}",
            "",
        )
        logger.info(f"LLM switched to {mode.value} (model={self.state.model})")

    async def switch_to_local(self) -> None:
        """Return to the local rule table and forget stored credentials."""
        self.state.use_local()
        for key in SettingKey:
            try:
                await self._settings.delete(key.value)
            except Exception as e:
                logger.warning(f"Could not delete setting {key.value}: {e}")
        await self._logs.add(SYSTEM_AGENT_ID, "LLM switched to local (Phi-3)", LogStatus.success, "", "")
        logger.info("LLM switched to local")

    async def send_message(self, text: str) -> str:
        async with self._lock:
            self.state.history.append(Message(role=MessageRole.user, content=text))
            reply = await self._infer(text)
            self.state.history.append(Message(role=MessageRole.assistant, content=reply))
            return reply

    async def _infer(self, text: str) -> str:
        backend = self._remotes.get(self.state.mode) if self.state.is_remote else None
        if backend is not None:
            try:
                return await backend.complete(self.state.history, self.state)
            except Exception as e:
                logger.warning(f"{self.state.mode.value} inference failed, falling back to local: {e}")
        try:
            return await self._local.reply(text, self.state)
        except Exception as e:
            logger.error(f"Local inference failed for this turn: {e}", exc_info=True)
            return prompts.TURN_FAILED.format(error=e)

    def clear_history(self) -> None:
        self.state.reset()

    def handle_session_event(self, event: SessionEvent) -> None:
        """Reset the conversation whenever the active session changes."""
        if isinstance(event, SessionActivated) or (isinstance(event, SessionDeleted) and event.was_active):
            self.clear_history()
