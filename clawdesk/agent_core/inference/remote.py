"""Remote chat-API inference backends.

Both backends send the fixed system instruction plus a trailing window of
the conversation, and raise ``InferenceError`` for non-2xx responses,
transport failures and malformed bodies. Every request carries an explicit
deadline.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Sequence

import httpx

from ..errors import InferenceError
from ..schemas.domain import InferenceMode, Message
from .prompts import SYSTEM_PROMPT

if TYPE_CHECKING:
    from ..conversation.state import ConversationState

logger = logging.getLogger(__name__)

MAX_TOKENS = 1024
DEFAULT_HISTORY_WINDOW = 20


class RemoteChatBackend:
    """Shared request/response handling for hosted chat APIs."""

    mode: InferenceMode
    label: str = "Remote"
    path: str = ""

    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        base_url: str,
        model: str,
        timeout: float = 30.0,
        history_window: int = DEFAULT_HISTORY_WINDOW,
    ) -> None:
        self._client = client
        self._url = base_url.rstrip("/") + self.path
        self._default_model = model
        self._timeout = timeout
        self._history_window = history_window

    def window(self, conversation: Sequence[Message]) -> List[Dict[str, str]]:
        return [m.as_payload() for m in list(conversation)[-self._history_window :]]

    def build_headers(self, api_key: str) -> Dict[str, str]:
        raise NotImplementedError

    def build_body(self, messages: List[Dict[str, str]], model: str) -> Dict[str, Any]:
        raise NotImplementedError

    def parse_reply(self, data: Any) -> str:
        raise NotImplementedError

    async def complete(self, conversation: Sequence[Message], state: ConversationState) -> str:
        if not state.api_key:
            raise InferenceError(f"{self.label} API key is not configured")
        model = state.model or self._default_model
        body = self.build_body(self.window(conversation), model)

        logger.debug(f"Calling {self.label} chat API: model={model}, messages={len(body['messages'])}")
        try:
            response = await self._client.post(
                self._url,
                json=body,
                headers=self.build_headers(state.api_key),
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise InferenceError(f"{self.label} API request failed: {e}", details=e) from e

        if not response.is_success:
            raise InferenceError(
                f"{self.label} API error: {response.status_code} {response.text}",
                status_code=response.status_code,
                details=response.text,
            )

        try:
            reply = self.parse_reply(response.json())
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise InferenceError(f"{self.label} API returned a malformed body: {e}", details=response.text) from e
        if not isinstance(reply, str):
            raise InferenceError(f"{self.label} API returned a non-text reply", details=response.text)
        return reply


class OpenAIChatBackend(RemoteChatBackend):
    """OpenAI chat-completions API."""

    mode = InferenceMode.openai
    label = "OpenAI"
    path = "/chat/completions"

    def build_headers(self, api_key: str) -> Dict[str, str]:
        return {"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"}

    def build_body(self, messages: List[Dict[str, str]], model: str) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": "system", "content": SYSTEM_PROMPT}, *messages],
            "max_tokens": MAX_TOKENS,
            "temperature": 0.7,
        }

    def parse_reply(self, data: Any) -> str:
        return data["choices"][0]["message"]["content"]


class AnthropicChatBackend(RemoteChatBackend):
    """Anthropic messages API."""

    mode = InferenceMode.anthropic
    label = "Anthropic"
    path = "/messages"

    def __init__(self, *, api_version: str = "2023-06-01", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._api_version = api_version

    def build_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": self._api_version,
        }

    def build_body(self, messages: List[Dict[str, str]], model: str) -> Dict[str, Any]:
        return {
            "model": model,
            "system": SYSTEM_PROMPT,
            "messages": messages,
            "max_tokens": MAX_TOKENS,
        }

    def parse_reply(self, data: Any) -> str:
        return data["content"][0]["text"]
