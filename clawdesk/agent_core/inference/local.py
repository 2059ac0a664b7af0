"""Deterministic local inference.

There is no model download: the "local model" is an ordered rule table.
Each rule pairs a predicate over the lower-cased, trimmed user text with an
async responder; the first matching rule wins and the last rule always
matches.

Two rules are multi-turn. ``setup_request`` arms a pending setup
confirmation that ``setup_confirmation`` consumes, and the template rules
draft an agent that ``agent_confirmation`` persists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Sequence, Tuple

from ..presets import PresetKind, preset
from ..repos.interfaces import PersistenceGateway
from ..schemas.domain import (
    SYSTEM_AGENT_ID,
    ApprovalActionType,
    LogStatus,
    Message,
    MessageRole,
)
from . import prompts

if TYPE_CHECKING:
    from ..conversation.setup import SetupSequence
    from ..conversation.state import ConversationState

logger = logging.getLogger(__name__)

Predicate = Callable[[str, "ConversationState"], bool]
Responder = Callable[[str, "ConversationState"], Awaitable[str]]

SETUP_REQUEST_WORDS = ("setup", "install", "get started")
AFFIRMATIONS = ("yes", "sure", "ok", "go ahead", "start", "set it up")
CONFIRMATIONS = ("yes", "create", "confirm", "deploy", "do it")
TRENDING_WORDS = ("trending", "linkedin post", "trend")
HASHTAG_WORDS = ("hashtag", "#openclaw", "comment")
SCHEDULE_WORDS = ("schedule", "cron", "timer")
SANDBOX_WORDS = ("sandbox", "dry run", "test mode")
HELP_WORDS = ("help", "what can you do", "commands")
STATUS_WORDS = ("status", "health", "check")


def contains_any(text: str, words: Sequence[str]) -> bool:
    return any(word in text for word in words)


def is_greeting(text: str) -> bool:
    """Greetings and very short inputs that are not confirmations."""
    if "hello" in text or "hi " in text or text == "hi":
        return True
    return len(text) < 5 and "yes" not in text and "ok" not in text


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Predicate
    respond: Responder


def _static(reply: str) -> Responder:
    async def respond(text: str, state: ConversationState) -> str:
        return reply

    return respond


class LocalInference:
    """Rule-table backend; also the fallback for every remote failure."""

    def __init__(self, *, gateway: PersistenceGateway, setup: SetupSequence) -> None:
        self._gateway = gateway
        self._setup = setup
        self.rules: Tuple[Rule, ...] = (
            Rule(
                "setup_confirmation",
                lambda t, s: s.pending_setup_confirmation and contains_any(t, AFFIRMATIONS),
                self._run_setup,
            ),
            Rule("setup_request", lambda t, s: contains_any(t, SETUP_REQUEST_WORDS), self._preview_setup),
            Rule(
                "agent_confirmation",
                lambda t, s: s.drafted_agent is not None and contains_any(t, CONFIRMATIONS),
                self._create_drafted_agent,
            ),
            Rule(
                "agent_creation_prompt",
                lambda t, s: "create" in t and ("agent" in t or "automation" in t),
                _static(prompts.AGENT_CREATION_GUIDE),
            ),
            Rule("trending_template", lambda t, s: contains_any(t, TRENDING_WORDS), self._draft_trending),
            Rule("hashtag_template", lambda t, s: contains_any(t, HASHTAG_WORDS), self._draft_hashtag),
            Rule("schedule_help", lambda t, s: contains_any(t, SCHEDULE_WORDS), _static(prompts.SCHEDULE_HELP)),
            Rule("sandbox_help", lambda t, s: contains_any(t, SANDBOX_WORDS), _static(prompts.SANDBOX_HELP)),
            Rule("help", lambda t, s: contains_any(t, HELP_WORDS), _static(prompts.HELP)),
            Rule("status", lambda t, s: contains_any(t, STATUS_WORDS), _static(prompts.STATUS)),
            Rule("greeting", lambda t, s: is_greeting(t), _static(prompts.GREETING)),
            Rule("fallback", lambda t, s: True, self._fallback),
        )

    async def complete(self, conversation: Sequence[Message], state: ConversationState) -> str:
        last_user = next((m for m in reversed(conversation) if m.role == MessageRole.user), None)
        return await self.reply(last_user.content if last_user else "", state)

    def match(self, text: str, state: ConversationState) -> Rule:
        """Return the first rule matching ``text`` in ``state``."""
        normalized = text.strip().lower()
        return next(rule for rule in self.rules if rule.matches(normalized, state))

    async def reply(self, text: str, state: ConversationState) -> str:
        rule = self.match(text, state)
        logger.debug(f"Local inference matched rule '{rule.name}'")
        return await rule.respond(text, state)

    async def _run_setup(self, text: str, state: ConversationState) -> str:
        report = await self._setup.run()
        state.pending_setup_confirmation = False
        return report

    async def _preview_setup(self, text: str, state: ConversationState) -> str:
        state.pending_setup_confirmation = True
        return prompts.SETUP_PREVIEW

    async def _draft_trending(self, text: str, state: ConversationState) -> str:
        state.drafted_agent = preset(PresetKind.trending)
        return prompts.TRENDING_PREVIEW

    async def _draft_hashtag(self, text: str, state: ConversationState) -> str:
        state.drafted_agent = preset(PresetKind.hashtag)
        return prompts.HASHTAG_PREVIEW

    async def _create_drafted_agent(self, text: str, state: ConversationState) -> str:
        agent = state.drafted_agent
        if agent is None:
            return await self._fallback(text, state)
        try:
            agent_id = await self._gateway.agents.create(agent)
            await self._gateway.logs.add(
                SYSTEM_AGENT_ID,
                f"Agent created via chat: {agent.name}",
                LogStatus.success,
                agent.model_dump_json(exclude={"id"}),
                "",
            )
            if agent.requires_approval:
                await self._gateway.approvals.add(
                    SYSTEM_AGENT_ID,
                    ApprovalActionType.agent_creation.value,
                    f"Created: {agent.name} — {agent.goal}",
                )
        except Exception as e:
            logger.warning(f"Failed to create drafted agent '{agent.name}': {e}")
            return prompts.AGENT_CREATION_FAILED.format(error=e)
        finally:
            state.drafted_agent = None

        logger.info(f"Created agent {agent_id} from chat draft: {agent.name}")
        return prompts.AGENT_CREATED.format(
            name=agent.name,
            role=agent.role,
            schedule=agent.schedule,
            sandbox="Enabled 🧪" if agent.sandbox else "Disabled",
        )

    async def _fallback(self, text: str, state: ConversationState) -> str:
        return prompts.FALLBACK.format(message=text)
