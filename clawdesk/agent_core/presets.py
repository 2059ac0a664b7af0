"""Built-in agent templates.

The same two templates back the chat drafts (``trending``/``hashtag`` rules)
and the one-click demo agents.
"""

from __future__ import annotations

from enum import Enum

from .schemas.domain import AgentConfig


class PresetKind(str, Enum):
    trending = "trending"
    hashtag = "hashtag"


TRENDING_TOPICS_AGENT = AgentConfig(
    name="Trending Topics Agent",
    role="Content Creator",
    goal="Search trending OpenClaw topics, write LinkedIn post, wait for approval, post via browser automation",
    tools="browser,cron",
    schedule="0 9 * * *",
    sandbox=False,
)

HASHTAG_PROMOTER_AGENT = AgentConfig(
    name="Hashtag Promoter Agent",
    role="Community Promoter",
    goal="Search LinkedIn for #openclaw posts, comment promoting GitHub repo and desktop app",
    tools="browser,cron",
    schedule="0 */1 * * *",
    sandbox=False,
)

DEMO_AGENTS = {
    PresetKind.trending: TRENDING_TOPICS_AGENT,
    PresetKind.hashtag: HASHTAG_PROMOTER_AGENT,
}


def preset(kind: PresetKind) -> AgentConfig:
    """Return a fresh copy of a template so callers may mutate it."""
    return DEMO_AGENTS[PresetKind(kind)].model_copy(deep=True)
