"""Simulated execution reports.

Every "execution" in clawdesk is simulated: these builders produce the
multi-line report text stored in a log entry's ``output`` field. They are
shared by the dispatcher (run button) and the approval workflow (approve).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from ..schemas.domain import AgentConfig


class AgentKind(str, Enum):
    trending = "trending"
    hashtag = "hashtag"
    generic = "generic"


PREVIEW_PREFIXES = {
    AgentKind.trending: "[Trending Agent]",
    AgentKind.hashtag: "[Hashtag Agent]",
    AgentKind.generic: "[Agent]",
}


def detect_agent_type(text: Optional[str]) -> AgentKind:
    """Classify an agent from its name or an approval preview."""
    lower = (text or "").lower()
    if "trending" in lower:
        return AgentKind.trending
    if "hashtag" in lower or "#openclaw" in lower:
        return AgentKind.hashtag
    return AgentKind.generic


def build_preview(agent: AgentConfig) -> str:
    """Approval-queue preview: ``"<prefix> <name>: <goal>"``."""
    prefix = PREVIEW_PREFIXES[detect_agent_type(agent.name)]
    return f"{prefix} {agent.name}: {agent.goal}"


def _timestamp(now: Optional[datetime]) -> str:
    return (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")


def build_trending_output(now: Optional[datetime] = None) -> str:
    return "\n".join(
        [
            "✅ EXECUTION COMPLETE",
            "━━━━━━━━━━━━━━━━━━━━",
            "🔍 Step 1: Searched trending topics on OpenClaw",
            '   → Found: "OpenClaw v2.0 Desktop App Launch"',
            "   → Engagement score: 87/100",
            "",
            "✍️ Step 2: Generated LinkedIn post",
            '   → Title: "The Future of No-Code Automation is Here 🦞"',
            "   → Length: 247 words",
            "   → Hashtags: #openclaw #automation #opensource",
            "",
            "🌐 Step 3: Browser automation - Posted to LinkedIn",
            "   → Status: Published successfully",
            "   → URL: linkedin.com/posts/openclaw-desktop-launch",
            f"   → Timestamp: {_timestamp(now)}",
            "",
            "🔄 Next scheduled run: Tomorrow at 9:00 AM",
        ]
    )


def build_hashtag_output(now: Optional[datetime] = None) -> str:
    return "\n".join(
        [
            "✅ EXECUTION COMPLETE",
            "━━━━━━━━━━━━━━━━━━━━",
            "🔎 Step 1: Searched LinkedIn for #openclaw posts",
            "   → Found 3 matching posts",
            "",
            "💬 Step 2: Commented on posts via browser automation",
            '   → Post 1: "Check out github.com/openclaw - 🦞 automate tasks without CLI!"',
            '   → Post 2: "Try the OpenClaw Desktop App for no-code automation! 🚀"',
            '   → Post 3: "New to automation? OpenClaw Desktop makes it easy 🎯"',
            "",
            "📊 Step 3: Results logged",
            "   → Comments posted: 3",
            f"   → Timestamp: {_timestamp(now)}",
            "",
            "🔄 Next scheduled run: In 1 hour",
        ]
    )


def build_generic_output(action: str, now: Optional[datetime] = None) -> str:
    return "\n".join(
        [
            "✅ EXECUTION COMPLETE",
            "━━━━━━━━━━━━━━━━━━━━",
            "🌐 Browser automation executed successfully",
            f"   → Action: {action}",
            f"   → Timestamp: {_timestamp(now)}",
        ]
    )


def build_sandbox_output(name: str, goal: str, now: Optional[datetime] = None) -> str:
    return "\n".join(
        [
            "🧪 SANDBOX DRY-RUN",
            "━━━━━━━━━━━━━━━━━━",
            f"Agent: {name}",
            f"Goal: {goal}",
            "",
            "🔍 Simulated Step 1: Analyzed task requirements",
            "✍️ Simulated Step 2: Would execute browser actions",
            "⏭️ Simulated Step 3: Would post/comment",
            "",
            "⚠️ No real actions taken - sandbox mode active",
            f"Timestamp: {_timestamp(now)}",
        ]
    )


def build_auto_execute_output(agent: AgentConfig, now: Optional[datetime] = None) -> str:
    return "\n".join(
        [
            "✅ AUTO-EXECUTED",
            "━━━━━━━━━━━━━━━━",
            f"Agent: {agent.name}",
            f"Role: {agent.role}",
            "",
            f"🔍 Step 1: Processed task - {agent.goal}",
            "⚡ Step 2: Executed successfully",
            "📊 Step 3: Results logged",
            "",
            f"Timestamp: {_timestamp(now)}",
        ]
    )


def build_approved_output(preview: str, now: Optional[datetime] = None) -> str:
    """Pick the execution report for an approved item from its preview text."""
    kind = detect_agent_type(preview)
    if kind is AgentKind.trending:
        return build_trending_output(now)
    if kind is AgentKind.hashtag:
        return build_hashtag_output(now)
    return build_generic_output(preview, now)
