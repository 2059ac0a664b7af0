"""Repository interfaces and SQL implementations for clawdesk persistence.

The repository layer is the persistence boundary of the core. The
conversation engine, dispatcher and approval workflow only see the Protocols
bundled in ``PersistenceGateway``, so they run unchanged against:

- a SQL database (async SQLAlchemy implementation in ``repos.sql``),
- in-memory fakes for unit tests.

The SQL implementation commits at repository-method boundaries.
"""

from .interfaces import (
    AgentRepository,
    ApprovalRepository,
    LogRepository,
    PersistenceGateway,
    SessionRepository,
    SettingsRepository,
)

__all__ = [
    "AgentRepository",
    "ApprovalRepository",
    "LogRepository",
    "PersistenceGateway",
    "SessionRepository",
    "SettingsRepository",
]
