"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Task owns its Comments; Team owns its TeamMember rows

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from tasktracker.models.user import User  # noqa: F401
from tasktracker.models.task import Task  # noqa: F401
from tasktracker.models.comment import Comment  # noqa: F401
from tasktracker.models.team import Team, TeamMember  # noqa: F401
