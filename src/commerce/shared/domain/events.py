"""Domain event primitives.

Events are plain frozen dataclasses, one class per kind; each context
declares a ``Union`` of its kinds.  There is no event base class: every
event carries an ``event_type`` tag, the id of the aggregate that raised it,
and the two metadata fields built by the factories below.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_event_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
