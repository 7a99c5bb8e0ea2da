# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Authorization decision engine.

Maps a route's required access value and the request's resolved identity to
one :class:`Decision`:

* no identity                    -> ``UNAUTHENTICATED``
* ``AUTHENTICATED`` + identity   -> ``ALLOW``
* role + approved identity with that role -> ``ALLOW``
* anything else                  -> ``UNAUTHORIZED``

``PUBLIC`` routes never reach the engine at request time; they get no guard.
"""

from __future__ import annotations

import logging
from enum import Enum, auto

from routewall.security.identity import Identity

logger = logging.getLogger(__name__)

PUBLIC = "PUBLIC"
AUTHENTICATED = "AUTHENTICATED"

RESERVED_ACCESS = frozenset({PUBLIC, AUTHENTICATED})


class Decision(Enum):
    """Outcome of a single authorization check."""

    ALLOW = auto()
    UNAUTHENTICATED = auto()
    UNAUTHORIZED = auto()

    @property
    def status_code(self) -> int | None:
        """HTTP status set on the response for a denial, ``None`` for ALLOW."""
        return _STATUS_CODES[self]


_STATUS_CODES: dict[Decision, int | None] = {
    Decision.ALLOW: None,
    Decision.UNAUTHENTICATED: 401,
    Decision.UNAUTHORIZED: 403,
}


def decide(access: str, identity: Identity | None) -> Decision:
    """Decide whether *identity* may reach a route requiring *access*."""
    if access == PUBLIC:
        return Decision.ALLOW

    if identity is None:
        return Decision.UNAUTHENTICATED

    if access == AUTHENTICATED:
        return Decision.ALLOW

    if _is_approved(identity) and _has_role(identity, access):
        return Decision.ALLOW
    return Decision.UNAUTHORIZED


def _is_approved(identity: Identity) -> bool:
    try:
        approved = identity.is_approved
    except Exception:
        logger.warning("Identity %r failed to report approval; denying", identity, exc_info=True)
        return False

    if not isinstance(approved, bool):
        logger.warning("Identity %r has non-boolean is_approved=%r; denying", identity, approved)
        return False
    return approved


def _has_role(identity: Identity, role: str) -> bool:
    has_role = getattr(identity, "has_role", None)
    if not callable(has_role):
        logger.warning("Identity %r has no callable has_role(); denying", identity)
        return False

    try:
        granted = has_role(role)
    except Exception:
        logger.warning("Identity %r raised from has_role(%r); denying", identity, role, exc_info=True)
        return False

    if not isinstance(granted, bool):
        logger.warning("Identity %r returned non-boolean %r from has_role(%r); denying", identity, granted, role)
        return False
    return granted
