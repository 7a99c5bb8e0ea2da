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
"""Identity protocol and the default Principal implementation.

The gate only *reads* identities.  Whatever the identity resolver places on
``request.state.identity`` must satisfy :class:`Identity`; anonymous requests
carry no identity at all (``None``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

IDENTITY_STATE_ATTR = "identity"


@runtime_checkable
class Identity(Protocol):
    """Resolved representation of the requester."""

    @property
    def is_approved(self) -> bool:
        """Whether the identity has completed onboarding/verification."""
        ...

    def has_role(self, role: str) -> bool:
        """Whether the identity holds *role*."""
        ...


@dataclass(frozen=True)
class Principal:
    """Immutable :class:`Identity` backed by a set of role names.

    Typically built by an identity resolver from a session, a JWT, or a
    user record and placed on ``request.state.identity``.
    """

    user_id: str
    roles: frozenset[str] = field(default_factory=frozenset)
    approved: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.roles, (str, bytes)):
            raise TypeError(f"roles must be a collection of role names, not a single {type(self.roles).__name__}")
        if not isinstance(self.roles, frozenset):
            object.__setattr__(self, "roles", frozenset(self.roles))

    @property
    def is_approved(self) -> bool:
        return self.approved

    def has_role(self, role: str) -> bool:
        """Exact-match role check."""
        return role in self.roles


def get_identity(request: Any) -> Identity | None:
    """Return the identity resolved for *request*, or ``None`` if anonymous."""
    return getattr(request.state, IDENTITY_STATE_ATTR, None)


def set_identity(request: Any, identity: Identity | None) -> None:
    """Attach *identity* to *request* for the rest of the dispatch chain."""
    setattr(request.state, IDENTITY_STATE_ATTR, identity)
