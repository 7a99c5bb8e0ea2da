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
"""Filter ports — framework-agnostic shapes of the gate's collaborators.

Uses generic ``Any`` types for Request/Response so that vendor-specific
types (e.g. Starlette) remain confined to the adapter layer.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, Protocol, runtime_checkable

# The next stage of the dispatch chain.  Its return value is handed back
# to the caller untouched; the gate never inspects it.
CallNext = Callable[..., Coroutine[Any, Any, Any]]

# An identity-resolution step written as a plain coroutine function.
ResolverStep = Callable[[Any, CallNext], Awaitable[Any]]

# Invoked on denial with the request and a response whose status is already
# set.  Returns ``None`` to send that response, or a replacement response.
FailureHandler = Callable[[Any, Any], Any]


@runtime_checkable
class WebFilter(Protocol):
    """Protocol for request filters that can sit in front of the route handler.

    Identity resolvers may implement this protocol; the authorization gate
    implements it as well, so it can be nested inside other filter chains.
    """

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        """Execute this filter's logic.

        Args:
            request: The incoming HTTP request.
            call_next: Calls the next stage in the chain (or the route handler).
        """
        ...

    def should_not_filter(self, request: Any) -> bool:
        """Return ``True`` to skip this filter for the given request."""
        ...
