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
"""Identity resolver filter — populates ``request.state.identity``."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from fnmatch import fnmatch
from typing import Any

from starlette.requests import Request

from routewall.security.identity import set_identity
from routewall.web.ports.filter import CallNext

logger = logging.getLogger(__name__)

IdentityLoader = Callable[[Request], Any]


class IdentityResolverFilter:
    """Adapts a ``resolve(request) -> Identity | None`` function into a resolver step.

    *resolve* may be a plain function or a coroutine function (e.g. one that
    loads the user from a session store).  ``None`` means the request is
    anonymous.  Requests whose path matches one of ``exclude_patterns``
    (fnmatch globs) are passed through without resolving anything.
    """

    def __init__(self, resolve: IdentityLoader, exclude_patterns: Sequence[str] = ()) -> None:
        self._resolve = resolve
        self.exclude_patterns = list(exclude_patterns)

    def should_not_filter(self, request: Any) -> bool:
        path: str = request.url.path
        return any(fnmatch(path, p) for p in self.exclude_patterns)

    async def do_filter(self, request: Request, call_next: CallNext) -> Any:
        identity = self._resolve(request)
        if inspect.isawaitable(identity):
            identity = await identity

        if identity is None:
            logger.debug("No identity resolved for %s", request.url.path)
        set_identity(request, identity)
        return await call_next(request)
