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
"""RFC 7807 problem-detail responses and the default failure handlers.

Used by :class:`~routewall.web.adapters.starlette.gate_filter.AuthorizationGate`
when the caller does not supply its own ``on_unauthenticated`` /
``on_unauthorized`` callbacks.
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

PROBLEM_MEDIA_TYPE = "application/problem+json"


def problem_response(*, status: int, title: str, detail: str, path: str) -> JSONResponse:
    """Build an RFC 7807 problem-detail JSON response."""
    return JSONResponse(
        {
            "type": "about:blank",
            "title": title,
            "status": status,
            "detail": detail,
            "instance": path,
        },
        status_code=status,
        media_type=PROBLEM_MEDIA_TYPE,
    )


def unauthenticated_problem(request: Request, response: Response) -> JSONResponse:
    return problem_response(
        status=response.status_code,
        title="Unauthorized",
        detail="Authentication is required to access this resource.",
        path=request.url.path,
    )


def unauthorized_problem(request: Request, response: Response) -> JSONResponse:
    return problem_response(
        status=response.status_code,
        title="Forbidden",
        detail="You do not have permission to access this resource.",
        path=request.url.path,
    )
