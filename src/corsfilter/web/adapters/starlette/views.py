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
"""Starlette implementations of the processor's request and response views."""

from __future__ import annotations

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import Response


class StarletteRequestView:
    """Read-only :class:`RequestView` over a Starlette request."""

    __slots__ = ("_request",)

    def __init__(self, request: Request) -> None:
        self._request = request

    @property
    def method(self) -> str:
        return self._request.method

    def get_header(self, name: str) -> str | None:
        return self._request.headers.get(name)

    def get_headers(self, name: str) -> list[str]:
        return self._request.headers.getlist(name)


class BufferedResponse:
    """:class:`ResponseView` that records headers and status for later use.

    The downstream response does not exist yet while the processor runs, so
    headers are buffered and either copied onto the downstream response or
    used to build the preflight answer.
    """

    def __init__(self) -> None:
        self.headers = MutableHeaders()
        self.status_code: int | None = None

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def set_status(self, status_code: int) -> None:
        self.status_code = status_code

    def apply_to(self, response: Response) -> Response:
        """Copy buffered headers onto *response*, replacing same-named headers."""
        for name, value in self.headers.items():
            response.headers[name] = value
        return response

    def to_response(self) -> Response:
        """Build the terminal response for a preflight request answered here."""
        response = Response(status_code=self.status_code or 200)
        return self.apply_to(response)
