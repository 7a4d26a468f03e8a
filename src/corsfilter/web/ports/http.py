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
"""HTTP views consumed by the CORS processor — framework-agnostic.

Adapters (e.g. Starlette) wrap their native request and response objects
in these protocols so the processor never imports a web framework.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class RequestView(Protocol):
    """Read-only view of an inbound HTTP request."""

    @property
    def method(self) -> str: ...

    def get_header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive), or ``None``."""
        ...

    def get_headers(self, name: str) -> Iterable[str] | None:
        """Return every value of header *name* (case-insensitive).

        ``None`` signals that the transport cannot enumerate header values.
        """
        ...


@runtime_checkable
class ResponseView(Protocol):
    """Write-only view of an outbound HTTP response."""

    def set_header(self, name: str, value: str) -> None:
        """Set header *name* to *value*, replacing any previous value."""
        ...

    def set_status(self, status_code: int) -> None: ...


# Downstream continuation: invoked with the same request/response pair to
# hand control to the next stage. Not invoking it finalizes the response.
FilterChain = Callable[[RequestView, ResponseView], None]
