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
"""CORSProcessor — Cross-Origin Resource Sharing request evaluation.

Framework-agnostic: works on :class:`RequestView` / :class:`ResponseView`
so the same algorithm backs every adapter.

Every request is classified once by method. ``OPTIONS`` requests are
evaluated as preflight requests, everything else as actual requests. Each
evaluation runs its gating checks first; a failed check forwards the request
downstream without touching the response. Only after every check passes are
response headers written.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from corsfilter.web import headers
from corsfilter.web.cors import CORSPolicies, CORSPolicy
from corsfilter.web.ports.http import FilterChain, RequestView, ResponseView

logger = structlog.get_logger("corsfilter.web")


class CORSProcessor:
    """Evaluates requests against a :class:`CORSPolicies` and writes CORS headers.

    The policy source is snapshotted into a :class:`CORSPolicy` at
    construction, so an invalid source fails here and later changes to it
    are not seen. Holds no per-request state: every intermediate value
    lives in the call, so one instance can serve concurrent requests.
    """

    def __init__(self, policies: CORSPolicies) -> None:
        self._policies = CORSPolicy.from_policies(policies)

    @property
    def policies(self) -> CORSPolicy:
        return self._policies

    def process(self, request: RequestView, response: ResponseView, chain: FilterChain) -> None:
        """Evaluate *request*, then either invoke *chain* or finalize *response*."""
        if request.method == headers.PREFLIGHT_METHOD:
            self._process_preflight(request, response, chain)
        else:
            self._process_actual(request, response, chain)

    # ------------------------------------------------------------------
    # Actual requests
    # ------------------------------------------------------------------

    def _process_actual(self, request: RequestView, response: ResponseView, chain: FilterChain) -> None:
        policies = self._policies

        origin = request.get_header(headers.ORIGIN)
        if origin is None:
            chain(request, response)
            return

        if not self._origin_allowed(origin):
            logger.debug("cors_origin_rejected", origin=origin, method=request.method)
            chain(request, response)
            return

        self._set_origin_headers(response, origin)
        if policies.exposed_headers:
            response.set_header(headers.AC_EXPOSE_HEADERS, _join(policies.exposed_headers))

        chain(request, response)

    # ------------------------------------------------------------------
    # Preflight requests
    # ------------------------------------------------------------------

    def _process_preflight(self, request: RequestView, response: ResponseView, chain: FilterChain) -> None:
        policies = self._policies

        origin = request.get_header(headers.ORIGIN)
        if origin is None:
            chain(request, response)
            return

        if not self._origin_allowed(origin):
            logger.debug("cors_origin_rejected", origin=origin, method=request.method)
            chain(request, response)
            return

        requested_method = request.get_header(headers.AC_REQUEST_METHOD)
        if requested_method is None:
            chain(request, response)
            return

        raw_values = request.get_headers(headers.AC_REQUEST_HEADERS)
        if raw_values is None:
            logger.warning("cors_request_headers_unavailable", origin=origin)
            chain(request, response)
            return
        requested_headers = _parse_field_names(raw_values)

        if policies.allowed_methods and requested_method not in policies.allowed_methods:
            logger.debug("cors_method_rejected", origin=origin, requested_method=requested_method)
            chain(request, response)
            return

        if policies.allowed_headers:
            allowed = {h.lower() for h in policies.allowed_headers}
            for name in requested_headers:
                if name.lower() not in allowed:
                    logger.debug("cors_header_rejected", origin=origin, requested_header=name)
                    chain(request, response)
                    return

        self._set_origin_headers(response, origin)

        if policies.max_age >= 0:
            response.set_header(headers.AC_MAX_AGE, str(policies.max_age))

        if policies.allowed_methods:
            response.set_header(headers.AC_ALLOW_METHODS, _join(policies.allowed_methods))
        else:
            response.set_header(headers.AC_ALLOW_METHODS, requested_method)

        if policies.allowed_headers:
            response.set_header(headers.AC_ALLOW_HEADERS, _join(policies.allowed_headers))
        elif requested_headers:
            response.set_header(headers.AC_ALLOW_HEADERS, _join(requested_headers))

        if policies.preflight_continue_chain:
            chain(request, response)
            return

        status_code = headers.HTTP_204_NO_CONTENT if policies.preflight_prefer_no_content else headers.HTTP_200_OK
        response.set_status(status_code)
        logger.debug("cors_preflight_completed", origin=origin, status_code=status_code)

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    def _origin_allowed(self, origin: str) -> bool:
        allowed = self._policies.allowed_origins
        if not allowed:
            return True
        origin = origin.lower()
        return any(candidate.lower() == origin for candidate in allowed)

    def _set_origin_headers(self, response: ResponseView, origin: str) -> None:
        if self._policies.supports_credentials:
            # Echo the exact origin received; caches must key on it.
            response.set_header(headers.AC_ALLOW_ORIGIN, origin)
            response.set_header(headers.AC_ALLOW_CREDENTIALS, "true")
            response.set_header(headers.VARY, headers.ORIGIN)
        else:
            response.set_header(headers.AC_ALLOW_ORIGIN, headers.WILDCARD)


def _parse_field_names(values: Iterable[str | None]) -> list[str]:
    """Split every header occurrence on commas, dropping blank fragments."""
    names: list[str] = []
    for value in values:
        if value is None:
            continue
        names.extend(part.strip() for part in value.split(",") if part.strip())
    return names


def _join(values: Sequence[str]) -> str:
    return headers.LIST_SEPARATOR.join(values)
