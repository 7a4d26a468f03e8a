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
"""CORS filter — applies a CORS policy to every request passing the chain."""

from __future__ import annotations

from typing import cast

from starlette.requests import Request
from starlette.responses import Response

from corsfilter.config.properties.cors import CORSProperties
from corsfilter.core.config import Config
from corsfilter.core.ordering import HIGHEST_PRECEDENCE, order
from corsfilter.web.adapters.starlette.views import BufferedResponse, StarletteRequestView
from corsfilter.web.cors import CORSPolicies, CORSPolicy
from corsfilter.web.filters import OncePerRequestFilter
from corsfilter.web.ports.filter import CallNext
from corsfilter.web.ports.http import RequestView, ResponseView
from corsfilter.web.processor import CORSProcessor


@order(HIGHEST_PRECEDENCE + 50)
class CORSFilter(OncePerRequestFilter):
    """Runs :class:`CORSProcessor` for each request.

    When the processor forwards, the route handler runs and the CORS headers
    are added to its response. When it answers a preflight request itself,
    an empty 200/204 response is returned and the handler never runs.
    """

    def __init__(
        self,
        policies: CORSPolicies,
        url_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
    ) -> None:
        self._processor = CORSProcessor(policies)
        if url_patterns is not None:
            self.url_patterns = list(url_patterns)
        if exclude_patterns is not None:
            self.exclude_patterns = list(exclude_patterns)

    @classmethod
    def from_config(cls, config: Config) -> CORSFilter:
        """Build the filter from the ``corsfilter.cors`` configuration section."""
        return cls.from_properties(config.bind(CORSProperties))

    @classmethod
    def from_properties(cls, props: CORSProperties) -> CORSFilter:
        return cls(
            props.to_policy(),
            url_patterns=props.url_patterns,
            exclude_patterns=props.exclude_patterns,
        )

    @property
    def policies(self) -> CORSPolicy:
        return self._processor.policies

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        pending = BufferedResponse()
        forwarded = False

        def _forward(req: RequestView, resp: ResponseView) -> None:
            nonlocal forwarded
            forwarded = True

        self._processor.process(StarletteRequestView(request), pending, _forward)

        if not forwarded:
            return pending.to_response()

        response = cast(Response, await call_next(request))
        return pending.apply_to(response)
