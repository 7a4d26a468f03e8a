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
"""Tests for WebFilterChainMiddleware — ordering, short-circuit, conditional skip."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from corsfilter.core.ordering import HIGHEST_PRECEDENCE, get_order, order
from corsfilter.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from corsfilter.web.filters import OncePerRequestFilter

# ---------------------------------------------------------------------------
# Test filters
# ---------------------------------------------------------------------------


@order(HIGHEST_PRECEDENCE + 10)
class HeaderFilter(OncePerRequestFilter):
    """Adds X-Filter-A header to every response."""

    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Filter-A"] = "applied"
        return response


@order(HIGHEST_PRECEDENCE + 20)
class TraceFilter(OncePerRequestFilter):
    """Records the header written by the filter after it."""

    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Filter-B"] = response.headers.get("X-Filter-A", "missing")
        return response


@order(5)
class ApiOnlyFilter(OncePerRequestFilter):
    """Only applies to /api/* paths."""

    url_patterns = ["/api/*"]

    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Api-Filter"] = "applied"
        return response


@order(10)
class ShortCircuitFilter(OncePerRequestFilter):
    """Returns 429 without calling next — simulates rate limiting."""

    async def do_filter(self, request, call_next):
        return JSONResponse({"error": "rate limited"}, status_code=429)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

handled: list[str] = []


async def _ok_handler(request: Request) -> PlainTextResponse:
    handled.append(request.url.path)
    return PlainTextResponse("OK", headers={"X-Route": "ok"})


def _make_app(*filters) -> Starlette:
    return Starlette(
        routes=[
            Route("/test", _ok_handler),
            Route("/api/data", _ok_handler),
            Route("/health", _ok_handler),
        ],
        middleware=[Middleware(WebFilterChainMiddleware, filters=list(filters))],
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestFilterChainOrdering:
    def test_filters_applied_in_order(self):
        """Outer filter sees the header written by the inner filter."""
        app = _make_app(TraceFilter(), HeaderFilter())
        client = TestClient(app)
        resp = client.get("/test")
        assert resp.status_code == 200
        assert resp.headers["X-Filter-A"] == "applied"
        assert resp.headers["X-Filter-B"] == "applied"

    def test_order_decorator_determines_sequence(self):
        assert get_order(HeaderFilter) < get_order(TraceFilter)
        assert get_order(TraceFilter) < get_order(ApiOnlyFilter)

    def test_undecorated_filter_defaults_to_zero(self):
        class Plain(OncePerRequestFilter):
            async def do_filter(self, request, call_next):
                return await call_next(request)

        assert get_order(Plain) == 0


class TestFilterChainConditionalSkip:
    def test_url_pattern_filter_applies_to_matching_path(self):
        client = TestClient(_make_app(ApiOnlyFilter()))
        resp = client.get("/api/data")
        assert resp.headers.get("X-Api-Filter") == "applied"

    def test_url_pattern_filter_skipped_for_non_matching_path(self):
        client = TestClient(_make_app(ApiOnlyFilter()))
        resp = client.get("/health")
        assert "X-Api-Filter" not in resp.headers


class TestFilterChainShortCircuit:
    def test_short_circuit_returns_early(self):
        """ShortCircuitFilter returns 429 without calling the route handler."""
        handled.clear()
        client = TestClient(_make_app(ShortCircuitFilter()))
        resp = client.get("/test")
        assert resp.status_code == 429
        assert resp.json() == {"error": "rate limited"}
        assert handled == []


class TestFilterChainPassThrough:
    def test_no_filters_passes_through(self):
        client = TestClient(_make_app())
        resp = client.get("/test")
        assert resp.status_code == 200
        assert resp.text == "OK"
        assert resp.headers["X-Route"] == "ok"

    def test_not_found_still_runs_filters(self):
        client = TestClient(_make_app(HeaderFilter()))
        resp = client.get("/nonexistent")
        assert resp.status_code == 404
        assert resp.headers["X-Filter-A"] == "applied"

    def test_filters_property_returns_copy(self):
        f = HeaderFilter()
        middleware = WebFilterChainMiddleware(_make_app(), filters=[f])
        middleware.filters.clear()
        assert middleware.filters == [f]
