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
"""corsfilter application factory built on Starlette."""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from corsfilter.config.properties.cors import CORSProperties
from corsfilter.core.config import Config
from corsfilter.core.ordering import get_order
from corsfilter.logging.port import LoggingPort
from corsfilter.logging.structlog_adapter import StructlogAdapter
from corsfilter.web.adapters.starlette.cors_filter import CORSFilter
from corsfilter.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from corsfilter.web.cors import CORSPolicies
from corsfilter.web.ports.filter import WebFilter

logger = structlog.get_logger("corsfilter.web")


def create_app(
    policies: CORSPolicies | None = None,
    *,
    config: Config | None = None,
    routes: Sequence[BaseRoute] | None = None,
    filters: Sequence[WebFilter] | None = None,
    logging_adapter: LoggingPort | None = None,
    debug: bool = False,
) -> Starlette:
    """Create a Starlette application guarded by the CORS filter.

    The policy comes from *policies* when given, otherwise it is bound from
    the ``corsfilter.cors`` section of *config*. Passing *config* also
    configures logging from ``corsfilter.logging`` through
    *logging_adapter*, a :class:`StructlogAdapter` unless another
    :class:`LoggingPort` is given. Setting
    ``corsfilter.cors.enabled: false`` leaves the CORS filter out.

    Extra *filters* join the same chain; all filters are sorted by
    ``@order`` so the CORS filter runs ahead of user filters by default.
    """
    if config is not None:
        (logging_adapter or StructlogAdapter()).configure(config)

    chain: list[WebFilter] = list(filters or [])

    if policies is not None:
        chain.append(CORSFilter(policies))
    elif config is not None:
        props = config.bind(CORSProperties)
        if props.enabled:
            chain.append(CORSFilter.from_properties(props))
        else:
            logger.info("cors_filter_disabled")

    chain.sort(key=lambda f: get_order(type(f)))

    app = Starlette(
        debug=debug,
        middleware=[Middleware(WebFilterChainMiddleware, filters=chain)],
        routes=list(routes or []),
    )
    app.state.corsfilter_filters = chain
    logger.debug("cors_app_created", filters=[type(f).__name__ for f in chain])
    return app
