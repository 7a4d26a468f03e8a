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
"""corsfilter web — CORS policy evaluation as a pluggable web filter.

Framework-agnostic types are exported here. The Starlette adapter lives in
``corsfilter.web.adapters.starlette``.
"""

from corsfilter.web.cors import CORSPolicies, CORSPolicy
from corsfilter.web.filters import OncePerRequestFilter
from corsfilter.web.ports.filter import CallNext, WebFilter
from corsfilter.web.ports.http import FilterChain, RequestView, ResponseView
from corsfilter.web.processor import CORSProcessor

__all__ = [
    "CORSPolicies",
    "CORSPolicy",
    "CORSProcessor",
    "CallNext",
    "FilterChain",
    "OncePerRequestFilter",
    "RequestView",
    "ResponseView",
    "WebFilter",
]
