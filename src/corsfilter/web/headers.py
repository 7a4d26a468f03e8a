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
"""CORS wire header names and status codes."""

from __future__ import annotations

# Request headers (actual and preflight requests)
ORIGIN = "Origin"
# Request headers (preflight requests only)
AC_REQUEST_METHOD = "Access-Control-Request-Method"
AC_REQUEST_HEADERS = "Access-Control-Request-Headers"

# Response headers (actual and preflight responses)
AC_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
AC_ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
VARY = "Vary"
# Response headers (actual responses only)
AC_EXPOSE_HEADERS = "Access-Control-Expose-Headers"
# Response headers (preflight responses only)
AC_MAX_AGE = "Access-Control-Max-Age"
AC_ALLOW_METHODS = "Access-Control-Allow-Methods"
AC_ALLOW_HEADERS = "Access-Control-Allow-Headers"

PREFLIGHT_METHOD = "OPTIONS"
WILDCARD = "*"
LIST_SEPARATOR = ", "

HTTP_200_OK = 200
HTTP_204_NO_CONTENT = 204
