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
"""Exception hierarchy for corsfilter.

CORS evaluation itself never raises: an unmatched origin, method or header
is a policy miss, not an error. Exceptions are reserved for startup, when a
policy or its configuration source is unusable.

Categories:
- ConfigurationException: configuration could not be loaded or bound
- InvalidPolicyException: a policy value violates CORS constraints
"""

from __future__ import annotations


class CORSFilterException(Exception):
    """Base exception for all corsfilter errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_POLICY_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ConfigurationException(CORSFilterException):
    """Configuration source is missing, malformed, or fails validation."""


class InvalidPolicyException(ConfigurationException):
    """A CORS policy holds values that cannot be enforced."""
