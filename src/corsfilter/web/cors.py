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
"""CORS policies — the read-only contract consumed by the CORS processor."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from corsfilter.kernel.exceptions import InvalidPolicyException
from corsfilter.web.headers import WILDCARD


@runtime_checkable
class CORSPolicies(Protocol):
    """Read-only view of a Cross-Origin Resource Sharing policy.

    Any object exposing these attributes can drive the processor: a
    :class:`CORSPolicy` value, bound configuration properties, or a test
    double.

    Attributes:
        allowed_origins: Origins allowed access. Empty means unbounded.
        allowed_methods: Methods supported by the resource. Empty means
            unbounded; a non-empty list is also echoed in preflight responses.
        allowed_headers: Header field names supported by the resource.
            Empty means unbounded; a non-empty list is echoed in preflight
            responses.
        exposed_headers: Headers exposed to the caller on actual responses.
            Empty exposes nothing.
        supports_credentials: Echo the request origin and allow credentials
            instead of answering with ``*``.
        max_age: Preflight cache lifetime in seconds, ``-1`` to omit.
        preflight_continue_chain: Forward preflight requests downstream
            instead of answering them.
        preflight_prefer_no_content: Answer preflight requests with 204
            instead of 200.
    """

    @property
    def allowed_origins(self) -> Sequence[str]: ...

    @property
    def allowed_methods(self) -> Sequence[str]: ...

    @property
    def allowed_headers(self) -> Sequence[str]: ...

    @property
    def exposed_headers(self) -> Sequence[str]: ...

    @property
    def supports_credentials(self) -> bool: ...

    @property
    def max_age(self) -> int: ...

    @property
    def preflight_continue_chain(self) -> bool: ...

    @property
    def preflight_prefer_no_content(self) -> bool: ...


@dataclass(frozen=True)
class CORSPolicy:
    """Immutable :class:`CORSPolicies` value.

    Lists are stored as tuples. A ``*`` origin entry means "any origin" and
    is normalised to the empty (unbounded) list; it cannot be combined with
    ``supports_credentials``.
    """

    allowed_origins: Sequence[str] = field(default_factory=tuple)
    allowed_methods: Sequence[str] = field(default_factory=tuple)
    allowed_headers: Sequence[str] = field(default_factory=tuple)
    exposed_headers: Sequence[str] = field(default_factory=tuple)
    supports_credentials: bool = False
    max_age: int = -1  # seconds, -1 = omit Access-Control-Max-Age
    preflight_continue_chain: bool = False
    preflight_prefer_no_content: bool = False

    def __post_init__(self) -> None:
        origins = tuple(self.allowed_origins)
        if WILDCARD in origins:
            if self.supports_credentials:
                raise InvalidPolicyException(
                    "Origin '*' cannot be combined with supports_credentials",
                    code="CORS_POLICY_CREDENTIALS_WILDCARD",
                    context={"allowed_origins": list(origins)},
                )
            origins = ()
        if self.max_age < -1:
            raise InvalidPolicyException(
                f"max_age must be -1 or a non-negative number of seconds, got {self.max_age}",
                code="CORS_POLICY_MAX_AGE",
                context={"max_age": self.max_age},
            )
        object.__setattr__(self, "allowed_origins", origins)
        object.__setattr__(self, "allowed_methods", tuple(self.allowed_methods))
        object.__setattr__(self, "allowed_headers", tuple(self.allowed_headers))
        object.__setattr__(self, "exposed_headers", tuple(self.exposed_headers))

    @classmethod
    def from_policies(cls, source: CORSPolicies) -> CORSPolicy:
        """Snapshot any :class:`CORSPolicies` implementation into a value."""
        if isinstance(source, CORSPolicy):
            return source
        return cls(
            allowed_origins=source.allowed_origins,
            allowed_methods=source.allowed_methods,
            allowed_headers=source.allowed_headers,
            exposed_headers=source.exposed_headers,
            supports_credentials=source.supports_credentials,
            max_age=source.max_age,
            preflight_continue_chain=source.preflight_continue_chain,
            preflight_prefer_no_content=source.preflight_prefer_no_content,
        )
