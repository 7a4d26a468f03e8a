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
"""CORS configuration properties (corsfilter.cors.*)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from corsfilter.core.config import config_properties
from corsfilter.web.cors import CORSPolicy
from corsfilter.web.headers import WILDCARD


@config_properties(prefix="corsfilter.cors")
class CORSProperties(BaseModel):
    """Configuration for the CORS filter.

    YAML example::

        corsfilter:
          cors:
            allowed_origins: [https://app.example.com]
            allowed_methods: [GET, POST]
            allowed_headers: [Authorization, Content-Type]
            exposed_headers: [Content-Length]
            supports_credentials: true
            max_age: 600
            preflight_continue_chain: false
            preflight_prefer_no_content: true

    List fields also accept a comma-separated string, which is how they
    arrive from environment variables.
    """

    enabled: bool = True
    allowed_origins: list[str] = Field(default_factory=list)
    allowed_methods: list[str] = Field(default_factory=list)
    allowed_headers: list[str] = Field(default_factory=list)
    exposed_headers: list[str] = Field(default_factory=list)
    supports_credentials: bool = False
    max_age: int = Field(default=-1, ge=-1)
    preflight_continue_chain: bool = False
    preflight_prefer_no_content: bool = False
    url_patterns: list[str] = Field(default_factory=list)
    exclude_patterns: list[str] = Field(default_factory=list)

    @field_validator(
        "allowed_origins",
        "allowed_methods",
        "allowed_headers",
        "exposed_headers",
        "url_patterns",
        "exclude_patterns",
        mode="before",
    )
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @model_validator(mode="after")
    def _check_credentials_wildcard(self) -> CORSProperties:
        if self.supports_credentials and WILDCARD in self.allowed_origins:
            raise ValueError("allowed_origins cannot contain '*' when supports_credentials is true")
        return self

    def to_policy(self) -> CORSPolicy:
        """Build the immutable policy value used at request time."""
        return CORSPolicy(
            allowed_origins=self.allowed_origins,
            allowed_methods=self.allowed_methods,
            allowed_headers=self.allowed_headers,
            exposed_headers=self.exposed_headers,
            supports_credentials=self.supports_credentials,
            max_age=self.max_age,
            preflight_continue_chain=self.preflight_continue_chain,
            preflight_prefer_no_content=self.preflight_prefer_no_content,
        )
