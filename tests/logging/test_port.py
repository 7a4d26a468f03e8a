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
"""Tests for the LoggingPort seam used by create_app()."""

from __future__ import annotations

from typing import Any

import structlog

from corsfilter.core.config import Config
from corsfilter.logging import LoggingPort, StructlogAdapter
from corsfilter.web.adapters.starlette.app import create_app
from corsfilter.web.cors import CORSPolicy


class RecordingLogging:
    """LoggingPort that records the configs it was asked to apply."""

    def __init__(self) -> None:
        self.configured: list[Config] = []
        self.levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        self.configured.append(config)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        self.levels[name] = level


class TestLoggingPortConformance:
    def test_structlog_adapter_is_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_recording_logging_is_logging_port(self):
        assert isinstance(RecordingLogging(), LoggingPort)

    def test_object_without_configure_is_not_logging_port(self):
        class GetLoggerOnly:
            def get_logger(self, name: str) -> Any:
                return None

        assert not isinstance(GetLoggerOnly(), LoggingPort)


class TestCreateAppLogging:
    def test_supplied_adapter_receives_config(self):
        logging_adapter = RecordingLogging()
        config = Config({"corsfilter": {"logging": {"format": "json"}}})

        create_app(config=config, logging_adapter=logging_adapter)

        assert logging_adapter.configured == [config]

    def test_adapter_not_configured_without_config(self):
        logging_adapter = RecordingLogging()

        create_app(CORSPolicy(), logging_adapter=logging_adapter)

        assert logging_adapter.configured == []
