"""Pytest 全局配置。

每个测试前后清空 ``ConfigManager`` 的当前配置，并移除配置文件环境变量，
保证 ``TurtleFormatter()`` 在测试中总是使用模型默认样式。
"""
from __future__ import annotations

import pytest

from sf_turtle_formatter.common.config import CONFIG_ENV_VAR, ConfigManager


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    ConfigManager.reset()
    yield
    ConfigManager.reset()
