import os
from functools import lru_cache
from typing import Dict, Type

from logrelay.settings.agent import AgentSettings
from logrelay.settings.base import BaseAppSettings
from logrelay.settings.dev import DevAppSettings
from logrelay.settings.local import LocalAppSettings
from logrelay.settings.stage import StageAppSettings

environments: Dict[str, Type[BaseAppSettings]] = {
    "local": LocalAppSettings,
    "dev": DevAppSettings,
    "stage": StageAppSettings,
}


@lru_cache
def get_app_settings() -> BaseAppSettings:
    app_env = os.getenv("LOG_RELAY_ENVIRONMENT", "local")
    config = environments[app_env]
    return config()


@lru_cache
def get_agent_settings() -> AgentSettings:
    return AgentSettings()
