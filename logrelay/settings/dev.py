import logging

from logrelay.settings.base import BaseAppSettings


class DevAppSettings(BaseAppSettings):
    debug: bool = True

    title: str = "Dev Log Relay Ingestion Service"

    logging_level: int = logging.DEBUG
