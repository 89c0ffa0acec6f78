import logging

from logrelay.settings.base import BaseAppSettings


class LocalAppSettings(BaseAppSettings):
    debug: bool = True

    title: str = "Local Log Relay Ingestion Service"

    logging_level: int = logging.DEBUG
