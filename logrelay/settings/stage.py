import logging

from logrelay.settings.base import BaseAppSettings


class StageAppSettings(BaseAppSettings):
    title: str = "Stage Log Relay Ingestion Service"

    logging_level: int = logging.INFO
    log_path: str = "./logs/ingest.log"
