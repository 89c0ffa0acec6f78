import argparse
import signal
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from logrelay.agent.runner import ShippingAgent, ShippingOutcome
from logrelay.agent.shipper import LogShipper
from logrelay.agent.source import GitHubJobSource
from logrelay.config import get_agent_settings
from logrelay.services.logging.logger import setup_logging
from logrelay.services.logging.logger import log as logger

EXIT_CODES = {
    ShippingOutcome.COMPLETED: 0,
    ShippingOutcome.STOPPED: 0,
    ShippingOutcome.FAILED: 1,
    ShippingOutcome.CANCELLED: 1,
    ShippingOutcome.ABORTED: 2,
}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="logrelay-agent",
        description="Ship the log of a running job to the ingestion endpoint until the job finishes.",
    )
    parser.add_argument("job_id", help="Identifier of the job to relay")
    parser.add_argument("--repository", help="owner/repo of the job, overrides GITHUB_REPOSITORY")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = get_agent_settings()
    except ValidationError as exc:
        logger.error(f"Invalid agent configuration: {exc}")
        return 2
    setup_logging(settings.logging_level, loggers=("urllib3",))

    repository = args.repository or settings.github_repository
    if not repository:
        logger.error("No repository given, set GITHUB_REPOSITORY or pass --repository")
        return 2

    token = settings.github_token.get_secret_value() if settings.github_token else None
    source = GitHubJobSource(
        repository,
        token=token,
        api_url=settings.github_api_url,
        timeout=settings.timeout,
    )
    shipper = LogShipper(
        settings.endpoint_url,
        settings.log_secret.get_secret_value(),
        timeout=settings.timeout,
    )
    agent = ShippingAgent(
        source,
        shipper,
        poll_interval=settings.poll_interval,
        failure_threshold=settings.failure_threshold,
    )

    def _handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, stopping after the current push")
        agent.stop()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    result = agent.run(args.job_id)
    logger.info(
        f"Relay of job {result.job_id} ended: {result.outcome.value} "
        f"({result.pushes} pushes, last status {result.job_status})"
    )
    return EXIT_CODES[result.outcome]


if __name__ == "__main__":
    sys.exit(main())
