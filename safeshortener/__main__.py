"""Run the expiry sweeper as a standalone process

Usage:
    python -m safeshortener sweep [--once] [--interval SECONDS]

Settings are resolved with load_settings(), so the same environment variables
(or AppConfig document) drive both the Lambdas and this process.
"""

import sys
import logging
import argparse

from safeshortener.dao.redis import RecordRedisDAO
from safeshortener.dao.exceptions import DAOError
from safeshortener.exceptions import ConfigurationError
from safeshortener.services import MappingService, ExpirySweeper
from safeshortener.utils import initialize_logging, load_settings, app_prefix


logger = logging.getLogger('safeshortener')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='safeshortener', description='Credential-guarded URL shortener tools.')
    commands = parser.add_subparsers(dest='command', required=True)

    sweep = commands.add_parser('sweep', help='Delete records older than the retention period.')
    sweep.add_argument('--once', action='store_true', help='Run a single sweep and exit.')
    sweep.add_argument('--interval', type=int, default=None, help='Seconds between sweeps (default: SWEEP_INTERVAL or the retention period).')
    return parser


def sweep(args: argparse.Namespace) -> int:
    try:
        settings = load_settings()
        service = MappingService(RecordRedisDAO(redis_url=settings.redis_url, prefix=app_prefix()), settings)
    except (ConfigurationError, DAOError):
        logger.exception('Failed to start the expiry sweeper.')
        return 1

    if args.once:
        try:
            deleted = service.sweep()
        except DAOError:
            logger.exception('Expiry sweep failed.')
            return 1
        print(deleted)
        return 0

    interval = args.interval if args.interval is not None else settings.sweep_interval
    if interval <= 0:
        logger.info('Record expiry is disabled and no sweep interval was given. Nothing to do.')
        return 0

    sweeper = ExpirySweeper(service, interval)
    logger.info('Sweeping expired records every %s seconds.', interval)
    try:
        sweeper.run_forever()
    except KeyboardInterrupt:
        logger.info('Interrupted. Stopping the expiry sweeper.')
    return 0


def main(argv: list[str] | None = None) -> int:
    initialize_logging()
    args = build_parser().parse_args(argv)
    if args.command == 'sweep':
        return sweep(args)
    return 2  # pragma: no cover


if __name__ == '__main__':
    sys.exit(main())
