"""Background expiry sweeper

Runs MappingService.sweep() on a fixed interval, either on a daemon thread
(`start()`/`stop()`) or in the foreground (`run_forever()`). The first sweep
happens one interval after starting. A failing sweep is logged and the loop
keeps going.

Example:
    >>> sweeper = ExpirySweeper(service, interval_seconds=3600).start()
    >>> sweeper.running
    True
    >>> sweeper.stop()
"""

import logging
import threading

from safeshortener.dao.exceptions import DAOError
from safeshortener.services.mapping_service import MappingService


logger = logging.getLogger(__name__)

SWEEP_SUCCESS = 'SWEEP_SUCCESS'
SWEEP_FAILED = 'SWEEP_FAILED'


class ExpirySweeper:
    def __init__(self, service: MappingService, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError(f'Sweep interval must be positive (given value: {interval_seconds}).')

        self.service = service
        self.interval_seconds = interval_seconds
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> 'ExpirySweeper':
        if self.running:
            raise RuntimeError('Expiry sweeper is already running.')

        self._stopped.clear()
        self._thread = threading.Thread(target=self.run_forever, name='expiry-sweeper', daemon=True)
        self._thread.start()
        logger.info('Started expiry sweeper.', extra={'interval_seconds': self.interval_seconds})
        return self

    def stop(self, timeout: float | None = None) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if not self._thread.is_alive():
                self._thread = None
        logger.info('Stopped expiry sweeper.')

    def run_once(self) -> int:
        """Run a single sweep and return the number of deleted records."""
        deleted = self.service.sweep()
        logger.debug('Expiry sweep finished.', extra={'event': SWEEP_SUCCESS, 'deleted': deleted})
        return deleted

    def run_forever(self) -> None:
        """Sweep every interval until stop() is called."""
        while not self._stopped.wait(self.interval_seconds):
            try:
                self.run_once()
            except DAOError as e:
                logger.exception(
                    'Expiry sweep failed. Retrying after the next interval.',
                    extra={'event': SWEEP_FAILED, 'reason': str(e), 'error': e.__class__.__name__},
                )

    def __enter__(self) -> 'ExpirySweeper':
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.stop()
