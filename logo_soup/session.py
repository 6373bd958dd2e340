"""Recompute normalised logos whenever inputs change, keeping only the latest result."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Sequence

from .config import NormalizeOptions
from .imaging.decode import ImageLoader
from .io.models import NormalizedLogo
from .pipeline import BatchCancelled, CancellationToken, LogoInput, process_logos

logger = logging.getLogger(__name__)


class LogoSoupSession:
    """Runs logo batches on a background worker; the most recent request wins.

    Each :meth:`update` cancels the batch before it. A batch whose token has been
    superseded never touches :attr:`normalized_logos` or :attr:`error`, even if
    it finishes after the newer one started.
    """

    def __init__(self, loader: ImageLoader | None = None) -> None:
        self._loader = loader
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="logo-soup")
        self._lock = Lock()
        self._token: CancellationToken | None = None
        self._logos: list[NormalizedLogo] = []
        self._error: Exception | None = None
        self._loading = False

    def __enter__(self) -> LogoSoupSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._loading

    @property
    def is_ready(self) -> bool:
        with self._lock:
            return not self._loading and self._error is None

    @property
    def normalized_logos(self) -> list[NormalizedLogo]:
        with self._lock:
            return list(self._logos)

    @property
    def error(self) -> Exception | None:
        with self._lock:
            return self._error

    def update(
        self, logos: Sequence[LogoInput], options: NormalizeOptions | None = None
    ) -> Future[list[NormalizedLogo]]:
        """Start a new batch for *logos*, abandoning whichever batch is in flight."""
        token = CancellationToken()
        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._token = token
            self._error = None
            if not logos:
                self._logos = []
                self._loading = False
                done: Future[list[NormalizedLogo]] = Future()
                done.set_result([])
                return done
            self._loading = True
        return self._executor.submit(self._run, list(logos), options, token)

    def close(self) -> None:
        """Cancel any pending batch and stop the worker."""
        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._token = None
            self._loading = False
        self._executor.shutdown(wait=True)

    def _run(
        self,
        logos: list[LogoInput],
        options: NormalizeOptions | None,
        token: CancellationToken,
    ) -> list[NormalizedLogo]:
        try:
            results = process_logos(logos, options, loader=self._loader, token=token)
        except BatchCancelled:
            logger.debug("Discarding cancelled logo batch")
            raise
        except Exception as exc:
            with self._lock:
                if self._token is token:
                    self._error = exc
                    self._loading = False
            raise
        with self._lock:
            if self._token is not token:
                logger.debug("Discarding superseded logo batch")
                raise BatchCancelled("Logo batch was superseded")
            self._logos = results
            self._loading = False
        return results
