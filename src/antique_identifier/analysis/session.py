"""
Asynchronous, last-write-wins analysis for an interactive caller.

Each submit() supersedes the previous one. A superseded analysis that has not
started is cancelled; one already running is allowed to finish but its result
is dropped, so a callback only receives a result that was current when it
was published.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from ..imaging import ImageSource
from ..logging import get_logger
from .orchestrator import AntiqueAnalyzer
from .result import CombinedAnalysisResult

logger = get_logger(__name__)

ResultCallback = Callable[[CombinedAnalysisResult], None]


class AnalysisSession:
    def __init__(self, analyzer: AntiqueAnalyzer, executor: Optional[ThreadPoolExecutor] = None):
        self.analyzer = analyzer
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="antique-analysis")
        self._owns_executor = executor is None
        self._lock = threading.Lock()
        self._publish_lock = threading.Lock()
        self._generation = 0
        self._pending: Optional[Future] = None
        self._latest: Optional[CombinedAnalysisResult] = None

    @property
    def latest_result(self) -> Optional[CombinedAnalysisResult]:
        """Result of the most recent analysis that was published."""
        with self._lock:
            return self._latest

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def submit(self, image: ImageSource, callback: Optional[ResultCallback] = None) -> Future:
        """
        Start analysing an image, superseding any analysis still pending.

        Returns:
            Future resolving to the result, or to None if superseded while
            running. A future superseded before it started is cancelled, so
            its result() raises CancelledError.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            previous = self._pending
            if previous is not None and not previous.done():
                if previous.cancel():
                    logger.debug("Cancelled pending analysis before it started")
                else:
                    logger.debug("Superseded running analysis; its result will be discarded")
            self._latest = None
            future = self._executor.submit(self._run, generation, image, callback)
            self._pending = future
        return future

    def cancel(self) -> None:
        """Discard whatever analysis is pending."""
        with self._lock:
            self._generation += 1
            if self._pending is not None:
                self._pending.cancel()
            self._pending = None

    def close(self, wait: bool = True) -> None:
        self.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "AnalysisSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _run(self, generation: int, image: ImageSource,
             callback: Optional[ResultCallback]) -> Optional[CombinedAnalysisResult]:
        result = self.analyzer.analyze(image)

        # Callbacks are serialised by _publish_lock and never run while _lock is held
        with self._publish_lock:
            with self._lock:
                if generation != self._generation:
                    logger.debug(f"Discarding stale analysis result (generation {generation})")
                    return None
                self._latest = result

            if callback is not None:
                try:
                    callback(result)
                except Exception as exc:
                    logger.error(f"Analysis result callback failed: {exc}")
        return result
