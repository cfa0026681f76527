"""
Patient Insights - Snapshot Loading
===================================

Single entry point for getting the snapshot into the dashboard.

Data Flow
---------
1. ``DATA_SOURCE`` (config)  -->  local path or http(s) URL
2. ``fetch_snapshot``       -->  raw bytes  -->  ``json.loads``
3. ``DashboardSnapshot.from_dict``  -->  validated, immutable snapshot

Load lifecycle
--------------
``SnapshotLoader`` runs the fetch on a single background worker so the page
can paint its loading placeholder before the read completes.  Its ``state``
is a tagged union::

    Loading  --(fetch ok)-------->  Loaded(snapshot)     terminal
    Loading  --(error/timeout)--->  Failed(error)
    Failed   --(retry())--------->  Loading

Exactly one fetch is in flight at a time.  A timed-out or cancelled fetch
is abandoned; if it completes later its result is discarded.

Handles:
- Reading from disk or over HTTP (``requests``) with a timeout
- Turning every failure mode into ``SnapshotLoadError`` with a clear message
- Non-blocking start, bounded wait, cancel and retry
"""

import json
import logging
import threading
import weakref
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

import requests

from patient_insights.utils.config import DATA_SOURCE, FETCH_TIMEOUT
from patient_insights.utils.models import DashboardSnapshot, SnapshotLoadError

logger = logging.getLogger(__name__)


# ============================================================================
# FETCH
# ============================================================================

def is_url(source: str) -> bool:
    return str(source).lower().startswith(('http://', 'https://'))


def _read_source(source: str, timeout: float) -> bytes:
    if is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
        except requests.exceptions.Timeout as e:
            raise SnapshotLoadError(f"Timed out after {timeout:g}s fetching {source}") from e
        except requests.exceptions.RequestException as e:
            raise SnapshotLoadError(f"Cannot fetch {source}: {e}") from e
        if not response.ok:
            raise SnapshotLoadError(
                f"Fetching {source} failed with HTTP {response.status_code}"
            )
        return response.content

    path = Path(source)
    if not path.is_file():
        raise SnapshotLoadError(f"Snapshot file not found: {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise SnapshotLoadError(f"Cannot read {path}: {e}") from e


def fetch_snapshot(source: str = DATA_SOURCE,
                   timeout: float = FETCH_TIMEOUT) -> DashboardSnapshot:
    """Read, decode and validate the snapshot at *source*.

    Args:
        source: Local file path or http(s) URL of the JSON document.
        timeout: Seconds allowed for the HTTP request.  Ignored for files.

    Returns:
        The validated ``DashboardSnapshot``.

    Raises:
        SnapshotLoadError: Network error, non-2xx status, missing file or
            malformed JSON.
        SnapshotValidationError: The JSON does not match the schema.
    """
    raw = _read_source(source, timeout)
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise SnapshotLoadError(f"Snapshot at {source} is not valid JSON: {e}") from e
    return DashboardSnapshot.from_dict(payload)


# ============================================================================
# LOAD STATE
# ============================================================================

@dataclass(frozen=True)
class Loading:
    """Fetch issued, not yet resolved."""


@dataclass(frozen=True)
class Loaded:
    snapshot: DashboardSnapshot


@dataclass(frozen=True)
class Failed:
    error: str


LoadState = Union[Loading, Loaded, Failed]


class SnapshotLoader:
    """Owns the one background fetch for a dashboard session.

    Typical use from a Streamlit page::

        loader = SnapshotLoader()
        loader.start()
        if isinstance(loader.state, Loading):
            render_loading()
            loader.wait()
            st.rerun()

    Args:
        source: Path or URL handed to *fetch*.
        timeout: Seconds ``wait`` blocks before giving up on the fetch.
        fetch: Callable ``(source, timeout) -> DashboardSnapshot``.
    """

    def __init__(self, source: str = DATA_SOURCE, timeout: float = FETCH_TIMEOUT,
                 fetch: Callable[[str, float], DashboardSnapshot] = fetch_snapshot):
        self.source = source
        self.timeout = timeout
        self._fetch = fetch
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="snapshot-fetch")
        # Streamlit has no session-end hook; when the session state holding
        # this loader is dropped, cancel whatever is still queued.
        weakref.finalize(self, self._executor.shutdown, wait=False, cancel_futures=True)
        self._lock = threading.Lock()
        self._future: Optional[Future] = None
        self._state: LoadState = Loading()
        self.fetch_count = 0

    @property
    def state(self) -> LoadState:
        with self._lock:
            return self._state

    def start(self) -> None:
        """Issue the fetch unless one is already in flight or resolved."""
        with self._lock:
            if self._future is not None or not isinstance(self._state, Loading):
                return
            logger.info(f"Fetching snapshot from {self.source}")
            self.fetch_count += 1
            future = self._executor.submit(self._fetch, self.source, self.timeout)
            self._future = future
        future.add_done_callback(self._on_done)

    def _on_done(self, future: Future) -> None:
        with self._lock:
            # Abandoned futures (cancel, timeout, retry) and already-recorded
            # results leave the state alone.
            if future is not self._future or not isinstance(self._state, Loading):
                return
            if future.cancelled():
                return
            error = future.exception()
            if error is None:
                snapshot = future.result()
                self._state = Loaded(snapshot)
                logger.info(f"Snapshot loaded: {snapshot.total_patients:,} patients")
            elif isinstance(error, SnapshotLoadError):
                self._state = Failed(str(error))
                logger.error(f"Snapshot load failed: {error}")
            else:
                self._state = Failed(f"Unexpected error loading snapshot: {error}")
                logger.error("Unexpected error loading snapshot", exc_info=error)

    def wait(self, timeout: Optional[float] = None) -> LoadState:
        """Block until the fetch resolves, at most *timeout* seconds.

        On timeout the fetch is cancelled and the state becomes ``Failed``.
        """
        timeout = self.timeout if timeout is None else timeout
        future = self._future
        if future is None:
            return self.state
        try:
            future.result(timeout=timeout)
        except FutureTimeoutError:
            self.cancel(reason=f"Timed out after {timeout:g}s waiting for {self.source}")
            return self.state
        except CancelledError:
            return self.state
        except Exception:
            # The fetch error is turned into Failed(...) by _on_done below.
            pass
        # result() can return before done-callbacks have run; record it here too.
        self._on_done(future)
        return self.state

    def cancel(self, reason: str = "Snapshot load cancelled") -> None:
        """Abandon the in-flight fetch and mark the load as failed."""
        with self._lock:
            future, self._future = self._future, None
            if future is None or not isinstance(self._state, Loading):
                return
            future.cancel()
            self._state = Failed(reason)
        logger.warning(reason)

    def retry(self) -> None:
        """Start a fresh fetch after a failure.  No-op in any other state."""
        with self._lock:
            if not isinstance(self._state, Failed):
                return
            self._state = Loading()
            self._future = None
        self.start()

    def close(self) -> None:
        """Cancel anything pending and release the worker thread."""
        self.cancel(reason="Snapshot loader closed")
        self._executor.shutdown(wait=False, cancel_futures=True)
