"""Location/connectivity controller.

Drives one acquisition cycle at a time: permission request, a single
high-accuracy fix, and a best-effort connectivity sample running beside
it. Every write is tagged with the cycle that produced it so a slow,
superseded cycle can never overwrite the state of a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from screenkit.config import ScreenConfig
from screenkit.exceptions import (
    ConnectivityCheckError,
    LocationAcquisitionError,
    LocationError,
    PermissionDeniedError,
)
from screenkit.models.connectivity import ConnectivityState, NetworkState
from screenkit.models.location import (
    Fix,
    LocationAccuracy,
    LocationFailed,
    LocationLoading,
    LocationReady,
    LocationState,
    LocationStatus,
    PermissionStatus,
)
from screenkit.providers import ConnectivityProvider, LocationProvider, Notifier

_logger = logging.getLogger(__name__)


class LocationController:
    """Acquire a one-shot location fix annotated with connectivity.

    Usage::

        async with LocationController(location, network, notifier) as ctl:
            if ctl.state.status is LocationStatus.ERROR:
                await ctl.retry()

    ``acquire()`` and ``retry()`` never raise for provider failures; the
    outcome is reported through :attr:`state` and, for errors, a blocking
    notice on the *notifier*.
    """

    def __init__(
        self,
        location_provider: LocationProvider,
        connectivity_provider: ConnectivityProvider,
        notifier: Notifier,
        *,
        config: ScreenConfig | None = None,
        on_change: Callable[[LocationController], None] | None = None,
    ) -> None:
        self._location_provider = location_provider
        self._connectivity_provider = connectivity_provider
        self._notifier = notifier
        self._config = config or ScreenConfig()
        self._on_change = on_change
        self._state: LocationState = LocationLoading()
        self._connectivity = ConnectivityState.UNKNOWN
        self._generation = 0
        self._connectivity_task: asyncio.Task[None] | None = None
        self._background: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> LocationController:
        await self.acquire()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> LocationState:
        return self._state

    @property
    def connectivity(self) -> ConnectivityState:
        return self._connectivity

    @property
    def is_loading(self) -> bool:
        return self._state.status is LocationStatus.LOADING

    # ------------------------------------------------------------------
    # Acquisition cycle
    # ------------------------------------------------------------------

    async def acquire(self) -> LocationState:
        """Run a full acquisition cycle and return the resulting state.

        Starting a cycle supersedes any cycle still in flight: the older
        cycle's provider calls are left to finish but their results are
        discarded. If this cycle is itself superseded, the state current
        at the time it finishes is returned.
        """
        self._generation += 1
        token = self._generation
        _logger.debug("Location cycle %d started", token)
        self._apply(token, LocationLoading())
        self._start_connectivity_sample(token)

        try:
            fix = await self._acquire_fix()
        except LocationError as exc:
            _logger.debug("Location cycle %d failed: %s", token, exc)
            if self._apply(token, LocationFailed(message=exc.state_message, kind=exc.kind)):
                self._alert(exc.title, exc.notice)
            return self._state

        self._apply(
            token,
            LocationReady(
                latitude=fix.latitude,
                longitude=fix.longitude,
                span_lat=self._config.span_lat,
                span_lon=self._config.span_lon,
            ),
        )
        return self._state

    async def retry(self) -> LocationState:
        """Discard the current state and re-run the cycle from the start."""
        _logger.debug("Location retry requested (state=%s)", self._state.status)
        return await self.acquire()

    async def settle(self) -> None:
        """Wait for the connectivity sample of the current cycle to finish."""
        task = self._connectivity_task
        if task is not None and not task.done():
            await asyncio.shield(task)

    def close(self) -> None:
        """Invalidate in-flight cycles and drop pending connectivity samples."""
        self._generation += 1
        for task in list(self._background):
            if not task.done():
                task.cancel()
        self._background.clear()
        self._connectivity_task = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _acquire_fix(self) -> Fix:
        try:
            status = PermissionStatus(await self._location_provider.request_foreground_permission())
        except Exception as exc:
            raise LocationAcquisitionError(f"Permission request failed: {exc}") from exc

        if status is not PermissionStatus.GRANTED:
            raise PermissionDeniedError(f"Foreground location permission not granted (status={status})")

        accuracy = LocationAccuracy(self._config.location_accuracy)
        try:
            raw = await self._location_provider.get_current_fix(accuracy)
            return Fix.model_validate(raw)
        except Exception as exc:
            raise LocationAcquisitionError(f"Could not resolve a location fix: {exc}") from exc

    def _start_connectivity_sample(self, token: int) -> None:
        # A previous sample is not cancelled; its result is discarded by token.
        task = asyncio.create_task(self._sample_connectivity(token))
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        self._connectivity_task = task

    async def _sample_connectivity(self, token: int) -> None:
        try:
            connectivity = await self._check_connectivity()
        except ConnectivityCheckError:
            _logger.debug("Connectivity check failed; keeping %s", self._connectivity, exc_info=True)
            return
        if token != self._generation:
            _logger.debug("Discarding connectivity sample from stale cycle %d", token)
            return
        self._connectivity = connectivity
        self._notify()

    async def _check_connectivity(self) -> ConnectivityState:
        try:
            raw = await self._connectivity_provider.get_network_state()
            return NetworkState.model_validate(raw).to_connectivity()
        except Exception as exc:
            raise ConnectivityCheckError(f"Network state unavailable: {exc}") from exc

    def _apply(self, token: int, state: LocationState) -> bool:
        """Write *state* if *token* still identifies the latest cycle."""
        if token != self._generation:
            _logger.debug("Discarding %s result from stale cycle %d", state.status, token)
            return False
        self._state = state
        self._notify()
        return True

    def _alert(self, title: str, message: str) -> None:
        try:
            self._notifier.alert(title, message)
        except Exception:
            _logger.debug("Notifier alert failed", exc_info=True)

    def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self)
        except Exception:
            _logger.debug("on_change callback failed", exc_info=True)
