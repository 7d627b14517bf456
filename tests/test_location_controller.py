from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from screenkit.config import ScreenConfig
from screenkit.exceptions import LocationErrorKind
from screenkit.location import LocationController
from screenkit.models.connectivity import ConnectivityState
from screenkit.models.location import (
    LocationAccuracy,
    LocationFailed,
    LocationLoading,
    LocationReady,
    LocationStatus,
    PermissionStatus,
)

SF_FIX = {"coords": {"latitude": 37.7749, "longitude": -122.4194, "accuracy": 5.0}, "timestamp": 1760000000000}


@dataclass
class FakeNotifier:
    alerts: list[tuple[str, str]] = field(default_factory=list)

    def alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))


@dataclass
class FakeLocationProvider:
    permission: Any = "granted"
    fix: Any = field(default_factory=lambda: dict(SF_FIX))
    fix_error: Exception | None = None
    permission_error: Exception | None = None
    permission_calls: int = 0
    fix_calls: list[LocationAccuracy] = field(default_factory=list)

    async def request_foreground_permission(self) -> Any:
        self.permission_calls += 1
        if self.permission_error is not None:
            raise self.permission_error
        return self.permission

    async def get_current_fix(self, accuracy: LocationAccuracy) -> Any:
        self.fix_calls.append(accuracy)
        if self.fix_error is not None:
            raise self.fix_error
        return self.fix


@dataclass
class FakeNetwork:
    state: Any = field(default_factory=lambda: {"isConnected": True, "isInternetReachable": True})
    error: Exception | None = None
    calls: int = 0

    async def get_network_state(self) -> Any:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.state


class GatedLocationProvider:
    """Permission is granted immediately; every fix waits on a future the test resolves."""

    def __init__(self) -> None:
        self.pending: list[asyncio.Future[Any]] = []

    async def request_foreground_permission(self) -> PermissionStatus:
        return PermissionStatus.GRANTED

    async def get_current_fix(self, accuracy: LocationAccuracy) -> Any:
        fut: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self.pending.append(fut)
        return await fut


class GatedNetwork:
    def __init__(self) -> None:
        self.pending: list[asyncio.Future[Any]] = []

    async def get_network_state(self) -> Any:
        fut: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self.pending.append(fut)
        return await fut


async def _until(predicate: Callable[[], bool], *, rounds: int = 100) -> None:
    for _ in range(rounds):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


def _controller(
    location: Any | None = None,
    network: Any | None = None,
    notifier: FakeNotifier | None = None,
    **kwargs: Any,
) -> LocationController:
    return LocationController(
        location if location is not None else FakeLocationProvider(),
        network if network is not None else FakeNetwork(),
        notifier if notifier is not None else FakeNotifier(),
        **kwargs,
    )


# ------------------------------------------------------------------
# Acquisition outcomes
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_granted_permission_and_fix_end_ready() -> None:
    location = FakeLocationProvider()
    notifier = FakeNotifier()
    ctl = _controller(location, notifier=notifier)

    assert ctl.state == LocationLoading()
    state = await ctl.acquire()

    assert state == LocationReady(latitude=37.7749, longitude=-122.4194, span_lat=0.01, span_lon=0.01)
    assert ctl.state is state
    assert location.fix_calls == [LocationAccuracy.HIGH]
    assert notifier.alerts == []


@pytest.mark.asyncio
async def test_spans_and_accuracy_come_from_config() -> None:
    location = FakeLocationProvider()
    config = ScreenConfig(span_lat=0.05, span_lon=0.02, location_accuracy="balanced")
    ctl = _controller(location, config=config)

    state = await ctl.acquire()

    assert isinstance(state, LocationReady)
    assert (state.span_lat, state.span_lon) == (0.05, 0.02)
    assert location.fix_calls == [LocationAccuracy.BALANCED]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["denied", "undetermined", "restricted", PermissionStatus.DENIED, None])
async def test_permission_denial_never_requests_a_fix(status: Any) -> None:
    location = FakeLocationProvider(permission=status)
    notifier = FakeNotifier()
    ctl = _controller(location, notifier=notifier)

    state = await ctl.acquire()

    assert state == LocationFailed(message="permission denied", kind=LocationErrorKind.PERMISSION_DENIED)
    assert location.fix_calls == []
    assert notifier.alerts == [("Permission denied", "The app needs access to your location to work")]


@pytest.mark.asyncio
async def test_uppercase_granted_status_is_accepted() -> None:
    ctl = _controller(FakeLocationProvider(permission="GRANTED"))

    assert isinstance(await ctl.acquire(), LocationReady)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "location",
    [
        FakeLocationProvider(fix_error=TimeoutError("fix timed out")),
        FakeLocationProvider(fix_error=RuntimeError("location services disabled")),
        FakeLocationProvider(fix={"coords": {"accuracy": 10}}),
        FakeLocationProvider(fix={"latitude": 123.0, "longitude": 0.0}),
        FakeLocationProvider(permission_error=RuntimeError("permission dialog crashed")),
    ],
    ids=["timeout", "provider-error", "missing-coords", "out-of-range", "permission-raises"],
)
async def test_provider_failures_end_in_fetch_error(location: FakeLocationProvider) -> None:
    notifier = FakeNotifier()
    ctl = _controller(location, notifier=notifier)

    state = await ctl.acquire()

    assert state == LocationFailed(message="location fetch failed", kind=LocationErrorKind.ACQUISITION_FAILURE)
    assert notifier.alerts == [("Error", "Could not get your location")]


@pytest.mark.asyncio
async def test_flat_fix_payload_is_accepted() -> None:
    ctl = _controller(FakeLocationProvider(fix={"latitude": "48.8566", "longitude": "2.3522"}))

    state = await ctl.acquire()

    assert state == LocationReady(latitude=48.8566, longitude=2.3522)


# ------------------------------------------------------------------
# Retry / sequential cycles
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_retry_after_failure_ends_in_single_ready_state() -> None:
    location = FakeLocationProvider(fix_error=RuntimeError("no signal"))
    ctl = _controller(location)

    first = await ctl.acquire()
    assert isinstance(first, LocationFailed)

    location.fix_error = None
    second = await ctl.retry()

    assert isinstance(second, LocationReady)
    assert ctl.state is second
    assert location.permission_calls == 2


@pytest.mark.asyncio
async def test_retry_resets_to_loading_before_running_again() -> None:
    seen: list[LocationStatus] = []
    ctl = _controller(on_change=lambda c: seen.append(c.state.status))

    await ctl.acquire()
    seen.clear()
    await ctl.retry()

    assert seen[0] is LocationStatus.LOADING
    assert seen[-1] is LocationStatus.READY


@pytest.mark.asyncio
async def test_failed_callback_does_not_break_the_cycle() -> None:
    def _boom(_ctl: LocationController) -> None:
        raise RuntimeError("render failed")

    ctl = _controller(on_change=_boom)

    assert isinstance(await ctl.acquire(), LocationReady)


@pytest.mark.asyncio
async def test_failing_notifier_does_not_break_the_cycle() -> None:
    class _BrokenNotifier(FakeNotifier):
        def alert(self, title: str, message: str) -> None:
            raise RuntimeError("alert surface unavailable")

    ctl = _controller(FakeLocationProvider(permission="denied"), notifier=_BrokenNotifier())

    state = await ctl.acquire()

    assert state == LocationFailed(message="permission denied", kind=LocationErrorKind.PERMISSION_DENIED)
    assert ctl.state is state
    assert not ctl.is_loading


@pytest.mark.asyncio
async def test_context_manager_acquires_on_enter() -> None:
    async with _controller() as ctl:
        assert isinstance(ctl.state, LocationReady)
        assert not ctl.is_loading


# ------------------------------------------------------------------
# Superseded cycles
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_stale_success_does_not_overwrite_newer_cycle() -> None:
    location = GatedLocationProvider()
    notifier = FakeNotifier()
    ctl = _controller(location, notifier=notifier)

    task_a = asyncio.create_task(ctl.acquire())
    await _until(lambda: len(location.pending) == 1)
    task_b = asyncio.create_task(ctl.retry())
    await _until(lambda: len(location.pending) == 2)

    location.pending[0].set_result({"latitude": 1.0, "longitude": 2.0})
    await task_a
    assert ctl.state == LocationLoading()

    location.pending[1].set_exception(RuntimeError("provider down"))
    await task_b

    assert ctl.state == LocationFailed(message="location fetch failed", kind=LocationErrorKind.ACQUISITION_FAILURE)
    assert notifier.alerts == [("Error", "Could not get your location")]


@pytest.mark.asyncio
async def test_stale_failure_after_newer_success_is_silent() -> None:
    location = GatedLocationProvider()
    notifier = FakeNotifier()
    ctl = _controller(location, notifier=notifier)

    task_a = asyncio.create_task(ctl.acquire())
    await _until(lambda: len(location.pending) == 1)
    task_b = asyncio.create_task(ctl.retry())
    await _until(lambda: len(location.pending) == 2)

    location.pending[1].set_result({"latitude": 37.7749, "longitude": -122.4194})
    await task_b
    location.pending[0].set_exception(TimeoutError("late timeout"))
    await task_a

    assert ctl.state == LocationReady(latitude=37.7749, longitude=-122.4194)
    assert notifier.alerts == []


@pytest.mark.asyncio
async def test_close_discards_in_flight_cycle() -> None:
    location = GatedLocationProvider()
    ctl = _controller(location)

    task = asyncio.create_task(ctl.acquire())
    await _until(lambda: len(location.pending) == 1)
    ctl.close()
    location.pending[0].set_result({"latitude": 1.0, "longitude": 2.0})
    await task

    assert ctl.state == LocationLoading()


# ------------------------------------------------------------------
# Connectivity sample
# ------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("network_state", "expected"),
    [
        ({"isConnected": True, "isInternetReachable": True}, ConnectivityState.CONNECTED),
        ({"isConnected": True, "isInternetReachable": False}, ConnectivityState.DISCONNECTED),
        ({"isConnected": True, "isInternetReachable": None}, ConnectivityState.DISCONNECTED),
        ({"isConnected": False, "isInternetReachable": True}, ConnectivityState.DISCONNECTED),
    ],
)
async def test_connectivity_sample_is_recorded(network_state: dict[str, Any], expected: ConnectivityState) -> None:
    ctl = _controller(network=FakeNetwork(state=network_state))

    assert ctl.connectivity is ConnectivityState.UNKNOWN
    await ctl.acquire()
    await ctl.settle()

    assert ctl.connectivity is expected


@pytest.mark.asyncio
async def test_connectivity_failure_leaves_acquisition_ready() -> None:
    network = FakeNetwork(error=OSError("network module unavailable"))
    notifier = FakeNotifier()
    ctl = _controller(network=network, notifier=notifier)

    state = await ctl.acquire()
    await ctl.settle()

    assert isinstance(state, LocationReady)
    assert ctl.connectivity is ConnectivityState.UNKNOWN
    assert network.calls == 1
    assert notifier.alerts == []


@pytest.mark.asyncio
async def test_pending_connectivity_check_does_not_block_location() -> None:
    network = GatedNetwork()
    ctl = _controller(network=network)

    state = await ctl.acquire()

    assert isinstance(state, LocationReady)
    assert ctl.connectivity is ConnectivityState.UNKNOWN
    ctl.close()


@pytest.mark.asyncio
async def test_stale_connectivity_sample_is_discarded() -> None:
    network = GatedNetwork()
    ctl = _controller(network=network)

    await ctl.acquire()
    await ctl.retry()
    await _until(lambda: len(network.pending) == 2)

    network.pending[0].set_result({"isConnected": False, "isInternetReachable": False})
    await asyncio.sleep(0)
    assert ctl.connectivity is ConnectivityState.UNKNOWN

    network.pending[1].set_result({"isConnected": True, "isInternetReachable": True})
    await ctl.settle()
    assert ctl.connectivity is ConnectivityState.CONNECTED
