"""GPSD client session.

Drives one connection through its life: connect, send the watch command,
read the JSON stream and deliver Fix values to the caller.

State machine::

    DISCONNECTED -> CONNECTING -> AWAITING_FIX -> FIX_ACQUIRED
                        |              |               |
                        +-----------> FAILED <---------+

A session runs once. Fatal errors (connect, write, read, end of stream)
end it in FAILED and are re-raised from ``run``; there is no automatic
reconnect, the caller builds a new session to retry.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import json
from typing import Awaitable, Callable, Dict, Optional, Union

from gpsd_locator.core.logging_utils import get_module_logger

from ..constants import DEFAULT_CONNECT_TIMEOUT
from ..errors import GPSDConnectionError, GPSDError, IncompleteFixError, MalformedRecordWarning
from ..parsers import (
    Endpoint,
    Fix,
    GPSDStreamParser,
    OperatingMode,
    RawRecord,
    SessionState,
    extract_fix,
)
from ..transports import BaseGPSDTransport, TCPGPSDTransport
from .watch import send_watch

logger = get_module_logger("GPSDSession")

FixCallback = Callable[[Fix], Optional[Awaitable[None]]]
StatusCallback = Callable[[str], None]
StateCallback = Callable[[SessionState], None]
WarningCallback = Callable[[MalformedRecordWarning], None]
TransportFactory = Callable[[Endpoint], BaseGPSDTransport]


class GPSDSession:
    """One connection to a GPSD server and the fixes it produces.

    Example:
        session = GPSDSession(Endpoint("localhost"), OperatingMode.CONTINUOUS,
                              on_fix=print)
        task = asyncio.create_task(session.run())
        ...
        session.cancel()
        last_fix = await task
    """

    def __init__(
        self,
        endpoint: Endpoint,
        mode: Union[OperatingMode, str] = OperatingMode.SINGLE_FIX,
        *,
        on_fix: Optional[FixCallback] = None,
        on_status: Optional[StatusCallback] = None,
        on_state_change: Optional[StateCallback] = None,
        on_warning: Optional[WarningCallback] = None,
        transport_factory: Optional[TransportFactory] = None,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    ):
        """Initialize the session.

        Args:
            endpoint: GPSD server address, fixed for the session's lifetime
            mode: Stop after the first fix or keep delivering fixes
            on_fix: Called in the read loop for every delivered Fix; an
                awaitable result is awaited before the next read
            on_status: Receives human-readable status strings
            on_state_change: Receives every SessionState transition
            on_warning: Receives non-fatal MalformedRecordWarning values
            transport_factory: Builds the transport (defaults to TCP)
            connect_timeout: Connect deadline for the default TCP transport
        """
        self.endpoint = endpoint
        self.mode = OperatingMode.parse(mode)

        self._on_fix = on_fix
        self._on_status = on_status
        self._on_state_change = on_state_change
        self._on_warning = on_warning
        self._transport_factory = transport_factory or (
            lambda ep: TCPGPSDTransport(ep, connect_timeout=connect_timeout)
        )

        self._parser = GPSDStreamParser(on_warning=self._on_parser_warning)
        self._transport: Optional[BaseGPSDTransport] = None
        self._state = SessionState.DISCONNECTED
        self._last_fix: Optional[Fix] = None
        self._error: Optional[BaseException] = None
        self._started = False
        self._cancel_requested = False

        self.fixes_delivered = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def last_fix(self) -> Optional[Fix]:
        return self._last_fix

    @property
    def error(self) -> Optional[BaseException]:
        """The fatal error that ended the session, if it failed."""
        return self._error

    @property
    def is_running(self) -> bool:
        return self._started and self._transport is not None

    @property
    def parser_stats(self) -> Dict[str, int]:
        return self._parser.stats

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def run(self) -> Optional[Fix]:
        """Run the session to completion.

        Returns:
            The first Fix in single-fix mode; the last delivered Fix (or
            None) once ``cancel`` stops a continuous session.

        Raises:
            GPSDError: the session failed; ``state`` is FAILED
            RuntimeError: the session was already run
        """
        if self._started:
            raise RuntimeError("GPSD session already started; create a new session to retry")
        self._started = True

        self._set_state(SessionState.CONNECTING)
        self._status(f"Connecting to GPSD at {self.endpoint}")

        transport: Optional[BaseGPSDTransport] = None
        try:
            transport = self._transport_factory(self.endpoint)
            self._transport = transport
            await transport.connect()
            if self._cancel_requested:
                return self._finish_cancelled()

            await send_watch(transport)
            self._status("Watch command sent")
            self._set_state(SessionState.AWAITING_FIX)

            return await self._read_loop(transport)

        except GPSDError as exc:
            if self._cancel_requested:
                return self._finish_cancelled()
            prefix = "Connection failed" if isinstance(exc, GPSDConnectionError) else "Session failed"
            self._fail(exc, prefix)
            raise
        except asyncio.CancelledError:
            logger.debug("Session task for %s cancelled", self.endpoint)
            self._set_state(SessionState.DISCONNECTED)
            raise
        except Exception as exc:
            self._fail(exc, "Session failed")
            raise
        finally:
            self._transport = None
            if transport is not None:
                await transport.disconnect()

    def cancel(self) -> None:
        """Ask the read loop to stop.

        The loop checks the request between reads; a read already blocked
        is released by closing the stream. Safe to call from signal
        handlers and more than once.
        """
        if self._cancel_requested:
            return
        self._cancel_requested = True
        logger.info("Cancel requested for GPSD session at %s", self.endpoint)
        if self._transport is not None:
            self._transport.close_nowait()

    # =========================================================================
    # Read Loop
    # =========================================================================

    async def _read_loop(self, transport: BaseGPSDTransport) -> Optional[Fix]:
        reports = self._parser.reports(transport, running=self._should_continue)
        async with contextlib.aclosing(reports) as records:
            async for record in records:
                fix = self._extract(record)
                if fix is None:
                    continue

                await self._deliver(fix)

                if self.mode is OperatingMode.SINGLE_FIX:
                    logger.debug("Single-fix mode: stopping read loop for %s", self.endpoint)
                    return fix

        return self._finish_cancelled()

    def _should_continue(self) -> bool:
        return not self._cancel_requested

    def _extract(self, record: RawRecord) -> Optional[Fix]:
        try:
            return extract_fix(record)
        except IncompleteFixError as exc:
            self._parser.report(MalformedRecordWarning(exc.reason, json.dumps(record)))
            return None

    async def _deliver(self, fix: Fix) -> None:
        self._last_fix = fix
        self.fixes_delivered += 1
        self._set_state(SessionState.FIX_ACQUIRED)
        self._status(f"Fix acquired! {fix.describe()}")

        if self._on_fix:
            result = self._on_fix(fix)
            if inspect.isawaitable(result):
                await result

    # =========================================================================
    # State and status reporting
    # =========================================================================

    def _finish_cancelled(self) -> Optional[Fix]:
        self._set_state(SessionState.DISCONNECTED)
        self._status(f"GPSD session at {self.endpoint} stopped")
        return self._last_fix

    def _fail(self, exc: BaseException, prefix: str) -> None:
        # Status goes out before the state change so listeners on FAILED
        # already have the message
        self._error = exc
        message = f"{prefix}: {exc}"
        logger.error(message)
        if self._on_status:
            self._on_status(message)
        self._set_state(SessionState.FAILED)

    def _set_state(self, state: SessionState) -> None:
        if state is self._state:
            return
        logger.debug("Session %s: %s -> %s", self.endpoint, self._state.value, state.value)
        self._state = state
        if self._on_state_change:
            self._on_state_change(state)

    def _status(self, message: str) -> None:
        logger.info(message)
        if self._on_status:
            self._on_status(message)

    def _on_parser_warning(self, warning: MalformedRecordWarning) -> None:
        # The parser has already logged it
        if self._on_status:
            self._on_status(f"Malformed record skipped: {warning.reason}")
        if self._on_warning:
            self._on_warning(warning)


async def check_gpsd(endpoint: Endpoint, **kwargs) -> Optional[Fix]:
    """Connect once, wait for the first fix and disconnect.

    Keyword arguments are passed to GPSDSession.

    Raises:
        GPSDError: the check failed
    """
    session = GPSDSession(endpoint, OperatingMode.SINGLE_FIX, **kwargs)
    return await session.run()


__all__ = ["GPSDSession", "FixCallback", "StatusCallback", "StateCallback", "check_gpsd"]
