"""Line-oriented parsing of the GPSD JSON stream.

Every line GPSD sends in watch mode is one JSON object. This module
decodes lines, classifies them by their ``class`` member and passes on
only position reports (TPV). Everything else is either ignored protocol
traffic (VERSION, WATCH, SKY, DEVICES, ...) or a malformed line that is
reported and skipped.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, AsyncIterator, Callable, Dict, Optional

from gpsd_locator.core.logging_utils import get_module_logger

from ..errors import MalformedRecordWarning
from .gpsd_types import RawRecord, RecordClass

if TYPE_CHECKING:
    from ..transports import BaseGPSDTransport

logger = get_module_logger("GPSDStreamParser")

WarningCallback = Callable[[MalformedRecordWarning], None]


class GPSDStreamParser:
    """Stateless-per-line GPSD JSON parser with running counters."""

    def __init__(self, on_warning: Optional[WarningCallback] = None) -> None:
        self._on_warning = on_warning
        self.lines_read = 0
        self.records_decoded = 0
        self.records_ignored = 0
        self.malformed_lines = 0

    def reset(self) -> None:
        self.lines_read = 0
        self.records_decoded = 0
        self.records_ignored = 0
        self.malformed_lines = 0

    @property
    def stats(self) -> Dict[str, int]:
        return {
            "lines_read": self.lines_read,
            "records_decoded": self.records_decoded,
            "records_ignored": self.records_ignored,
            "malformed_lines": self.malformed_lines,
        }

    def report(self, warning: MalformedRecordWarning) -> None:
        """Log a non-fatal problem and forward it to the warning callback."""
        if warning.line:
            logger.warning("Skipping malformed record (%s): %s", warning.reason, warning.preview)
        else:
            logger.warning("Skipping malformed record: %s", warning.reason)
        if self._on_warning:
            self._on_warning(warning)

    def parse_line(self, line: Optional[str]) -> Optional[RawRecord]:
        """Classify one line. Returns the decoded record only for TPV reports."""
        self.lines_read += 1

        if not line:
            return None
        text = line.strip()
        # Keep-alives and anything that cannot be a JSON object
        if not text.startswith("{"):
            return None

        try:
            record = json.loads(text)
        except json.JSONDecodeError as exc:
            self.malformed_lines += 1
            self.report(MalformedRecordWarning(f"invalid JSON: {exc.msg}", text))
            return None
        except (ValueError, RecursionError) as exc:
            # Syntactically valid but undecodable: digit limit or nesting depth
            self.malformed_lines += 1
            self.report(MalformedRecordWarning(f"undecodable JSON: {exc}", text))
            return None

        if not isinstance(record, dict):
            self.malformed_lines += 1
            self.report(MalformedRecordWarning("JSON value is not an object", text))
            return None

        self.records_decoded += 1
        record_class = RecordClass.from_record(record)
        if record_class is not RecordClass.TPV:
            self.records_ignored += 1
            logger.debug("Ignoring %s record", record.get("class", record_class.value))
            return None

        return record

    async def reports(
        self,
        transport: "BaseGPSDTransport",
        running: Optional[Callable[[], bool]] = None,
    ) -> AsyncIterator[RawRecord]:
        """Yield TPV records read from ``transport``.

        Stops when ``running`` returns False (checked before every read).
        Transport errors, end of stream included, propagate to the caller;
        malformed lines never do.
        """
        while running is None or running():
            line = await transport.read_line()
            record = self.parse_line(line)
            if record is not None:
                yield record


__all__ = ["GPSDStreamParser", "WarningCallback"]
