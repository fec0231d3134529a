"""Unit tests for the GPSD stream parser."""

import json
import sys

import pytest

from gpsd_locator.gpsd.gpsd_core.errors import GPSDEndOfStream, GPSDReadError, MalformedRecordWarning
from gpsd_locator.gpsd.gpsd_core.parsers.gpsd_types import RecordClass
from gpsd_locator.gpsd.gpsd_core.parsers.stream_parser import GPSDStreamParser
from tests.infrastructure.mocks.gpsd_mocks import (
    DEVICES_LINE,
    SKY_LINE,
    VERSION_LINE,
    WATCH_ACK_LINE,
    ScriptedTransport,
    tpv_line,
)


class TestRecordClass:
    """Test classification of decoded records."""

    @pytest.mark.parametrize("value,expected", [
        ("TPV", RecordClass.TPV),
        ("VERSION", RecordClass.VERSION),
        ("WATCH", RecordClass.WATCH),
        ("SKY", RecordClass.SKY),
        ("DEVICES", RecordClass.DEVICES),
        ("TOFF", RecordClass.UNKNOWN),
        ("tpv", RecordClass.UNKNOWN),
        (3, RecordClass.UNKNOWN),
    ])
    def test_from_record(self, value, expected):
        assert RecordClass.from_record({"class": value}) is expected

    def test_missing_class(self):
        assert RecordClass.from_record({"lat": 1.0}) is RecordClass.UNKNOWN


class TestParseLine:
    """Test single-line classification."""

    def test_tpv_record_returned(self):
        parser = GPSDStreamParser()
        line = tpv_line(lat=40.0, lon=-105.25)
        record = parser.parse_line(line)

        assert record == json.loads(line)
        assert parser.records_decoded == 1
        assert parser.records_ignored == 0

    @pytest.mark.parametrize("line", [VERSION_LINE, WATCH_ACK_LINE, SKY_LINE, DEVICES_LINE])
    def test_other_classes_ignored(self, line):
        warnings = []
        parser = GPSDStreamParser(on_warning=warnings.append)

        assert parser.parse_line(line) is None
        assert parser.records_ignored == 1
        assert warnings == []

    def test_record_without_class_ignored(self):
        parser = GPSDStreamParser()
        assert parser.parse_line('{"lat": 40.0, "lon": -105.25}') is None
        assert parser.records_ignored == 1

    @pytest.mark.parametrize("line", ["", "   ", "foo", "$GPGGA,123519,4807.038,N*47", "[1, 2]"])
    def test_non_object_lines_skipped_silently(self, line):
        warnings = []
        parser = GPSDStreamParser(on_warning=warnings.append)

        assert parser.parse_line(line) is None
        assert warnings == []
        assert parser.malformed_lines == 0

    def test_none_line_skipped(self):
        assert GPSDStreamParser().parse_line(None) is None

    def test_broken_json_reported(self):
        warnings = []
        parser = GPSDStreamParser(on_warning=warnings.append)

        assert parser.parse_line("{broken") is None
        assert parser.malformed_lines == 1
        assert len(warnings) == 1
        assert isinstance(warnings[0], MalformedRecordWarning)
        assert warnings[0].reason.startswith("invalid JSON")
        assert warnings[0].line == "{broken"

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits"),
        reason="interpreter has no integer digit limit",
    )
    def test_integer_over_digit_limit_reported(self):
        warnings = []
        parser = GPSDStreamParser(on_warning=warnings.append)
        line = '{"class":"SKY","x":' + "9" * 5000 + "}"

        assert parser.parse_line(line) is None
        assert parser.malformed_lines == 1
        assert warnings[0].reason.startswith("undecodable JSON")

    def test_deep_nesting_reported(self):
        warnings = []
        parser = GPSDStreamParser(on_warning=warnings.append)
        line = '{"a":' + "[" * 100000 + "]" * 100000 + "}"

        assert parser.parse_line(line) is None
        assert parser.malformed_lines == 1
        assert warnings[0].reason.startswith("undecodable JSON")

    def test_parsing_continues_after_undecodable_line(self):
        parser = GPSDStreamParser()
        parser.parse_line('{"a":' + "[" * 100000 + "]" * 100000 + "}")
        assert parser.parse_line(tpv_line(lat=1.0, lon=2.0)) is not None

    def test_leading_whitespace_tolerated(self):
        parser = GPSDStreamParser()
        assert parser.parse_line("  " + tpv_line(lat=1.0, lon=2.0) + "\r") is not None

    def test_long_line_preview_truncated(self):
        warning = MalformedRecordWarning("invalid JSON", "{" + "x" * 500)
        assert len(warning.preview) < 100
        assert warning.preview.endswith("...")

    def test_stats(self):
        parser = GPSDStreamParser()
        for line in [VERSION_LINE, "{bad", tpv_line(lat=1.0, lon=2.0), ""]:
            parser.parse_line(line)

        assert parser.stats == {
            "lines_read": 4,
            "records_decoded": 2,
            "records_ignored": 1,
            "malformed_lines": 1,
        }

        parser.reset()
        assert parser.stats["lines_read"] == 0


class TestReports:
    """Test the async report generator."""

    @pytest.mark.asyncio
    async def test_yields_only_tpv(self):
        lines = [
            VERSION_LINE,
            WATCH_ACK_LINE,
            "foo",
            "{broken",
            tpv_line(lat=1.0, lon=2.0),
            SKY_LINE,
            tpv_line(lat=3.0, lon=4.0),
        ]
        transport = ScriptedTransport(lines)
        await transport.connect()
        parser = GPSDStreamParser()

        collected = []
        with pytest.raises(GPSDEndOfStream):
            async for record in parser.reports(transport):
                collected.append(record)

        assert [(r["lat"], r["lon"]) for r in collected] == [(1.0, 2.0), (3.0, 4.0)]
        assert parser.malformed_lines == 1

    @pytest.mark.asyncio
    async def test_read_error_propagates(self):
        transport = ScriptedTransport([VERSION_LINE, VERSION_LINE], read_error_after=1)
        await transport.connect()

        with pytest.raises(GPSDReadError):
            async for _ in GPSDStreamParser().reports(transport):
                pass

    @pytest.mark.asyncio
    async def test_running_predicate_stops_loop(self):
        transport = ScriptedTransport([tpv_line(lat=1.0, lon=2.0)] * 5)
        await transport.connect()

        collected = []
        async for record in GPSDStreamParser().reports(transport, running=lambda: len(collected) < 2):
            collected.append(record)

        assert len(collected) == 2
        assert transport.reads == 2
