"""
Tests for RFC 9211 Cache-Status parsing.

RFC reference: https://www.rfc-editor.org/rfc/rfc9211.html
"""

from typing import Any

import pytest
from inline_snapshot import snapshot

from cachescope import AnalysisOptions, CacheStatusEntry, CacheStatusParameters, ForwardReason, parse_cache_status
from cachescope._core._cache_status import parse_integer_parameter


class TestParsing:
    def test_single_entry_with_hit(self) -> None:
        assert parse_cache_status('"Netlify Edge"; hit') == [
            CacheStatusEntry(
                cache_name="Netlify Edge",
                parameters=CacheStatusParameters(
                    hit=True,
                    fwd=None,
                    fwd_status=None,
                    ttl=None,
                    stored=False,
                    collapsed=False,
                    key=None,
                    detail=None,
                ),
            )
        ]

    def test_empty_string(self, caplog: Any) -> None:
        with caplog.at_level("WARNING"):
            assert parse_cache_status("") == []
        assert caplog.record_tuples == []

    def test_multiple_entries_are_presented_closest_to_user_first(self) -> None:
        entries = parse_cache_status('"Next.js"; hit, "Netlify Durable"; fwd=miss; stored, "Netlify Edge"; fwd=miss')

        assert [entry.cache_name for entry in entries] == ["Netlify Edge", "Netlify Durable", "Next.js"]
        assert entries[0].parameters.fwd is ForwardReason.MISS
        assert entries[1].parameters.stored is True
        assert entries[1].parameters.fwd is ForwardReason.MISS
        assert entries[2].parameters.hit is True

    def test_numeric_parameters(self) -> None:
        (entry,) = parse_cache_status('"Netlify Edge"; hit; fwd-status=200; ttl=3600')

        assert entry.parameters.fwd_status == 200
        assert entry.parameters.ttl == 3600

    @pytest.mark.parametrize("value", ["abc", "-5", "", "1_000", "+5", "5.0"])
    def test_invalid_numeric_parameters_are_absent(self, value: str) -> None:
        (entry,) = parse_cache_status(f'"Netlify Edge"; hit; ttl={value}; fwd-status={value}')

        assert entry.parameters.ttl is None
        assert entry.parameters.fwd_status is None

    def test_string_parameters(self) -> None:
        (entry,) = parse_cache_status('"Netlify Edge"; hit; key=cache-key-123; detail=some-detail')

        assert entry.parameters.key == "cache-key-123"
        assert entry.parameters.detail == "some-detail"

    def test_collapsed(self) -> None:
        (entry,) = parse_cache_status('"Netlify Edge"; fwd=miss; collapsed')

        assert entry.parameters.collapsed is True
        assert entry.parameters.hit is False

    @pytest.mark.parametrize("reason", [reason.value for reason in ForwardReason])
    def test_forward_reasons(self, reason: str) -> None:
        (entry,) = parse_cache_status(f'"Cache"; fwd={reason}')

        assert entry.parameters.fwd == ForwardReason(reason)
        assert entry.parameters.fwd == reason

    def test_unknown_forward_reason(self, caplog: Any) -> None:
        with caplog.at_level("WARNING"):
            (entry,) = parse_cache_status('"Cache"; fwd=teleport')

        assert entry.parameters.fwd is None
        assert caplog.record_tuples == snapshot(
            [
                (
                    "cachescope.core.cache_status",
                    30,
                    "Ignoring unknown forward reason 'teleport' in cache status entry '\"Cache\"; fwd=teleport'",
                )
            ]
        )

    def test_unquoted_cache_name(self) -> None:
        (entry,) = parse_cache_status("ExampleCache; hit")

        assert entry.cache_name == "ExampleCache"


class TestDroppingInvalidSegments:
    def test_entry_without_parameters(self, caplog: Any) -> None:
        with caplog.at_level("WARNING"):
            entries = parse_cache_status('"Netlify Edge", "Valid Cache"; hit')

        assert len(entries) == 1
        assert entries[0].cache_name == "Valid Cache"
        assert caplog.record_tuples == snapshot(
            [
                (
                    "cachescope.core.cache_status",
                    30,
                    "Ignoring invalid cache status entry '\"Netlify Edge\"'",
                )
            ]
        )

    def test_parameter_without_key(self, caplog: Any) -> None:
        with caplog.at_level("WARNING"):
            entries = parse_cache_status('"Netlify Edge"; ; hit')

        assert len(entries) == 1
        assert entries[0].cache_name == "Netlify Edge"
        assert entries[0].parameters.hit is True
        assert caplog.record_tuples == snapshot(
            [
                (
                    "cachescope.core.cache_status",
                    30,
                    "Ignoring invalid parameter '' in cache status entry '\"Netlify Edge\"; ; hit'",
                )
            ]
        )

    def test_entry_without_cache_name(self) -> None:
        entries = parse_cache_status('; hit, "Netlify Edge"; fwd=miss')

        assert [entry.cache_name for entry in entries] == ["Netlify Edge"]


class TestOrdering:
    def test_out_of_order_entries_are_repaired(self) -> None:
        entries = parse_cache_status('"Netlify Edge"; hit, "Next.js"; hit, "Netlify Durable"; hit')

        assert [entry.cache_name for entry in entries] == ["Netlify Edge", "Netlify Durable", "Next.js"]

    def test_reversal_is_applied_when_already_ordered(self) -> None:
        entries = parse_cache_status('"Netlify Durable"; fwd=miss, "Netlify Edge"; fwd=miss')

        assert [entry.cache_name for entry in entries] == ["Netlify Edge", "Netlify Durable"]

    def test_unknown_names_end_up_closest_to_origin(self) -> None:
        entries = parse_cache_status('"Netlify Edge"; fwd=miss, "Origin A"; hit, "Next.js"; fwd=miss, "Origin B"; hit')

        assert [entry.cache_name for entry in entries] == ["Netlify Edge", "Next.js", "Origin B", "Origin A"]

    def test_unknown_names_only(self) -> None:
        entries = parse_cache_status('"A"; hit, "B"; fwd=miss, "C"; fwd=miss')

        assert [entry.cache_name for entry in entries] == ["C", "B", "A"]

    def test_custom_order(self) -> None:
        options = AnalysisOptions(cache_name_order=("Varnish", "Fastly"))

        entries = parse_cache_status('"Fastly"; fwd=miss, "Varnish"; hit', options)

        assert [entry.cache_name for entry in entries] == ["Fastly", "Varnish"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [("0", 0), ("42", 42), (" 5", None), ("5 ", None), ("+5", None), ("1_000", None)],
)
def test_integer_parameters_are_plain_digits(value: str, expected: Any) -> None:
    assert parse_integer_parameter(value) == expected
