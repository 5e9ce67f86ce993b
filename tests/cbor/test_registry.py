"""Tests for encoder registration and selection."""

from __future__ import annotations

from typing import Any

import pytest
from cbor2 import CBORTag

from icagent.cbor.encoders import (
    BIGINT_ENCODER,
    BUFFER_ENCODER,
    PRINCIPAL_ENCODER,
    base_encoders,
    default_registry,
)
from icagent.cbor.registry import BASE_PRIORITY, CborEncoder, EncoderRegistry
from icagent.errors import NoEncoderForTypeError
from icagent.principal import Principal
from icagent.types import BigInt


def _str_encoder(name: str, priority: int) -> CborEncoder:
    return CborEncoder(name, priority, lambda v: isinstance(v, str), lambda v, _: name)


class TestSelection:
    """Lowest priority number wins; ties go to the earliest registration."""

    def test_lower_priority_number_wins_regardless_of_order(self) -> None:
        registry = EncoderRegistry([_str_encoder("late", 5), _str_encoder("early", 1)])
        assert registry.find("x").name == "early"

    def test_tie_goes_to_first_registered(self) -> None:
        registry = EncoderRegistry([_str_encoder("first", 1), _str_encoder("second", 1)])
        assert registry.find("x").name == "first"

    def test_tie_with_with_encoder_keeps_existing_first(self) -> None:
        registry = EncoderRegistry([_str_encoder("first", 1)]).with_encoder(
            _str_encoder("second", 1)
        )
        assert registry.find("x").name == "first"

    def test_non_matching_encoders_are_skipped(self) -> None:
        never = CborEncoder("never", 0, lambda v: False, lambda v, _: None)
        registry = EncoderRegistry([never, _str_encoder("string", 9)])
        assert registry.find("x").name == "string"

    def test_no_match_raises(self) -> None:
        registry = EncoderRegistry([_str_encoder("string", 1)])
        with pytest.raises(NoEncoderForTypeError) as exc_info:
            registry.find(1.5)
        assert exc_info.value.type_name == "builtins.float"
        assert isinstance(exc_info.value, TypeError)


class TestDefaultRegistry:
    def test_registration_order(self) -> None:
        registry = default_registry()
        names = [e.name for e in registry.encoders]
        assert names[-3:] == ["Principal", "Buffer", "BigNumber"]
        assert len(registry) == len(base_encoders()) + 3

    def test_custom_priorities(self) -> None:
        assert PRINCIPAL_ENCODER.priority == 0
        assert BUFFER_ENCODER.priority == 1
        assert BIGINT_ENCODER.priority == 1
        assert all(e.priority == BASE_PRIORITY for e in base_encoders())

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (BigInt(7), "BigNumber"),
            (7, "number"),
            (True, "bool"),
            (b"ab", "Buffer"),
            (bytearray(b"ab"), "Buffer"),
            (memoryview(b"ab"), "Buffer"),
            (Principal.from_hex("2a"), "Principal"),
            ("text", "string"),
            (None, "null"),
            ([1], "array"),
            ((1,), "array"),
            ({"a": 1}, "object"),
            (CBORTag(1, 0), "tagged"),
        ],
    )
    def test_selected_encoder(self, value: Any, expected: str) -> None:
        assert default_registry().find(value).name == expected

    def test_principal_match_uses_marker(self) -> None:
        class Lookalike:
            _is_principal = True

            def to_bytes(self) -> bytes:
                return b"\x01"

        registry = default_registry()
        assert registry.find(Lookalike()).name == "Principal"
        assert registry.to_cbor_value(Lookalike()) == b"\x01"

    def test_truthy_non_true_marker_does_not_match(self) -> None:
        class NotAPrincipal:
            _is_principal = "yes"

        assert not PRINCIPAL_ENCODER.match(NotAPrincipal())

    def test_to_cbor_value_converts_nested_values(self) -> None:
        tree = default_registry().to_cbor_value(
            {"arg": bytearray(b"\x00"), "nums": (BigInt(1), 2), "p": Principal.from_hex("01")}
        )
        assert tree == {
            "arg": b"\x00",
            "nums": [CBORTag(2, b"\x01"), 2],
            "p": b"\x01",
        }

    def test_unsupported_nested_value_raises(self) -> None:
        with pytest.raises(NoEncoderForTypeError):
            default_registry().to_cbor_value({"bad": {1, 2}})
