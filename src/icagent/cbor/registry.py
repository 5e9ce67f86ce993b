"""Priority-ordered CBOR encoder registry.

Each :class:`CborEncoder` pairs a type predicate with a function that turns a
matching value into something ``cbor2`` serializes natively (bytes, str, int,
float, bool, None, list, dict or ``cbor2.CBORTag``). Container encoders
receive the registry's ``to_cbor_value`` so children go through the same
selection.

Selection rule: among the encoders whose predicate matches, the one with the
lowest ``priority`` number wins; equal priorities go to the encoder that was
registered first.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from icagent.errors import NoEncoderForTypeError

# Priority given to the built-in type encoders; any custom encoder with a
# smaller number overrides them for values both predicates accept.
BASE_PRIORITY = 100

ToCborValue = Callable[[Any], Any]


@dataclass(frozen=True)
class CborEncoder:
    """One registration entry: (name, priority, match, encode).

    ``match`` must be a total, side-effect-free type check. ``encode`` gets
    the value and a callback that converts nested values.
    """

    name: str
    priority: int
    match: Callable[[Any], bool]
    encode: Callable[[Any, ToCborValue], Any]


class EncoderRegistry:
    """Immutable ordered set of encoders.

    Example:
        >>> from icagent.cbor.encoders import default_registry
        >>> from icagent.types import BigInt
        >>> default_registry().find(BigInt(1)).name
        'BigNumber'
    """

    __slots__ = ("_encoders", "_ranked")

    def __init__(self, encoders: Iterable[CborEncoder] = ()) -> None:
        self._encoders: tuple[CborEncoder, ...] = tuple(encoders)
        # sorted() is stable, so registration order breaks priority ties
        self._ranked: tuple[CborEncoder, ...] = tuple(
            sorted(self._encoders, key=lambda e: e.priority)
        )

    @property
    def encoders(self) -> tuple[CborEncoder, ...]:
        """Encoders in registration order."""
        return self._encoders

    def with_encoder(self, encoder: CborEncoder) -> EncoderRegistry:
        """Return a new registry with ``encoder`` registered after the existing ones."""
        return EncoderRegistry((*self._encoders, encoder))

    def find(self, value: Any) -> CborEncoder:
        for encoder in self._ranked:
            if encoder.match(value):
                return encoder
        raise NoEncoderForTypeError(f"{type(value).__module__}.{type(value).__qualname__}")

    def to_cbor_value(self, value: Any) -> Any:
        """Convert a value tree into cbor2-native values using the selected encoders."""
        return self.find(value).encode(value, self.to_cbor_value)

    def __len__(self) -> int:
        return len(self._encoders)

    def __repr__(self) -> str:
        names = ", ".join(f"{e.name}:{e.priority}" for e in self._encoders)
        return f"EncoderRegistry([{names}])"
