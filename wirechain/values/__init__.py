"""Values a scope can map under a key."""

from wirechain.values.base import MappedValue
from wirechain.values.literal import LiteralValue
from wirechain.values.provided import ProvidedValue


__all__ = [
    "LiteralValue",
    "MappedValue",
    "ProvidedValue",
]
