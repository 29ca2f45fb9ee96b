"""Typed tag values decoded from BanyanDB query results.

A wire ``TagValue`` is a oneof over six shapes. Each shape maps to exactly
one frozen dataclass below; ``build`` is the only decoder and rejects any
shape it does not know about instead of guessing.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Sequence, Union

from google.protobuf import struct_pb2

from .errors import InvalidArgumentError, UnrecognizedVariantError
from .proto.banyandb import Tag, TagValue

PythonTagValue = Union[None, str, int, bytes, Sequence[str], Sequence[int]]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class TagAndValue(ABC):
    """A tag name plus its decoded value.

    Abstract; every instance is one of the six variants in VARIANTS.
    """

    tag_name: str
    value: Any

    # Name of the TagValue oneof case this variant is decoded from.
    variant: ClassVar[str] = ""

    def is_null(self) -> bool:
        """Return True if no value is held."""
        return self.value is None

    @abstractmethod
    def to_proto(self) -> TagValue:
        """Encode the value back into a wire TagValue."""

    def to_tag(self) -> Tag:
        """Encode name and value into a wire Tag."""
        return Tag(key=self.tag_name, value=self.to_proto())

    @staticmethod
    def build(tag: Tag) -> "TagAndValue":
        """Decode a wire Tag. See ``build``."""
        return build(tag)


@dataclass(frozen=True)
class StringTagPair(TagAndValue):
    value: str
    variant: ClassVar[str] = "str"

    def to_proto(self) -> TagValue:
        tv = TagValue()
        tv.str.SetInParent()
        tv.str.value = self.value
        return tv


@dataclass(frozen=True)
class StringArrayTagPair(TagAndValue):
    value: tuple[str, ...]
    variant: ClassVar[str] = "str_array"

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", tuple(self.value))

    def to_proto(self) -> TagValue:
        tv = TagValue()
        tv.str_array.SetInParent()
        tv.str_array.value.extend(self.value)
        return tv


@dataclass(frozen=True)
class LongTagPair(TagAndValue):
    value: int
    variant: ClassVar[str] = "int"

    def __post_init__(self) -> None:
        _check_int64(self.value)

    def to_proto(self) -> TagValue:
        tv = TagValue()
        tv.int.SetInParent()
        tv.int.value = self.value
        return tv


@dataclass(frozen=True)
class LongArrayTagPair(TagAndValue):
    value: tuple[int, ...]
    variant: ClassVar[str] = "int_array"

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", tuple(self.value))
        for v in self.value:
            _check_int64(v)

    def to_proto(self) -> TagValue:
        tv = TagValue()
        tv.int_array.SetInParent()
        tv.int_array.value.extend(self.value)
        return tv


@dataclass(frozen=True)
class BinaryTagPair(TagAndValue):
    value: bytes
    variant: ClassVar[str] = "binary_data"

    def to_proto(self) -> TagValue:
        tv = TagValue()
        tv.binary_data = self.value
        return tv


@dataclass(frozen=True)
class NullTagPair(TagAndValue):
    value: None = None
    variant: ClassVar[str] = "null"

    def is_null(self) -> bool:
        return True

    def to_proto(self) -> TagValue:
        tv = TagValue()
        tv.null = struct_pb2.NULL_VALUE
        return tv


VARIANTS: tuple[type[TagAndValue], ...] = (
    LongTagPair,
    StringTagPair,
    LongArrayTagPair,
    StringArrayTagPair,
    BinaryTagPair,
    NullTagPair,
)


def build(tag: Tag) -> TagAndValue:
    """Decode one wire Tag into its TagAndValue variant.

    Raises:
        UnrecognizedVariantError: the oneof case is unset or unknown to this
            client. An unset case is also what a field added by a newer
            server schema decodes to.
    """
    key = tag.key
    value = tag.value
    case = value.WhichOneof("value")
    if case == "int":
        return LongTagPair(key, value.int.value)
    if case == "str":
        return StringTagPair(key, value.str.value)
    if case == "int_array":
        return LongArrayTagPair(key, tuple(value.int_array.value))
    if case == "str_array":
        return StringArrayTagPair(key, tuple(value.str_array.value))
    if case == "binary_data":
        return BinaryTagPair(key, bytes(value.binary_data))
    if case == "null":
        return NullTagPair(key)
    raise UnrecognizedVariantError(key, case)


def tag_value(value: Union[PythonTagValue, TagAndValue]) -> TagValue:
    """Encode a plain Python value as a wire TagValue.

    None becomes null, str/int/bytes become scalars, lists and tuples become
    arrays typed by their elements. An empty sequence is encoded as an empty
    string array.
    """
    if isinstance(value, TagAndValue):
        return value.to_proto()
    return tag_pair("", value).to_proto()


def tag_pair(name: str, value: PythonTagValue) -> TagAndValue:
    """Wrap a plain Python value in the matching TagAndValue variant."""
    if value is None:
        return NullTagPair(name)
    # bool is an int subclass; BanyanDB has no boolean tags
    if isinstance(value, bool):
        raise InvalidArgumentError(f"unsupported tag value type: {type(value).__name__}")
    if isinstance(value, str):
        return StringTagPair(name, value)
    if isinstance(value, int):
        return LongTagPair(name, value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BinaryTagPair(name, bytes(value))
    if isinstance(value, (list, tuple)):
        if all(isinstance(v, str) for v in value):
            return StringArrayTagPair(name, value)
        if all(isinstance(v, int) and not isinstance(v, bool) for v in value):
            return LongArrayTagPair(name, value)
        raise InvalidArgumentError("array tag values must be all str or all int")
    raise InvalidArgumentError(f"unsupported tag value type: {type(value).__name__}")


def _check_int64(value: int) -> None:
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidArgumentError(f"int tag value out of int64 range: {value}")
