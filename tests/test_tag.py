"""Tests for tag value variants and the tag decoder."""

import dataclasses

import pytest
from google.protobuf import struct_pb2

from banyandb_client.errors import InvalidArgumentError, UnrecognizedVariantError
from banyandb_client.proto.banyandb import (
    Int,
    IntArray,
    Str,
    StrArray,
    Tag,
    TagValue,
)
from banyandb_client.tag import (
    VARIANTS,
    BinaryTagPair,
    LongArrayTagPair,
    LongTagPair,
    NullTagPair,
    StringArrayTagPair,
    StringTagPair,
    TagAndValue,
    build,
    tag_pair,
    tag_value,
)

# A TagValue carrying field 7 (varint 1), unknown to this schema.
FUTURE_VARIANT_BYTES = b"\x38\x01"


def _null_value() -> TagValue:
    tv = TagValue()
    tv.null = struct_pb2.NULL_VALUE
    return tv


class TestBuild:
    """Tests for decoding each wire variant."""

    def test_int(self) -> None:
        """int decodes to LongTagPair."""
        result = build(Tag(key="duration", value=TagValue(int=Int(value=42))))
        assert result == LongTagPair("duration", 42)
        assert not result.is_null()

    def test_int_keeps_64_bit_range(self) -> None:
        """int64 extremes survive decoding."""
        low = build(Tag(key="a", value=TagValue(int=Int(value=-(2**63)))))
        high = build(Tag(key="b", value=TagValue(int=Int(value=2**63 - 1))))
        assert low.value == -(2**63)
        assert high.value == 2**63 - 1

    def test_str(self) -> None:
        """str decodes to StringTagPair."""
        result = build(Tag(key="service", value=TagValue(str=Str(value="gateway"))))
        assert result == StringTagPair("service", "gateway")
        assert result.tag_name == "service"

    def test_int_array_preserves_order(self) -> None:
        """int_array keeps wire order."""
        result = build(Tag(key="ports", value=TagValue(int_array=IntArray(value=[3, 1, 2]))))
        assert isinstance(result, LongArrayTagPair)
        assert result.value == (3, 1, 2)

    def test_str_array_preserves_order(self) -> None:
        """str_array keeps wire order."""
        result = build(
            Tag(key="hops", value=TagValue(str_array=StrArray(value=["c", "a", "b"])))
        )
        assert isinstance(result, StringArrayTagPair)
        assert result.value == ("c", "a", "b")

    def test_binary_is_opaque(self) -> None:
        """binary_data decodes to the exact bytes."""
        payload = b"\x00\xffraw"
        result = build(Tag(key="blob", value=TagValue(binary_data=payload)))
        assert result == BinaryTagPair("blob", payload)

    def test_null(self) -> None:
        """null decodes to NullTagPair."""
        result = build(Tag(key="status", value=_null_value()))
        assert result == NullTagPair("status")
        assert result.is_null()
        assert result.value is None

    def test_unset_variant_raises(self) -> None:
        """A TagValue with no case set is not defaulted to anything."""
        with pytest.raises(UnrecognizedVariantError) as exc_info:
            build(Tag(key="empty", value=TagValue()))
        assert exc_info.value.tag_name == "empty"
        assert exc_info.value.variant is None

    def test_future_variant_raises(self) -> None:
        """A case added by a newer schema fails decoding."""
        tag = Tag(key="newer", value=TagValue.FromString(FUTURE_VARIANT_BYTES))
        with pytest.raises(UnrecognizedVariantError, match="newer"):
            build(tag)

    def test_static_build_delegates(self) -> None:
        """TagAndValue.build is the same decoder."""
        tag = Tag(key="n", value=TagValue(int=Int(value=1)))
        assert TagAndValue.build(tag) == build(tag)

    def test_every_variant_is_covered(self) -> None:
        """Each variant class maps to a distinct oneof case."""
        cases = {v.variant for v in VARIANTS}
        expected = {f.name for f in TagValue.DESCRIPTOR.oneofs_by_name["value"].fields}
        assert cases == expected


class TestNullTagPair:
    """Tests for the null variant."""

    def test_is_null_is_constant(self) -> None:
        """is_null stays True across repeated inspection."""
        pair = NullTagPair("status")
        assert pair.is_null()
        assert pair.to_proto().WhichOneof("value") == "null"
        assert pair.is_null()

    def test_other_variants_are_not_null(self) -> None:
        """Scalar variants holding values report not null."""
        assert not StringTagPair("a", "").is_null()
        assert not LongTagPair("a", 0).is_null()
        assert not BinaryTagPair("a", b"").is_null()


class TestImmutability:
    """Variants are frozen after construction."""

    def test_cannot_reassign_value(self) -> None:
        pair = LongTagPair("duration", 42)
        with pytest.raises(dataclasses.FrozenInstanceError):
            pair.value = 43

    def test_lists_are_stored_as_tuples(self) -> None:
        """Array variants copy their input into a tuple."""
        source = ["a", "b"]
        pair = StringArrayTagPair("hops", source)
        source.append("c")
        assert pair.value == ("a", "b")


class TestEncoding:
    """Tests for turning variants and Python values back into TagValues."""

    @pytest.mark.parametrize(
        "pair",
        [
            LongTagPair("k", 7),
            StringTagPair("k", ""),
            LongArrayTagPair("k", (1, 2)),
            StringArrayTagPair("k", ("x",)),
            BinaryTagPair("k", b""),
            NullTagPair("k"),
        ],
    )
    def test_to_tag_decodes_to_same_variant(self, pair: TagAndValue) -> None:
        """Encoding a variant and decoding it gives the variant back."""
        wire = Tag.FromString(pair.to_tag().SerializeToString())
        assert build(wire) == pair

    def test_tag_value_from_python(self) -> None:
        """Plain Python values pick the matching case."""
        assert tag_value(None).WhichOneof("value") == "null"
        assert tag_value("x").str.value == "x"
        assert tag_value(5).int.value == 5
        assert tag_value(b"\x01").binary_data == b"\x01"
        assert list(tag_value([1, 2]).int_array.value) == [1, 2]
        assert list(tag_value(("a", "b")).str_array.value) == ["a", "b"]

    def test_tag_value_accepts_variant(self) -> None:
        assert tag_value(LongTagPair("k", 3)).int.value == 3

    def test_empty_list_is_string_array(self) -> None:
        assert tag_value([]).WhichOneof("value") == "str_array"

    def test_tag_pair_wraps_value(self) -> None:
        assert tag_pair("status", None) == NullTagPair("status")
        assert tag_pair("duration", 42) == LongTagPair("duration", 42)

    @pytest.mark.parametrize(
        "value", [True, 1.5, {"a": 1}, [1, "a"], 2**63, -(2**63) - 1, [1, 2**63]]
    )
    def test_unsupported_values_raise(self, value) -> None:
        with pytest.raises(InvalidArgumentError):
            tag_value(value)

    def test_int64_bounds_are_accepted(self) -> None:
        assert tag_value(2**63 - 1).int.value == 2**63 - 1
        assert list(tag_value([-(2**63)]).int_array.value) == [-(2**63)]

    def test_long_variants_reject_out_of_range(self) -> None:
        """Out-of-range ints fail at construction, not in protobuf."""
        with pytest.raises(InvalidArgumentError, match="int64"):
            LongTagPair("k", 2**63)
        with pytest.raises(InvalidArgumentError, match="int64"):
            LongArrayTagPair("k", [0, -(2**63) - 1])


class TestTagAndValueBase:
    """The base class only names the variants; it holds no value itself."""

    def test_cannot_instantiate_base(self) -> None:
        with pytest.raises(TypeError):
            TagAndValue("x", 1)

    def test_variants_are_subclasses(self) -> None:
        for variant in VARIANTS:
            assert issubclass(variant, TagAndValue)
            assert variant.variant
