# =============================================================================
# LENRA CHECK MATCHER TESTS
# =============================================================================
# Tests for the structural value diff.
# =============================================================================

import json
import math

from hypothesis import given
from hypothesis import strategies as st

from lenra_check.core.matching import compare, type_name
from lenra_check.domain.models import Mismatch, MismatchKind

json_scalars = st.none() | st.booleans() | st.integers() | st.floats(allow_nan=False) | st.text()
json_values = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(max_size=5), children, max_size=4),
    max_leaves=20,
)


class TestTypeName:
    """Tests for type tags."""

    def test_json_types(self):
        """Every JSON type has its own tag."""
        assert type_name(None) == "null"
        assert type_name(True) == "bool"
        assert type_name(3) == "number"
        assert type_name(3.5) == "number"
        assert type_name("a") == "string"
        assert type_name([1]) == "array"
        assert type_name((1,)) == "array"
        assert type_name({"a": 1}) == "object"

    def test_other_values_are_tagged(self):
        """Non-JSON values get the tagged tag."""
        assert type_name({1, 2}) == "tagged"
        assert type_name(b"bytes") == "tagged"


class TestCompareScalars:
    """Tests for scalar comparison."""

    def test_equal_values(self):
        """Equal scalars produce no mismatch."""
        assert compare("main", "main") == []
        assert compare(None, None) == []
        assert compare(False, False) == []

    def test_different_strings(self):
        """Different strings produce a root value mismatch."""
        assert compare("other", "main") == [Mismatch("", MismatchKind.NOT_SAME_VALUE, "other", "main")]

    def test_bool_is_not_a_number(self):
        """True and 1 have different types."""
        result = compare(True, 1)
        assert result == [Mismatch("", MismatchKind.NOT_SAME_TYPE, True, 1)]

    def test_null_against_value(self):
        """Null against anything else is a type mismatch."""
        result = compare(None, 0)
        assert len(result) == 1
        assert result[0].kind is MismatchKind.NOT_SAME_TYPE

    def test_type_mismatch_does_not_descend(self):
        """An object against an array is a single root mismatch."""
        result = compare({"a": 1, "b": [1, 2]}, [1, 2, 3])
        assert result == [
            Mismatch("", MismatchKind.NOT_SAME_TYPE, {"a": 1, "b": [1, 2]}, [1, 2, 3])
        ]

    def test_tagged_values(self):
        """Unequal tagged values fall back to a value mismatch."""
        assert compare({1}, {1}) == []
        assert compare({1}, {2})[0].kind is MismatchKind.NOT_SAME_VALUE


class TestCompareNumbers:
    """Tests for the numeric domain rules."""

    def test_int_and_float_equal(self):
        """1 and 1.0 are the same number."""
        assert compare(1, 1.0) == []
        assert compare(2.0, 2) == []

    def test_different_numbers(self):
        """Different numbers are a value mismatch, not a type mismatch."""
        assert compare(4, 16) == [Mismatch("", MismatchKind.NOT_SAME_VALUE, 4, 16)]
        assert compare(-1, 1)[0].kind is MismatchKind.NOT_SAME_VALUE

    def test_large_unsigned_against_signed(self):
        """Integers compare exactly whatever their size or sign."""
        assert compare(2**64 - 1, 2**64 - 1) == []
        assert compare(2**64 - 1, -1)[0].kind is MismatchKind.NOT_SAME_VALUE
        assert compare(0xFFFFFFFF, 4294967295) == []

    def test_float_domain_rounds_integers(self):
        """With a float on either side, integers are rounded to floats first."""
        assert compare(2**53 + 1, float(2**53)) == []
        assert compare(2**53 + 1, 2**53) != []

    def test_integer_past_float_range(self):
        """Huge integers saturate to infinity instead of raising."""
        assert compare(10**400, math.inf) == []
        assert compare(10**400, 1.0)[0].kind is MismatchKind.NOT_SAME_VALUE

    def test_nan_equals_nan(self):
        """NaN matches NaN."""
        assert compare(math.nan, math.nan) == []


class TestCompareSequences:
    """Tests for positional sequence comparison."""

    def test_child_paths_are_indexed(self):
        """A differing element is reported at its index."""
        result = compare([1, 2, 3], [1, 5, 3])
        assert result == [Mismatch("1", MismatchKind.NOT_SAME_VALUE, 2, 5)]

    def test_missing_trailing_elements(self):
        """Extra expected elements are missing at their index."""
        result = compare([1], [1, 2, 3])
        assert result == [
            Mismatch("1", MismatchKind.MISSING_PROPERTY),
            Mismatch("2", MismatchKind.MISSING_PROPERTY),
        ]

    def test_additional_trailing_elements(self):
        """Extra actual elements are additional at their index."""
        result = compare([1, 2, 3], [1])
        assert [m.kind for m in result] == [MismatchKind.ADDITIONAL_PROPERTY] * 2
        assert [m.path for m in result] == ["1", "2"]

    def test_no_content_alignment(self):
        """A shifted list is compared by position only."""
        result = compare(["x", "a", "b"], ["a", "b"])
        assert [m.path for m in result] == ["0", "1", "2"]
        assert result[-1].kind is MismatchKind.ADDITIONAL_PROPERTY

    def test_nested_path(self):
        """Nested paths join indices and keys with dots."""
        actual = {"children": [{"type": "view", "name": "menu"}]}
        expected = {"children": [{"type": "view", "name": "home"}]}
        assert compare(actual, expected) == [
            Mismatch("children.0.name", MismatchKind.NOT_SAME_VALUE, "menu", "home")
        ]

    def test_deep_json_document(self):
        """A JSON document nested as deep as the decoder allows is compared."""
        actual = json.loads("[" * 700 + "1" + "]" * 700)
        expected = json.loads("[" * 700 + "2" + "]" * 700)
        result = compare(actual, expected)
        assert [(m.path.count("0"), m.kind) for m in result] == [(700, MismatchKind.NOT_SAME_VALUE)]

    def test_deep_nesting(self):
        """Nesting deeper than the recursion limit is compared without failing."""
        depth = 5000
        actual, expected = 1, 2
        for _ in range(depth):
            actual, expected = [actual], [expected]

        assert compare(actual, actual) == []
        result = compare(actual, expected)
        assert len(result) == 1
        assert result[0].kind is MismatchKind.NOT_SAME_VALUE
        assert result[0].path == ".".join(["0"] * depth)
        assert (result[0].actual, result[0].expected) == (1, 2)

    def test_deep_nested_mappings(self):
        """Deep mappings report the mismatch at the full key path."""
        actual, expected = {"v": 1}, {"v": 2}
        for _ in range(3000):
            actual, expected = {"c": actual}, {"c": expected}
        result = compare(actual, expected)
        assert [(m.path.count("c"), m.kind) for m in result] == [(3000, MismatchKind.NOT_SAME_VALUE)]


class TestCompareMappings:
    """Tests for mapping comparison."""

    def test_missing_key(self):
        """A key only in expected is missing."""
        assert compare({}, {"a": 1}) == [Mismatch("a", MismatchKind.MISSING_PROPERTY)]

    def test_additional_key(self):
        """A key only in actual is additional."""
        assert compare({"a": 1, "b": 2}, {"a": 1}) == [Mismatch("b", MismatchKind.ADDITIONAL_PROPERTY)]

    def test_key_order_does_not_matter(self):
        """Mappings with the same entries match in any order."""
        assert compare({"a": 1, "b": 2}, {"b": 2, "a": 1}) == []

    def test_document_order(self):
        """Expected keys come first, then additional keys."""
        result = compare({"z": 0, "a": 2, "extra": 1}, {"a": 1, "b": 1, "z": 0})
        assert [(m.path, m.kind) for m in result] == [
            ("a", MismatchKind.NOT_SAME_VALUE),
            ("b", MismatchKind.MISSING_PROPERTY),
            ("extra", MismatchKind.ADDITIONAL_PROPERTY),
        ]


class TestCompareProperties:
    """Property tests over generated JSON values."""

    @given(json_values)
    def test_reflexive(self, value):
        """Any value matches itself."""
        assert compare(value, value) == []

    @given(st.dictionaries(st.text(max_size=5), json_scalars, min_size=1), st.data())
    def test_single_differing_key(self, mapping, data):
        """Changing one value reports exactly one mismatch at its key."""
        key = data.draw(st.sampled_from(sorted(mapping)))
        changed = dict(mapping)
        changed[key] = [mapping[key]]
        result = compare(changed, mapping)
        assert len(result) == 1
        assert result[0].path == key

    @given(st.lists(json_scalars, max_size=5), st.lists(json_scalars, max_size=5))
    def test_length_asymmetry(self, common, tail):
        """A shorter actual list misses exactly the expected tail, and conversely."""
        shorter, longer = common, common + tail
        missing = compare(shorter, longer)
        assert [m.path for m in missing] == [str(i) for i in range(len(common), len(longer))]
        assert all(m.kind is MismatchKind.MISSING_PROPERTY for m in missing)

        additional = compare(longer, shorter)
        assert [m.path for m in additional] == [str(i) for i in range(len(common), len(longer))]
        assert all(m.kind is MismatchKind.ADDITIONAL_PROPERTY for m in additional)

    @given(json_values, json_values)
    def test_different_types_single_root_mismatch(self, actual, expected):
        """Values of different types give one root type mismatch."""
        if type_name(actual) == type_name(expected):
            return
        assert compare(actual, expected) == [
            Mismatch("", MismatchKind.NOT_SAME_TYPE, actual, expected)
        ]
