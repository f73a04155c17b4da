"""
Tests for fields, constants, predicates and orderings
"""

import pytest

from typed_query import Constant, Direction, Eq, Field, Order, UnsupportedOperandError, asc, desc, to_sql


class TestField:
    """Test column handles"""

    def test_field_renders_as_name(self):
        """A field renders as its bare column name"""
        assert to_sql(Field("created_time")) == "created_time"

    def test_fields_with_same_name_are_equal(self):
        """Fields carry no state beyond their name"""
        assert Field("id") == Field("id")
        assert Field("id") != Field("name")


class TestPredicate:
    """Test equality predicates"""

    def test_eq_with_constant(self):
        """Field compared to a literal"""
        predicate = Field("completed").eq(Constant(False))

        assert isinstance(predicate, Eq)
        assert predicate.field1 == Field("completed")
        assert predicate.field2 == Constant(False)
        assert to_sql(predicate) == "completed = false"

    def test_eq_with_field(self):
        """Field compared to another field"""
        predicate = Field("owner_id").eq(Field("id"))
        assert to_sql(predicate) == "owner_id = id"

    def test_eq_rejects_plain_values(self):
        """Only Field and Constant operands are accepted"""
        with pytest.raises(UnsupportedOperandError):
            Field("completed").eq(False)

    def test_unsupported_operand_is_type_error(self):
        """Operand errors are also TypeErrors"""
        with pytest.raises(TypeError):
            Field("id").eq("7")


class TestConstant:
    """Test literal rendering"""

    @pytest.mark.parametrize("value,expected", [
        (True, "true"),
        (False, "false"),
        (None, "null"),
        (42, "42"),
        (2.5, "2.5"),
    ])
    def test_constant_text(self, value, expected):
        """Constants render as their text form"""
        assert to_sql(Constant(value)) == expected

    def test_constant_strings_are_not_escaped(self):
        """Strings are interpolated verbatim, without quoting"""
        assert to_sql(Field("name").eq(Constant("it's"))) == "name = it's"


class TestOrder:
    """Test sort keys"""

    def test_asc(self):
        """Ascending order"""
        order = asc(Field("created_time"))

        assert order.direction is Direction.ASCENDING
        assert to_sql(order) == "created_time asc"

    def test_desc(self):
        """Descending order"""
        assert to_sql(desc(Field("created_time"))) == "created_time desc"

    def test_order_owns_a_copy_of_its_operand(self):
        """The sort key is duplicated, not shared with the caller"""
        field = Field("created_time")
        order = asc(field)

        assert order.by == field
        assert order.by is not field

    def test_order_on_constant(self):
        """Constants are field-like and can be sort keys"""
        assert to_sql(desc(Constant(1))) == "1 desc"

    def test_order_rejects_plain_values(self):
        """Sort keys must be Field or Constant"""
        with pytest.raises(UnsupportedOperandError):
            asc("created_time")

    def test_renderer_rejects_foreign_operands(self):
        """A hand-built Order with a foreign operand fails to render"""
        with pytest.raises(UnsupportedOperandError):
            to_sql(Order("created_time", Direction.ASCENDING))
