"""
Unit tests for core/fields.py - Typed extractors over decoded JSON.

Tests include:
- join_path() for object keys and array indexes
- check_type() including the bool/int distinction
- get_field() / get_optional() for required, optional and null values
- coerce_int() truncation and range checks
"""

import unittest
from hdpayload_lib.core.constants import TAG_ID_MIN, TAG_ID_MAX
from hdpayload_lib.core.errors import MissingFieldError, TypeMismatchError
from hdpayload_lib.core.fields import (
    absent_keys, check_type, coerce_int, extra_fields, get_field, get_optional, join_path, put_default
)


class TestJoinPath(unittest.TestCase):
    """Test JSON path construction."""

    def test_root_key(self):
        self.assertEqual(join_path(None, 'guid'), 'guid')
        self.assertEqual(join_path('', 'guid'), 'guid')

    def test_nested_key_and_index(self):
        self.assertEqual(join_path('keys', 2), 'keys[2]')
        self.assertEqual(join_path('keys[2]', 'addr'), 'keys[2].addr')
        self.assertEqual(join_path('hd_wallets[0].accounts', 1), 'hd_wallets[0].accounts[1]')


class TestCheckType(unittest.TestCase):
    """Test check_type()."""

    def test_matching_types_pass_through(self):
        self.assertEqual(check_type('abc', str, 'p'), 'abc')
        self.assertEqual(check_type(3, int, 'p'), 3)
        self.assertIs(check_type(False, bool, 'p'), False)
        self.assertEqual(check_type({}, dict, 'p'), {})
        self.assertEqual(check_type([], list, 'p'), [])

    def test_bool_is_not_an_integer(self):
        with self.assertRaises(TypeMismatchError) as ctx:
            check_type(True, int, 'options.fee_per_kb')

        self.assertEqual(ctx.exception.path, 'options.fee_per_kb')
        self.assertEqual(ctx.exception.expected, 'integer')

    def test_mismatch_message_names_path_not_value(self):
        with self.assertRaises(TypeMismatchError) as ctx:
            check_type('secret-value', dict, 'options')

        self.assertIn('options', str(ctx.exception))
        self.assertIn('object', str(ctx.exception))
        self.assertNotIn('secret-value', str(ctx.exception))


class TestGetField(unittest.TestCase):
    """Test get_field() and get_optional()."""

    def test_required_present(self):
        self.assertEqual(get_field({'guid': 'g'}, 'guid', str), 'g')

    def test_required_missing(self):
        with self.assertRaises(MissingFieldError) as ctx:
            get_field({}, 'addr', str, 'keys[0]')

        self.assertEqual(ctx.exception.name, 'keys[0].addr')

    def test_required_null_is_type_mismatch(self):
        with self.assertRaises(TypeMismatchError):
            get_field({'guid': None}, 'guid', str)

    def test_default_for_missing_or_null(self):
        self.assertEqual(get_field({}, 'label', str, default=''), '')
        self.assertEqual(get_field({'label': None}, 'label', str, default='x'), 'x')
        self.assertIsNone(get_optional({}, 'label', str))

    def test_optional_wrong_type(self):
        with self.assertRaises(TypeMismatchError) as ctx:
            get_optional({'label': 5}, 'label', str, 'address_book[1]')

        self.assertEqual(ctx.exception.path, 'address_book[1].label')

    def test_extra_fields(self):
        data = {'addr': 'A', 'label': 'L', 'color': 'red'}
        self.assertEqual(extra_fields(data, ('addr', 'label')), {'color': 'red'})

    def test_extra_fields_keeps_known_nulls(self):
        data = {'addr': 'A', 'label': None, 'color': 'red'}
        self.assertEqual(extra_fields(data, ('addr', 'label')), {'label': None, 'color': 'red'})

    def test_absent_keys(self):
        data = {'tag': 0, 'label': None}
        self.assertEqual(absent_keys(data, ('tag', 'label', 'archived')), {'label', 'archived'})

    def test_put_default(self):
        data = {}
        put_default(data, 'tag', 0, 0, {'tag'})
        self.assertEqual(data, {})

        put_default(data, 'tag', 2, 0, {'tag'})
        self.assertEqual(data, {'tag': 2})

        put_default(data, 'label', '', '', set())
        self.assertEqual(data, {'tag': 2, 'label': ''})


class TestCoerceInt(unittest.TestCase):
    """Test coerce_int()."""

    def test_integers_pass_through(self):
        self.assertEqual(coerce_int(7, 'p'), 7)
        self.assertEqual(coerce_int(-7, 'p'), -7)

    def test_floats_truncate_toward_zero(self):
        self.assertEqual(coerce_int(3.9, 'p'), 3)
        self.assertEqual(coerce_int(-3.9, 'p'), -3)
        self.assertEqual(coerce_int(2.0, 'p'), 2)

    def test_non_numbers_rejected(self):
        for value in (True, '3', None, [1], {'a': 1}):
            with self.subTest(value=value):
                with self.assertRaises(TypeMismatchError):
                    coerce_int(value, 'p')

    def test_non_finite_rejected(self):
        with self.assertRaises(TypeMismatchError):
            coerce_int(float('inf'), 'p')
        with self.assertRaises(TypeMismatchError):
            coerce_int(float('nan'), 'p')

    def test_range_bounds(self):
        self.assertEqual(coerce_int(TAG_ID_MAX, 'p', TAG_ID_MIN, TAG_ID_MAX), TAG_ID_MAX)
        self.assertEqual(coerce_int(TAG_ID_MIN, 'p', TAG_ID_MIN, TAG_ID_MAX), TAG_ID_MIN)
        with self.assertRaises(TypeMismatchError):
            coerce_int(TAG_ID_MAX + 1, 'p', TAG_ID_MIN, TAG_ID_MAX)
        with self.assertRaises(TypeMismatchError):
            coerce_int(TAG_ID_MIN - 1, 'p', TAG_ID_MIN, TAG_ID_MAX)


if __name__ == '__main__':
    unittest.main()
