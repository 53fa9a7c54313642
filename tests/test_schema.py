"""Tests for VariantSchema and the wire struct."""

from typing import Any

import pytest
from klaw_enum import ReservedTagError, SchemaError, VariantSchema, WireVariant


class TestClosedSchema:
    """Tests for schemas that declare their variants."""

    def test_names_keep_declaration_order(self):
        schema = VariantSchema({'Loading': None, 'Ready': int, 'Failed': str})
        assert schema.names == ('Loading', 'Ready', 'Failed')
        assert list(schema) == ['Loading', 'Ready', 'Failed']
        assert len(schema) == 3

    def test_names_only_default_to_any(self):
        schema = VariantSchema(['A', 'B'])
        assert schema.is_closed
        assert schema.payload_type('A') is Any
        assert not schema.is_unit('A')

    def test_unit_variants(self):
        schema = VariantSchema({'Loading': None, 'Ready': int})
        assert schema.is_unit('Loading')
        assert not schema.is_unit('Ready')
        assert schema.payload_type('Ready') is int

    def test_membership(self):
        schema = VariantSchema({'A': int})
        assert 'A' in schema
        assert 'B' not in schema
        assert schema.accepts('A')
        assert not schema.accepts('B')

    def test_variants_view_is_read_only(self):
        schema = VariantSchema({'A': int})
        with pytest.raises(TypeError):
            schema.variants['B'] = str  # type: ignore[index]

    def test_equality(self):
        assert VariantSchema({'A': int}) == VariantSchema({'A': int})
        assert VariantSchema({'A': int}) != VariantSchema({'A': str})
        assert VariantSchema.open() == VariantSchema.open()
        assert VariantSchema({'A': int}) != VariantSchema.open()

    def test_repr(self):
        assert repr(VariantSchema({'A': None, 'B': int})) == "VariantSchema({'A': None, 'B': int})"
        assert repr(VariantSchema.open()) == 'VariantSchema.open()'


class TestSchemaValidation:
    """Tests for rejected declarations."""

    def test_reserved_name_rejected(self):
        with pytest.raises(ReservedTagError, match="'_' is reserved"):
            VariantSchema({'A': int, '_': str})

    def test_empty_name_rejected(self):
        with pytest.raises(SchemaError):
            VariantSchema({'': int})

    def test_non_string_name_rejected(self):
        with pytest.raises(SchemaError):
            VariantSchema({1: int})  # type: ignore[dict-item]

    def test_duplicate_names_rejected(self):
        with pytest.raises(SchemaError, match='Duplicate'):
            VariantSchema(['A', 'A'])

    def test_empty_closed_schema_rejected(self):
        with pytest.raises(SchemaError):
            VariantSchema({})


class TestOpenSchema:
    """Tests for open schemas backing dynamic factories."""

    def test_open_schema_accepts_any_tag(self):
        schema = VariantSchema.open()
        assert not schema.is_closed
        assert schema.names == ()
        assert schema.accepts('Anything')
        assert not schema.accepts('_')

    def test_open_schema_payload_type_is_any(self):
        assert VariantSchema.open().payload_type('X') is Any


class TestWireVariant:
    """Tests for the msgspec wire struct."""

    def test_defaults_to_no_data(self):
        wire = WireVariant('Loading')
        assert wire.tag == 'Loading'
        assert wire.data is None

    def test_is_frozen(self):
        wire = WireVariant('A', 1)
        with pytest.raises(AttributeError):
            wire.tag = 'B'  # type: ignore[misc]
