"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for reference-or-inline values.
"""

import pytest

from oasmodel.errors import PayloadMismatch
from oasmodel.payloads import Parameter, Schema
from oasmodel.reference import (
    REF_FIELD,
    Inline,
    Reference,
    decode_reference_or,
    encode_reference_or,
    is_reference_object,
    reference_or,
)


@pytest.mark.unit
class TestDecodeReferenceOr:
    """Tests for telling references and inline payloads apart."""

    def test_singleton_ref_is_reference(self):
        """Test that an object holding only $ref decodes to a Reference."""
        node = decode_reference_or({"$ref": "X"}, Parameter.from_value)

        assert node == Reference(target="X")
        assert node.as_item() is None

    def test_ref_with_siblings_is_inline(self):
        """Test that $ref next to other keys is decoded as the payload, which rejects it."""
        value = {"$ref": "X", "description": "Y"}

        assert not is_reference_object(value)
        with pytest.raises(PayloadMismatch) as exc_info:
            decode_reference_or(value, Parameter.from_value, kind="Parameter")

        assert exc_info.value.kind == "Parameter"
        assert "name" in exc_info.value.reason

    def test_ref_with_siblings_kept_by_permissive_payload(self):
        """Test that a payload accepting any keys keeps $ref as an ordinary key."""
        node = decode_reference_or({"$ref": "X", "description": "Y"}, Schema.from_value)

        assert isinstance(node, Inline)
        assert node.to_value() == {"$ref": "X", "description": "Y"}

    def test_inline_payload(self):
        """Test that any other object is decoded with the payload decoder."""
        node = decode_reference_or({"name": "limit", "in": "query"}, Parameter.from_value)

        assert isinstance(node, Inline)
        assert node.as_item().name == "limit"
        assert node.value.location == "query"

    @pytest.mark.parametrize("value", ["#/components/x", 7, [], None])
    def test_non_object_is_rejected(self, value):
        """Test that scalars and arrays are neither references nor payloads."""
        with pytest.raises(PayloadMismatch):
            decode_reference_or(value, Parameter.from_value)

    @pytest.mark.parametrize("target", [1, None, {"a": "b"}, ["x"]])
    def test_non_string_target_is_rejected(self, target):
        """Test that the locator of a reference must be a string."""
        with pytest.raises(PayloadMismatch) as exc_info:
            decode_reference_or({"$ref": target}, Parameter.from_value)

        assert exc_info.value.kind == "reference"

    def test_decoder_errors_propagate_unchanged(self):
        """Test that errors from the payload decoder are not wrapped."""

        class Boom(Exception):
            pass

        def failing_decoder(value):
            raise Boom("bad payload")

        with pytest.raises(Boom):
            decode_reference_or({"a": 1}, failing_decoder)

    def test_reference_or_builds_decoder(self):
        """Test the decoder factory used for nested fields."""
        decode = reference_or(Parameter.from_value, "Parameter")

        assert decode({"$ref": "#/p"}) == Reference("#/p")
        assert isinstance(decode({"name": "id", "in": "path"}), Inline)


@pytest.mark.unit
class TestEncodeReferenceOr:
    """Tests for encoding reference-or-inline values."""

    def test_reference_encodes_to_singleton(self):
        """Test that a Reference encodes to an object holding only the locator."""
        assert encode_reference_or(Reference("#/components/parameters/Id")) == {
            REF_FIELD: "#/components/parameters/Id"
        }

    def test_inline_delegates_to_payload(self):
        """Test that an Inline node encodes with the payload's own encoder."""
        node = Inline(Parameter.from_value({"name": "id", "in": "path", "x-note": "kept"}))

        assert encode_reference_or(node) == {"name": "id", "in": "path", "x-note": "kept"}

    def test_inline_with_explicit_encoder(self):
        """Test that a caller supplied encoder is used for the inline payload."""
        assert encode_reference_or(Inline(5), encoder=lambda n: {"n": n}) == {"n": 5}

    def test_rejects_other_values(self):
        """Test that only Reference and Inline can be encoded."""
        with pytest.raises(TypeError):
            encode_reference_or({"$ref": "X"})

    def test_round_trip(self):
        """Test decoding the encoded value gives an equal node."""
        for value in ({"$ref": "#/a"}, {"name": "q", "in": "query", "schema": {"type": "string"}}):
            node = decode_reference_or(value, Parameter.from_value)
            assert encode_reference_or(node) == value
            assert decode_reference_or(encode_reference_or(node), Parameter.from_value) == node
