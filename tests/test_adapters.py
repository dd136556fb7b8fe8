"""Unit tests for schema adapters."""

import json
from pathlib import Path

import pytest

from jdl_relations.adapters import SchemaAdapter, JsonSchemaAdapter
from jdl_relations.core import (
    Entity,
    InvalidEntityReferenceError,
    MissingRequiredFieldError,
    Relationship,
    RelationshipType,
)


class TestSchemaAdapter:
    """Tests for SchemaAdapter ABC."""

    def test_cannot_instantiate_abstract_class(self):
        """Test that SchemaAdapter cannot be instantiated directly."""
        with pytest.raises(TypeError):
            SchemaAdapter()


class TestJsonSchemaAdapter:
    """Tests for JsonSchemaAdapter."""

    @pytest.fixture
    def sample_data(self):
        return {
            "metadata": {"application": "shop"},
            "entities": [
                {"name": "Customer", "comment": "A registered buyer"},
                {"name": "Order"},
                {"name": "Address"},
            ],
            "relationships": [
                {
                    "type": "ONE_TO_MANY",
                    "from": "Customer",
                    "to": "Order",
                    "injectedFieldInFrom": "orders",
                    "injectedFieldInTo": "customer",
                    "commentInFrom": "Orders placed",
                },
                {
                    "from": "Customer",
                    "to": "Address",
                    "injectedFieldInFrom": "address",
                },
                {
                    "type": "MANY_TO_ONE",
                    "from": "Order",
                    "to": "Warehouse",
                    "injectedFieldInFrom": "warehouse",
                },
            ],
        }

    @pytest.fixture
    def write_schema(self, tmp_path):
        def write(data):
            file_path = tmp_path / "schema.json"
            with open(file_path, "w") as f:
                json.dump(data, f)
            return file_path
        return write

    @pytest.fixture
    def sample_data_file(self, write_schema, sample_data):
        """Create a temporary JSON file with sample data."""
        return write_schema(sample_data)

    def test_init_with_valid_path(self, sample_data_file):
        """Test adapter initialization with valid data path."""
        adapter = JsonSchemaAdapter(data_path=str(sample_data_file))
        assert adapter.data_path == Path(sample_data_file)
        assert adapter.config == {"data_path": str(sample_data_file)}

    def test_init_without_path_raises_error(self):
        with pytest.raises(ValueError, match="data_path is required"):
            JsonSchemaAdapter()

    def test_init_with_missing_file_raises_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonSchemaAdapter(data_path=tmp_path / "missing.json")

    def test_load_relationships(self, sample_data_file):
        relationships = JsonSchemaAdapter(data_path=sample_data_file).load_relationships()
        assert len(relationships) == 3
        assert all(isinstance(rel, Relationship) for rel in relationships)

        first = relationships[0]
        assert first.type is RelationshipType.ONE_TO_MANY
        assert first.from_entity == Entity(name="Customer", comment="A registered buyer")
        assert first.injected_field_in_to == "customer"
        assert first.comment_in_from == "Orders placed"
        assert first.comment_in_to == ""

    def test_missing_type_defaults_to_one_to_one(self, sample_data_file):
        relationships = JsonSchemaAdapter(data_path=sample_data_file).load_relationships()
        assert relationships[1].type is RelationshipType.ONE_TO_ONE
        assert relationships[1].identity() == "ONE_TO_ONE_Customer{address}_Address"

    def test_undeclared_entity_resolves_by_name(self, sample_data_file):
        relationships = JsonSchemaAdapter(data_path=sample_data_file).load_relationships()
        assert relationships[2].to_entity == Entity(name="Warehouse")

    def test_missing_endpoint_raises_error(self, write_schema):
        path = write_schema({"relationships": [{"from": "Customer", "injectedFieldInFrom": "x"}]})
        with pytest.raises(InvalidEntityReferenceError):
            JsonSchemaAdapter(data_path=path).load_relationships()

    def test_unknown_type_raises_error(self, write_schema):
        path = write_schema({"relationships": [
            {"type": "SOME_TO_SOME", "from": "A", "to": "B", "injectedFieldInFrom": "b"},
        ]})
        with pytest.raises(MissingRequiredFieldError):
            JsonSchemaAdapter(data_path=path).load_relationships()

    def test_empty_schema(self, write_schema):
        path = write_schema({})
        assert JsonSchemaAdapter(data_path=path).load_relationships() == []

    def test_get_metadata(self, sample_data_file):
        metadata = JsonSchemaAdapter(data_path=sample_data_file).get_metadata()
        assert metadata == {"application": "shop", "entity_count": 3, "relationship_count": 3}

    def test_validate_source(self, sample_data_file, tmp_path):
        assert JsonSchemaAdapter(data_path=sample_data_file).validate_source()

        broken = tmp_path / "broken.json"
        broken.write_text("{not json")
        assert not JsonSchemaAdapter(data_path=broken).validate_source()
