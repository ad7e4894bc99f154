import pytest

from cedar_openapi.exceptions import (
    DepthExceeded,
    MissingArrayItems,
    UnsupportedRef,
    UnsupportedSchemaShape,
)
from cedar_openapi.schema.types import TypeConverter


class TestPrimitives:
    @pytest.mark.parametrize("openapi_type,cedar_type", [
        ("string", "String"),
        ("number", "Long"),
        ("integer", "Long"),
        ("boolean", "Boolean"),
    ])
    def test_primitive_mapping(self, openapi_type, cedar_type):
        assert TypeConverter().convert("x", {"type": openapi_type}) == {"type": cedar_type}

    def test_returned_nodes_are_not_shared(self):
        converter = TypeConverter()
        first = converter.convert("a", {"type": "string"})
        first["required"] = True
        assert converter.convert("b", {"type": "string"}) == {"type": "String"}

    @pytest.mark.parametrize("openapi_type", ["null", "file", ["string", "null"]])
    def test_unknown_type(self, openapi_type):
        with pytest.raises(UnsupportedSchemaShape):
            TypeConverter().convert("x", {"type": openapi_type})


class TestObjects:
    def test_object_without_properties(self):
        assert TypeConverter().convert("Empty", {"type": "object"}) == {"type": "Record", "attributes": {}}

    def test_nested_object(self):
        node = {
            "type": "object",
            "properties": {
                "spineprop1": {
                    "type": "object",
                    "properties": {
                        "doublenested1": {"$ref": "#/components/schemas/T3"},
                        "doublenested2": {"type": "array", "items": {"type": "integer"}},
                    },
                },
            },
        }
        result = TypeConverter().convert("Spine", node)
        assert result == {
            "type": "Record",
            "attributes": {
                "spineprop1": {
                    "type": "Record",
                    "attributes": {
                        "doublenested1": {"type": "T3"},
                        "doublenested2": {"type": "Set", "element": {"type": "Long"}},
                    },
                },
            },
        }

    def test_property_order_preserved(self):
        node = {"type": "object", "properties": {"b": {"type": "string"}, "a": {"type": "string"}}}
        assert list(TypeConverter().convert("X", node)["attributes"]) == ["b", "a"]


class TestArrays:
    def test_array_of_arrays(self):
        node = {"type": "array", "items": {"type": "array", "items": {"$ref": "#/components/schemas/T1"}}}
        assert TypeConverter().convert("Marrow", node) == {
            "type": "Set",
            "element": {"type": "Set", "element": {"type": "T1"}},
        }

    def test_missing_items(self):
        with pytest.raises(MissingArrayItems) as exc_info:
            TypeConverter().convert("Bone", {"type": "array"})
        assert exc_info.value.details["schema"] == "Bone"

    def test_empty_items_is_an_unsupported_shape(self):
        with pytest.raises(UnsupportedSchemaShape):
            TypeConverter().convert("Bone", {"type": "array", "items": {}})


class TestRefs:
    def test_local_ref(self):
        assert TypeConverter().convert("T1", {"$ref": "#/components/schemas/T2"}) == {"type": "T2"}

    @pytest.mark.parametrize("ref", [
        "#/components/parameters/Id",
        "other.yaml#/components/schemas/T2",
        "#/components/schemas/T2/properties/a",
        "#/components/schemas/",
    ])
    def test_non_local_ref(self, ref):
        with pytest.raises(UnsupportedRef):
            TypeConverter().convert("T1", {"$ref": ref})

    def test_ref_must_name_a_known_schema(self):
        converter = TypeConverter(schema_names=["T2"])
        assert converter.convert("T1", {"$ref": "#/components/schemas/T2"}) == {"type": "T2"}
        with pytest.raises(UnsupportedRef):
            converter.convert("T1", {"$ref": "#/components/schemas/Missing"})


class TestUnsupportedShapes:
    @pytest.mark.parametrize("node", [
        {"oneOf": [{"type": "string"}, {"type": "integer"}]},
        {"anyOf": [{"type": "string"}]},
        {"allOf": [{"$ref": "#/components/schemas/A"}]},
        {"description": "no type"},
    ])
    def test_rejects_composition_and_untyped(self, node):
        with pytest.raises(UnsupportedSchemaShape):
            TypeConverter().convert("X", node)

    def test_rejects_non_object(self):
        with pytest.raises(UnsupportedSchemaShape):
            TypeConverter().convert("X", "string")


class TestDepthGuard:
    def _nested_arrays(self, levels):
        node = {"type": "string"}
        for _ in range(levels):
            node = {"type": "array", "items": node}
        return node

    def test_within_bound(self):
        result = TypeConverter(max_depth=5).convert("Deep", self._nested_arrays(5))
        for _ in range(5):
            result = result["element"]
        assert result == {"type": "String"}

    def test_beyond_bound(self):
        with pytest.raises(DepthExceeded) as exc_info:
            TypeConverter(max_depth=5).convert("Deep", self._nested_arrays(6))
        assert exc_info.value.details["max_depth"] == 5

    def test_default_bound_stops_pathological_nesting(self):
        with pytest.raises(DepthExceeded):
            TypeConverter().convert("Deep", self._nested_arrays(1000))


class TestCommonTypes:
    def test_every_schema_becomes_a_common_type(self):
        schemas = {
            "T1": {"$ref": "#/components/schemas/T2"},
            "T2": {"type": "array", "items": {"$ref": "#/components/schemas/T3"}},
            "T3": {"type": "string"},
            "Skull": {"type": "boolean"},
        }
        common_types = TypeConverter(schema_names=schemas).convert_common_types(schemas)
        assert list(common_types) == ["T1", "T2", "T3", "Skull"]
        assert common_types["T2"] == {"type": "Set", "element": {"type": "T3"}}
