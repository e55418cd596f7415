from tg_bot_openapi.generator.validator import (
    validate_discriminators,
    validate_document,
    validate_refs,
    validate_serialized,
    validate_version,
)


def _doc(schemas: dict, paths: dict | None = None) -> dict:
    return {"openapi": "3.0.0", "paths": paths or {}, "components": {"schemas": schemas}}


class TestValidateVersion:
    def test_supported(self):
        assert validate_version({"openapi": "3.0.0"}) == {}

    def test_unsupported(self):
        errors = validate_version({"openapi": "3.1.0"})
        assert "#/openapi" in errors

    def test_missing(self):
        assert "#/openapi" in validate_version({})


class TestValidateRefs:
    def test_resolved(self):
        doc = _doc({"User": {"type": "object"}, "Message": {"properties": {"from": {"$ref": "#/components/schemas/User"}}}})
        assert validate_refs(doc) == {}

    def test_unresolved(self):
        paths = {"/getMe": {"get": {"responses": {"200": {"schema": {"$ref": "#/components/schemas/User"}}}}}}
        errors = validate_refs(_doc({}, paths))
        assert errors == {"#/paths/~1getMe/get/responses/200/schema": "Unresolved reference: #/components/schemas/User"}

    def test_refs_inside_lists(self):
        doc = _doc({"U": {"oneOf": [{"$ref": "#/components/schemas/A"}]}})
        assert "#/components/schemas/U/oneOf/0" in validate_refs(doc)

    def test_external_ref_unsupported(self):
        doc = _doc({"U": {"$ref": "other.yaml#/User"}})
        errors = validate_refs(doc)
        assert errors["#/components/schemas/U"].startswith("Unsupported reference")


class TestValidateDiscriminators:
    def _schemas(self, **overrides):
        schemas = {
            "ChatMember": {
                "oneOf": [
                    {"$ref": "#/components/schemas/ChatMemberOwner"},
                    {"$ref": "#/components/schemas/ChatMemberMember"},
                ],
                "discriminator": {
                    "propertyName": "status",
                    "mapping": {
                        "creator": "#/components/schemas/ChatMemberOwner",
                        "member": "#/components/schemas/ChatMemberMember",
                    },
                },
            },
            "ChatMemberOwner": {"type": "object", "properties": {"status": {"type": "string"}}},
            "ChatMemberMember": {"type": "object", "properties": {"status": {"type": "string"}}},
        }
        schemas.update(overrides)
        return schemas

    def test_valid(self):
        assert validate_discriminators(_doc(self._schemas())) == {}

    def test_variant_missing_property(self):
        errors = validate_discriminators(_doc(self._schemas(ChatMemberMember={"type": "object"})))
        location = "#/components/schemas/ChatMember/discriminator"
        assert errors[location] == "Property 'status' missing from: #/components/schemas/ChatMemberMember"

    def test_missing_property_name(self):
        schemas = {"U": {"oneOf": [], "discriminator": {"mapping": {}}}}
        errors = validate_discriminators(_doc(schemas))
        assert errors == {"#/components/schemas/U/discriminator": "Missing propertyName"}

    def test_unresolved_mapping(self):
        schemas = self._schemas()
        schemas["ChatMember"]["discriminator"]["mapping"]["left"] = "#/components/schemas/ChatMemberLeft"
        errors = validate_discriminators(_doc(schemas))
        assert "#/components/schemas/ChatMember/discriminator/mapping/left" in errors


class TestValidateSerialized:
    def test_valid_json(self):
        assert validate_serialized('{"openapi": "3.0.0"}') == {}

    def test_invalid_json(self):
        errors = validate_serialized('{"openapi": ')
        assert errors["_document"].startswith("JSONDecodeError")

    def test_valid_yaml(self):
        assert validate_serialized("openapi: 3.0.0\n", "yaml") == {}

    def test_invalid_yaml(self):
        errors = validate_serialized("key: [invalid\n", "yaml")
        assert errors["_document"].startswith("YAMLError")


class TestValidateDocument:
    def test_all_valid(self):
        assert validate_document(_doc({"User": {"type": "object"}})) == {}

    def test_collects_all_problems(self):
        doc = _doc({"Message": {"properties": {"from": {"$ref": "#/components/schemas/User"}}}})
        doc["openapi"] = "2.0"
        errors = validate_document(doc)
        assert set(errors) == {"#/openapi", "#/components/schemas/Message/properties/from"}
