import pytest
from pydantic import TypeAdapter, ValidationError

from tg_bot_openapi.parser.base import (
    ApiMethod,
    ApiObject,
    ArrayType,
    ObjectField,
    Param,
    SimpleType,
    TypeRef,
)


class TestTypeRef:
    def test_structural_equality(self):
        a = ArrayType(element=ArrayType(element=SimpleType(name="PhotoSize")))
        b = ArrayType(element=ArrayType(element=SimpleType(name="PhotoSize")))
        assert a == b
        assert a != ArrayType(element=SimpleType(name="PhotoSize"))

    def test_str(self):
        assert str(SimpleType(name="User")) == "User"
        assert str(ArrayType(element=ArrayType(element=SimpleType(name="PhotoSize")))) == "Array of Array of PhotoSize"

    def test_frozen(self):
        t = SimpleType(name="User")
        with pytest.raises(ValidationError):
            t.name = "Chat"

    def test_validate_from_dict_uses_kind(self):
        adapter = TypeAdapter(TypeRef)
        t = adapter.validate_python({"kind": "array", "element": {"kind": "simple", "name": "Update"}})
        assert t == ArrayType(element=SimpleType(name="Update"))

    def test_unknown_kind_rejected(self):
        adapter = TypeAdapter(TypeRef)
        with pytest.raises(ValidationError):
            adapter.validate_python({"kind": "map", "name": "Update"})


class TestApiObject:
    def test_defaults(self):
        obj = ApiObject(name="InputFile")
        assert obj.fields == []
        assert obj.is_union_type is False
        assert obj.union_subtypes == []

    def test_union(self):
        obj = ApiObject(
            name="ChatMember",
            description="...",
            is_union_type=True,
            union_subtypes=["ChatMemberOwner", "ChatMemberMember"],
        )
        assert obj.is_union_type is True
        assert len(obj.union_subtypes) == 2


class TestApiMethod:
    def test_serialization_roundtrip(self):
        method = ApiMethod(
            name="getUpdates",
            description="Returns an Array of Update objects.",
            parameters=[
                Param(name="offset", type=SimpleType(name="Integer"), required=False),
            ],
            return_type=ArrayType(element=SimpleType(name="Update")),
            http_method="GET",
        )
        data = method.model_dump()
        method2 = ApiMethod(**data)
        assert method2 == method
        assert method2.return_type == ArrayType(element=SimpleType(name="Update"))

    def test_http_method_restricted(self):
        with pytest.raises(ValidationError):
            ApiMethod(name="deleteMessage", return_type=SimpleType(name="Boolean"), http_method="DELETE")


class TestObjectField:
    def test_create_field(self):
        field = ObjectField(name="message_id", type=SimpleType(name="Integer"), required=True)
        assert field.description == ""
        assert field.type.name == "Integer"
