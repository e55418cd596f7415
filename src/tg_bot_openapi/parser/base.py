"""Data models for the parsed Telegram Bot API documentation.

The parser turns the HTML reference into these models; the OpenAPI
generator consumes them. Every model is frozen once built.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class SimpleType(BaseModel):
    """A scalar or a reference to a named object, e.g. ``Integer`` or ``User``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["simple"] = "simple"
    name: str

    def __str__(self) -> str:
        return self.name


class ArrayType(BaseModel):
    """A homogeneous sequence of ``element``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    element: "TypeRef"

    def __str__(self) -> str:
        return f"Array of {self.element}"


TypeRef = Annotated[Union[SimpleType, ArrayType], Field(discriminator="kind")]

ArrayType.model_rebuild()


class ObjectField(BaseModel):
    """A single field of a documented object."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeRef
    required: bool
    description: str = ""


class ApiObject(BaseModel):
    """A documented data structure, or a union of other objects."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    fields: list[ObjectField] = []
    is_union_type: bool = False
    union_subtypes: list[str] = []


class Param(BaseModel):
    """A single method parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeRef
    required: bool
    description: str = ""


class ApiMethod(BaseModel):
    """A single Bot API method with all its metadata."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    parameters: list[Param] = []
    return_type: TypeRef
    http_method: Literal["GET", "POST"]


class Discriminator(BaseModel):
    """Field shared by every variant of a union, with each variant's literal value."""

    model_config = ConfigDict(frozen=True)

    property_name: str
    mapping: dict[str, str]  # variant object name -> literal value
