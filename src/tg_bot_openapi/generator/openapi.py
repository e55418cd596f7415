"""OpenAPI 3.0 document generation.

Renders parsed methods and objects into a plain dict that serializes to
JSON or YAML. Every method becomes a ``/{methodName}`` path, every object a
component schema; union objects become ``oneOf`` schemas, with a
``discriminator`` where one was inferred.
"""

import json
import logging
import re

import yaml

from tg_bot_openapi.parser.base import (
    ApiMethod,
    ApiObject,
    ArrayType,
    Discriminator,
    ObjectField,
    Param,
    SimpleType,
    TypeRef,
)
from tg_bot_openapi.parser.classifier import has_file_type
from tg_bot_openapi.parser.patterns import DEFAULT_CONFIG, ParserConfig
from tg_bot_openapi.parser.union import infer_discriminators

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"
SCHEMA_REF_PREFIX = "#/components/schemas/"
SERVER_URL = "https://api.telegram.org/bot{token}"

CONTENT_JSON = "application/json"
CONTENT_MULTIPART = "multipart/form-data"

PRIMITIVE_SCHEMAS = {
    "String": {"type": "string"},
    "Integer": {"type": "integer", "format": "int64"},
    "Int": {"type": "integer", "format": "int64"},
    "Boolean": {"type": "boolean"},
    "Float": {"type": "number", "format": "double"},
    "Double": {"type": "number", "format": "double"},
}

_OR_RE = re.compile(r"\s+or\s+", re.IGNORECASE)
_ENUMERATION_RE = re.compile(r",|\s+and\s+", re.IGNORECASE)


def schema_ref(name: str) -> dict:
    return {"$ref": f"{SCHEMA_REF_PREFIX}{name}"}


def _single_type_schema(name: str) -> dict:
    if name in PRIMITIVE_SCHEMAS:
        return dict(PRIMITIVE_SCHEMAS[name])
    return schema_ref(name)


def _split(pattern: re.Pattern[str], name: str) -> list[str]:
    return [part.strip() for part in pattern.split(name) if part.strip()]


def type_to_schema(type_ref: TypeRef) -> dict:
    """Convert a parsed type into a schema or a ``$ref``."""
    match type_ref:
        case ArrayType(element=element):
            return {"type": "array", "items": type_to_schema(element)}
        case SimpleType(name=name):
            # "Integer or String"
            if " or " in name.lower():
                alternatives = _split(_OR_RE, name)
                if len(alternatives) > 1:
                    return {"oneOf": [_single_type_schema(t) for t in alternatives]}
            # "InputMediaAudio, InputMediaDocument, InputMediaPhoto and InputMediaVideo"
            if "," in name or " and " in name.lower():
                alternatives = _split(_ENUMERATION_RE, name)
                if len(alternatives) > 1:
                    return {"oneOf": [schema_ref(t) for t in alternatives]}
            return _single_type_schema(name)
        case _:
            raise TypeError(f"Unknown type node: {type_ref!r}")


def _with_description(schema: dict, description: str) -> dict:
    if not description:
        return schema
    if "$ref" in schema:
        # siblings of $ref are ignored in OpenAPI 3.0
        return {"allOf": [schema], "description": description}
    return {**schema, "description": description}


def _object_properties(members: list[ObjectField] | list[Param]) -> dict:
    schema: dict = {"type": "object"}
    properties = {m.name: _with_description(type_to_schema(m.type), m.description) for m in members}
    if properties:
        schema["properties"] = properties
    required = [m.name for m in members if m.required]
    if required:
        schema["required"] = required
    return schema


def _query_parameters(parameters: list[Param]) -> list[dict]:
    result = []
    for param in parameters:
        item = {"name": param.name, "in": "query"}
        if param.description:
            item["description"] = param.description
        item["required"] = param.required
        item["schema"] = type_to_schema(param.type)
        result.append(item)
    return result


def _request_body(parameters: list[Param], config: ParserConfig) -> dict:
    multipart = any(has_file_type(param.type, config) for param in parameters)
    content_type = CONTENT_MULTIPART if multipart else CONTENT_JSON
    return {
        "content": {content_type: {"schema": _object_properties(parameters)}},
        "required": True,
    }


def _responses(return_type: TypeRef) -> dict:
    envelope = {
        "type": "object",
        "properties": {
            "ok": {"type": "boolean"},
            "result": type_to_schema(return_type),
        },
        "required": ["ok", "result"],
    }
    return {
        "200": {
            "description": "Successful response",
            "content": {CONTENT_JSON: {"schema": envelope}},
        }
    }


def build_operation(method: ApiMethod, config: ParserConfig = DEFAULT_CONFIG) -> dict:
    operation: dict = {"summary": method.name, "operationId": method.name}
    if method.description:
        operation["description"] = method.description

    if method.http_method == "GET":
        if method.parameters:
            operation["parameters"] = _query_parameters(method.parameters)
    else:
        operation["requestBody"] = _request_body(method.parameters, config)

    operation["responses"] = _responses(method.return_type)
    return operation


def build_paths(methods: list[ApiMethod], config: ParserConfig = DEFAULT_CONFIG) -> dict:
    return {
        f"/{method.name}": {method.http_method.lower(): build_operation(method, config)}
        for method in methods
    }


def _discriminator_object(union: ApiObject, discriminator: Discriminator) -> dict:
    result: dict = {"propertyName": discriminator.property_name}
    values = list(discriminator.mapping.values())
    if len(set(values)) != len(values):
        logger.warning(
            "%s: variants share %s values, discriminator mapping omitted",
            union.name, discriminator.property_name,
        )
        return result
    result["mapping"] = {value: schema_ref(variant)["$ref"] for variant, value in discriminator.mapping.items()}
    return result


def build_object_schema(obj: ApiObject, discriminator: Discriminator | None = None) -> dict:
    if obj.is_union_type:
        schema: dict = {}
        if obj.description:
            schema["description"] = obj.description
        if obj.union_subtypes:
            schema["oneOf"] = [schema_ref(subtype) for subtype in obj.union_subtypes]
        if discriminator is not None:
            schema["discriminator"] = _discriminator_object(obj, discriminator)
        return schema

    schema = _object_properties(obj.fields)
    if obj.description:
        schema = {"type": "object", "description": obj.description, **schema}
    return schema


def build_schemas(objects: list[ApiObject], discriminators: dict[str, Discriminator]) -> dict:
    return {obj.name: build_object_schema(obj, discriminators.get(obj.name)) for obj in objects}


def build_openapi(
    methods: list[ApiMethod],
    objects: list[ApiObject],
    api_version: str = "1.0.0",
    config: ParserConfig = DEFAULT_CONFIG,
    discriminators: dict[str, Discriminator] | None = None,
) -> dict:
    """Assemble the complete OpenAPI document.

    Discriminators are inferred from ``objects`` unless given explicitly.
    """
    logger.info("Generating OpenAPI specification for %d methods and %d objects", len(methods), len(objects))
    if discriminators is None:
        discriminators = infer_discriminators(objects, config)

    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": "Telegram Bot API",
            "description": "Auto-generated OpenAPI specification for Telegram Bot API",
            "version": api_version,
        },
        "servers": [
            {
                "url": SERVER_URL,
                "description": "Telegram Bot API Server",
                "variables": {
                    "token": {
                        "default": "YOUR_BOT_TOKEN",
                        "description": "Bot token obtained from @BotFather",
                    }
                },
            }
        ],
        "paths": build_paths(methods, config),
        "components": {"schemas": build_schemas(objects, discriminators)},
        "externalDocs": {
            "description": "Official Telegram Bot API Documentation",
            "url": config.doc_base_url,
        },
    }


def render_document(doc: dict, fmt: str = "json") -> str:
    """Serialize a document to ``json`` or ``yaml``."""
    if fmt == "yaml":
        return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True)
    return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"
