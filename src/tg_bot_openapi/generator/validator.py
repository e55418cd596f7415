"""Validates a generated OpenAPI document for structural correctness."""

import json

import yaml

from tg_bot_openapi.generator.openapi import SCHEMA_REF_PREFIX


def _pointer(parts: list[str]) -> str:
    escaped = [str(p).replace("~", "~0").replace("/", "~1") for p in parts]
    return "#/" + "/".join(escaped)


def _walk(node, parts: list[str]):
    if isinstance(node, dict):
        yield node, parts
        for key, value in node.items():
            yield from _walk(value, parts + [key])
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield from _walk(value, parts + [str(index)])


def _schema_name(ref: str) -> str | None:
    if not ref.startswith(SCHEMA_REF_PREFIX):
        return None
    return ref[len(SCHEMA_REF_PREFIX):]


def validate_version(doc: dict) -> dict[str, str]:
    version = str(doc.get("openapi", ""))
    if not version.startswith("3.0"):
        return {"#/openapi": f"Unsupported OpenAPI version: {version!r}"}
    return {}


def validate_refs(doc: dict) -> dict[str, str]:
    """Check that every ``$ref`` points to an existing component schema.

    Returns dict of {location: error_message} for broken references.
    """
    schemas = doc.get("components", {}).get("schemas", {})
    errors = {}
    for node, parts in _walk(doc, []):
        ref = node.get("$ref")
        if not isinstance(ref, str):
            continue
        name = _schema_name(ref)
        if name is None:
            errors[_pointer(parts)] = f"Unsupported reference: {ref}"
        elif name not in schemas:
            errors[_pointer(parts)] = f"Unresolved reference: {ref}"
    return errors


def validate_discriminators(doc: dict) -> dict[str, str]:
    """Check that every variant of a discriminated union has the discriminator property.

    Returns dict of {location: error_message}.
    """
    schemas = doc.get("components", {}).get("schemas", {})
    errors = {}
    for name, schema in schemas.items():
        discriminator = schema.get("discriminator")
        if not discriminator:
            continue
        location = _pointer(["components", "schemas", name, "discriminator"])
        prop = discriminator.get("propertyName")
        if not prop:
            errors[location] = "Missing propertyName"
            continue

        missing = []
        for variant_ref in schema.get("oneOf", []):
            variant = schemas.get(_schema_name(variant_ref.get("$ref", "")) or "", {})
            if prop not in variant.get("properties", {}):
                missing.append(variant_ref.get("$ref", "?"))
        if missing:
            errors[location] = f"Property {prop!r} missing from: {', '.join(missing)}"

        for value, target in discriminator.get("mapping", {}).items():
            if _schema_name(target) not in schemas:
                errors[f"{location}/mapping/{value}"] = f"Unresolved mapping target: {target}"
    return errors


def validate_serialized(text: str, fmt: str = "json") -> dict[str, str]:
    """Check that a rendered document loads back.

    Returns dict of {"_document": error_message} on failure.
    """
    try:
        if fmt == "yaml":
            yaml.safe_load(text)
        else:
            json.loads(text)
    except yaml.YAMLError as e:
        return {"_document": f"YAMLError: {e}"}
    except json.JSONDecodeError as e:
        return {"_document": f"JSONDecodeError: {e.msg} (line {e.lineno})"}
    return {}


def validate_document(doc: dict) -> dict[str, str]:
    """Run all structural validations.

    Returns dict of {location: error_message} for all problems found.
    """
    errors = {}
    errors.update(validate_version(doc))
    errors.update(validate_refs(doc))
    errors.update(validate_discriminators(doc))
    return errors
