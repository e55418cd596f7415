"""Object and method classifiers.

Both take an entity run from the segmenter and build the corresponding
model. Objects read their fields from a Field/Type/Description table,
methods their parameters from a Parameter/Type/Required/Description table.
"""

import logging

from .base import ApiMethod, ApiObject, ObjectField, Param, TypeRef
from .html import element_text, html_to_markdown
from .patterns import DEFAULT_CONFIG, ParserConfig
from .returns import extract_return_type
from .segmenter import EntityRun
from .table import field_columns, iter_rows, param_columns, parse_table_headers
from .types import parse_type
from .union import extract_union_subtypes, is_union_description

logger = logging.getLogger(__name__)


def is_optional_description(description: str) -> bool:
    """Optional fields are marked by a leading "Optional", possibly emphasized."""
    return description.lstrip("*_ \t").lower().startswith("optional")


def has_file_type(type_ref: TypeRef | str, config: ParserConfig = DEFAULT_CONFIG) -> bool:
    """True when a type can carry an uploaded file."""
    text = str(type_ref).lower()
    return any(name.lower() in text for name in config.file_types)


def determine_http_method(name: str, parameters: list[Param], config: ParserConfig = DEFAULT_CONFIG) -> str:
    if any(has_file_type(param.type, config) for param in parameters):
        return "POST"
    return "GET" if name.lower().startswith("get") else "POST"


def parse_object(run: EntityRun, config: ParserConfig = DEFAULT_CONFIG) -> ApiObject:
    is_union = is_union_description(run.description, config)
    subtypes = extract_union_subtypes(run.elements) if is_union else []

    fields: list[ObjectField] = []
    if run.table is None:
        if not is_union:
            logger.warning("Object %s has no table element, fields will be empty", run.name)
    else:
        header = parse_table_headers(run.table)
        columns = field_columns(header.columns)
        for cells in iter_rows(run.table, columns, f"Object {run.name}", header.row):
            description = html_to_markdown(cells[columns.description], config)
            fields.append(
                ObjectField(
                    name=element_text(cells[columns.name]),
                    type=parse_type(element_text(cells[columns.type])),
                    required=not is_optional_description(description),
                    description=description,
                )
            )

    return ApiObject(
        name=run.name,
        description=run.description,
        fields=fields,
        is_union_type=is_union,
        union_subtypes=subtypes,
    )


def parse_method(run: EntityRun, config: ParserConfig = DEFAULT_CONFIG) -> ApiMethod:
    parameters: list[Param] = []
    if run.table is None:
        logger.warning("Method %s has no table element, parameters will be empty", run.name)
    else:
        header = parse_table_headers(run.table)
        columns = param_columns(header.columns)
        for cells in iter_rows(run.table, columns, f"Method {run.name}", header.row):
            parameters.append(
                Param(
                    name=element_text(cells[columns.name]),
                    type=parse_type(element_text(cells[columns.type])),
                    required=element_text(cells[columns.required]).lower() == "yes",
                    description=html_to_markdown(cells[columns.description], config),
                )
            )

    return ApiMethod(
        name=run.name,
        description=run.description,
        parameters=parameters,
        return_type=parse_type(extract_return_type(run.description)),
        http_method=determine_http_method(run.name, parameters, config),
    )
