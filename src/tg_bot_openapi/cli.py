"""CLI entry point for tg-bot-openapi."""

import json
import logging
from pathlib import Path

import click
import requests

from tg_bot_openapi.config import Settings
from tg_bot_openapi.fetcher import fetch_document
from tg_bot_openapi.generator.openapi import build_openapi, render_document
from tg_bot_openapi.generator.validator import validate_document, validate_serialized
from tg_bot_openapi.parser.document import parse
from tg_bot_openapi.parser.errors import DocumentParseError
from tg_bot_openapi.parser.segmenter import extract_version


def _load_html(settings: Settings, source: Path | None, url: str | None) -> str:
    """Read the documentation from a local file, or download it."""
    if source is not None:
        click.echo(f"Reading {source}...", err=True)
        return source.read_text(encoding="utf-8")

    click.echo(f"Fetching {url or settings.doc_url}...", err=True)
    try:
        return fetch_document(settings, url)
    except requests.RequestException as e:
        raise click.ClickException(f"Failed to fetch documentation: {e}") from e


def _echo_errors(errors: dict[str, str]) -> None:
    for location, message in errors.items():
        click.echo(f"  {location}: {message}", err=True)


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default from TG_OPENAPI_LOG_LEVEL or INFO).",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None):
    """Telegram Bot API documentation -> OpenAPI 3.0 generator."""
    settings = Settings()
    logging.basicConfig(
        level=getattr(logging, (log_level or settings.log_level).upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings


@main.command()
@click.option("--source", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Parse a saved HTML file instead of downloading.")
@click.option("--url", default=None, help="Documentation URL (overrides TG_OPENAPI_DOC_URL).")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Output file for the OpenAPI document.")
@click.option("--format", "fmt", default=None, type=click.Choice(["json", "yaml"]), help="Output format.")
@click.option("--skip-validation", is_flag=True, help="Write the document even if validation fails.")
@click.pass_obj
def generate(settings: Settings, source: Path | None, url: str | None, output: Path | None, fmt: str | None, skip_validation: bool):
    """Full pipeline: fetch doc -> parse -> generate OpenAPI -> validate -> write."""
    output = output or settings.output
    fmt = fmt or settings.output_format

    html = _load_html(settings, source, url)

    try:
        version = extract_version(html)
        methods, objects = parse(html)
    except DocumentParseError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Bot API {version}: found {len(methods)} methods and {len(objects)} objects.")

    doc = build_openapi(methods, objects, api_version=version)
    text = render_document(doc, fmt)

    errors = validate_document(doc)
    errors.update(validate_serialized(text, fmt))
    if errors:
        click.echo(f"Validation found {len(errors)} problems:", err=True)
        _echo_errors(errors)
        if not skip_validation:
            raise click.ClickException("Generated document is invalid, nothing written")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"OpenAPI document saved to {output}")


@main.command("parse")
@click.option("--source", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Parse a saved HTML file instead of downloading.")
@click.option("--url", default=None, help="Documentation URL (overrides TG_OPENAPI_DOC_URL).")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write the parsed model here instead of stdout.")
@click.pass_obj
def parse_command(settings: Settings, source: Path | None, url: str | None, output: Path | None):
    """Dump the parsed methods and objects as JSON."""
    html = _load_html(settings, source, url)

    try:
        methods, objects = parse(html)
    except DocumentParseError as e:
        raise click.ClickException(str(e)) from e

    data = {
        "methods": [m.model_dump(mode="json") for m in methods],
        "objects": [o.model_dump(mode="json") for o in objects],
    }
    text = json.dumps(data, indent=2, ensure_ascii=False)

    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    click.echo(f"Parsed {len(methods)} methods and {len(objects)} objects into {output}")
