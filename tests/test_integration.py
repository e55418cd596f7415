"""End-to-end integration tests with a mocked documentation download."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from tg_bot_openapi.cli import main
from tg_bot_openapi.generator.validator import validate_document

FIXTURES = Path(__file__).parent / "fixtures"
REF = "#/components/schemas/"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("TG_OPENAPI_HTTPS_PROXY", "TG_OPENAPI_HTTP_PROXY", "HTTPS_PROXY", "HTTP_PROXY", "TG_OPENAPI_DOC_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def document(tmp_path):
    response = MagicMock(text=(FIXTURES / "bot_api_sample.html").read_text(encoding="utf-8"))
    output_file = tmp_path / "telegram-bot-api.json"
    with patch("tg_bot_openapi.fetcher.requests.get", return_value=response) as mock_get:
        result = CliRunner().invoke(main, ["generate", "-o", str(output_file)])

    assert result.exit_code == 0, result.output
    assert mock_get.call_args.args == ("https://core.telegram.org/bots/api",)
    return json.loads(output_file.read_text(encoding="utf-8"))


class TestFullPipeline:
    def test_document_is_valid(self, document):
        assert validate_document(document) == {}
        assert document["info"]["version"] == "9.2"

    def test_paths_and_verbs(self, document):
        verbs = {path: next(iter(item)) for path, item in document["paths"].items()}
        assert verbs == {
            "/getUpdates": "get",
            "/getMe": "get",
            "/sendMessage": "post",
            "/sendPhoto": "post",
            "/getChatMember": "get",
            "/getChatMemberCount": "get",
            "/setMyCommands": "post",
        }

    def test_get_parameters(self, document):
        params = document["paths"]["/getUpdates"]["get"]["parameters"]
        allowed = next(p for p in params if p["name"] == "allowed_updates")
        assert allowed["required"] is False
        assert allowed["schema"] == {"type": "array", "items": {"type": "string"}}
        assert "`[\"message\"]`" in allowed["description"]

    def test_get_without_parameters(self, document):
        operation = document["paths"]["/getMe"]["get"]
        assert "parameters" not in operation
        result = operation["responses"]["200"]["content"]["application/json"]["schema"]["properties"]["result"]
        assert result == {"$ref": REF + "User"}

    def test_multipart_upload(self, document):
        body = document["paths"]["/sendPhoto"]["post"]["requestBody"]
        schema = body["content"]["multipart/form-data"]["schema"]
        assert schema["required"] == ["chat_id", "photo"]
        assert schema["properties"]["photo"]["oneOf"] == [{"$ref": REF + "InputFile"}, {"type": "string"}]

    def test_json_body(self, document):
        content = document["paths"]["/setMyCommands"]["post"]["requestBody"]["content"]
        schema = content["application/json"]["schema"]
        assert "required" not in schema
        assert schema["properties"]["scope"]["allOf"] == [{"$ref": REF + "BotCommandScope"}]

    def test_array_result(self, document):
        envelope = document["paths"]["/getUpdates"]["get"]["responses"]["200"]["content"]["application/json"]["schema"]
        assert envelope["properties"]["result"] == {"type": "array", "items": {"$ref": REF + "Update"}}

    def test_discriminated_unions(self, document):
        schemas = document["components"]["schemas"]
        assert schemas["ChatMember"]["discriminator"] == {
            "propertyName": "status",
            "mapping": {"creator": REF + "ChatMemberOwner", "member": REF + "ChatMemberMember"},
        }
        assert schemas["BotCommandScope"]["discriminator"]["mapping"] == {
            "default": REF + "BotCommandScopeDefault",
            "chat": REF + "BotCommandScopeChat",
        }
        assert "discriminator" not in schemas["MessageOrigin"]
        assert schemas["MessageOrigin"]["oneOf"] == [
            {"$ref": REF + "MessageOriginUser"},
            {"$ref": REF + "MessageOriginChat"},
        ]

    def test_object_schemas(self, document):
        schemas = document["components"]["schemas"]
        assert schemas["User"]["required"] == ["id", "is_bot", "first_name"]
        assert schemas["PhotoSize"]["required"] == ["file_id", "width"]
        assert schemas["InputFile"] == {
            "type": "object",
            "description": schemas["InputFile"]["description"],
        }
        assert "Formatting options" not in schemas
