import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from products_api.cli._output import (
    format_outcome_json,
    format_outcome_text,
    format_rules_json,
    format_rules_text,
)
from products_api.cli._payload import PayloadError, load_instance
from products_api.cli.main import cli
from products_api.core.failure import ValidationFailure, ValidationOutcome
from products_api.core.registry import create_default_registry
from products_api.features.add_product import AddProductRequestDto
from tests.conftest import sample_ruleset


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _payload(tmp_path: Path, data: Any) -> str:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestPayload:
    def test_builds_dataclass(self, tmp_path: Path) -> None:
        instance = load_instance(
            AddProductRequestDto, _payload(tmp_path, {"id": "1", "name": "Keyboard", "extra": 1})
        )
        assert instance == AddProductRequestDto(id="1", name="Keyboard")

    def test_null_payload(self, tmp_path: Path) -> None:
        assert load_instance(AddProductRequestDto, _payload(tmp_path, None)) is None

    def test_non_object_payload(self, tmp_path: Path) -> None:
        with pytest.raises(PayloadError, match="JSON object"):
            load_instance(AddProductRequestDto, _payload(tmp_path, [1, 2]))

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(PayloadError, match="Invalid JSON"):
            load_instance(AddProductRequestDto, path)

    def test_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"id": "\xff"}')
        with pytest.raises(PayloadError, match="not valid UTF-8"):
            load_instance(AddProductRequestDto, path)

    def test_not_a_dataclass(self, tmp_path: Path) -> None:
        with pytest.raises(PayloadError, match="not a dataclass"):
            load_instance(int, _payload(tmp_path, {}))


class TestOutput:
    def test_rules_text(self) -> None:
        text = format_rules_text([sample_ruleset()], no_color=True)
        assert "1 rulesets, 3 rules" in text
        assert "SampleProduct (3)" in text
        assert "name is required" in text

    def test_rules_json(self) -> None:
        data = json.loads(format_rules_json([sample_ruleset()]))
        assert data["total"] == 1
        ruleset = data["rulesets"][0]
        assert ruleset["name"] == "SampleProduct"
        assert ruleset["rules"][-1] == {"field": "Name", "message": "name is required"}

    def test_outcome_text_ok(self) -> None:
        text = format_outcome_text("SampleProduct", ValidationOutcome(), no_color=True)
        assert "OK" in text

    def test_outcome_text_failures(self) -> None:
        outcome = ValidationOutcome(
            failures=(ValidationFailure("Name", "name is required"), ValidationFailure("", "x"))
        )
        text = format_outcome_text("SampleProduct", outcome, no_color=True)
        assert "[Name] invalid: name is required" in text
        assert "[<object>] invalid: x" in text
        assert "2 failures" in text

    def test_outcome_json_valid(self) -> None:
        assert json.loads(format_outcome_json(ValidationOutcome())) == {"valid": True}

    def test_outcome_json_problem_details(self) -> None:
        outcome = ValidationOutcome(failures=(ValidationFailure("Name", "name is required"),))
        data = json.loads(format_outcome_json(outcome))
        assert data["status"] == 400
        assert data["errors"] == {"Name": "name is required"}


class TestCommands:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "products-api" in result.output

    def test_rules_text(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["rules", "--no-color"])
        assert result.exit_code == 0
        assert "AddProductRequestDto" in result.output
        assert "x-correlation-id is required" in result.output

    def test_rules_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["rules", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        names = [rs["name"] for rs in data["rulesets"]]
        assert names == [rs.name for rs in create_default_registry().rulesets]

    def test_validate_valid_payload(self, runner: CliRunner, tmp_path: Path) -> None:
        payload = _payload(
            tmp_path, {"correlation_id": "abc", "id": "1", "name": "Keyboard", "price": 10.5}
        )
        result = runner.invoke(
            cli, ["validate", "AddProductRequestDto", payload, "--profile", "fast", "--no-color"]
        )
        assert result.exit_code == 0, result.output
        assert "OK" in result.output

    def test_validate_invalid_payload_json(self, runner: CliRunner, tmp_path: Path) -> None:
        payload = _payload(tmp_path, {"correlation_id": "abc", "id": "1", "name": ""})
        result = runner.invoke(
            cli,
            ["validate", "AddProductRequestDto", payload, "--profile", "fast", "--format", "json"],
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["errors"] == {"Name": "name is required"}

    def test_validate_null_payload(self, runner: CliRunner, tmp_path: Path) -> None:
        payload = _payload(tmp_path, None)
        result = runner.invoke(
            cli, ["validate", "AddProductRequestDto", payload, "--profile", "fast", "--no-color"]
        )
        assert result.exit_code == 1
        assert "null instance" in result.output

    def test_validate_unknown_ruleset(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["validate", "Nope", _payload(tmp_path, {})])
        assert result.exit_code == 2
        assert "unknown ruleset 'Nope'" in result.output

    def test_validate_bad_payload(self, runner: CliRunner, tmp_path: Path) -> None:
        payload = _payload(tmp_path, "just a string")
        result = runner.invoke(cli, ["validate", "AddProductRequestDto", payload])
        assert result.exit_code == 2
        assert "JSON object" in result.output

    def test_validate_non_utf8_payload(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"id": "\xff"}')
        result = runner.invoke(cli, ["validate", "AddProductRequestDto", str(path)])
        assert result.exit_code == 2
        assert "not valid UTF-8" in result.output

    def test_invalid_config_exits_2(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / ".products-api.toml"
        config.write_bytes(b'profile = "typo"\n')
        args = ["validate", "AddProductRequestDto", _payload(tmp_path, {}), "--config", str(config)]
        result = runner.invoke(cli, args)
        assert result.exit_code == 2
        assert "invalid config" in result.output

    def test_serve_runs_uvicorn(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[dict[str, Any]] = []

        def fake_run(app: object, **kwargs: Any) -> None:
            calls.append({"app": app, **kwargs})

        monkeypatch.setattr("uvicorn.run", fake_run)
        config = tmp_path / ".products-api.toml"
        config.write_bytes(b"port = 9100\n")

        result = runner.invoke(
            cli, ["serve", "--config", str(config), "--host", "0.0.0.0", "--log-level", "warning"]
        )
        assert result.exit_code == 0, result.output
        assert len(calls) == 1
        assert calls[0]["host"] == "0.0.0.0"
        assert calls[0]["port"] == 9100
        assert calls[0]["log_level"] == "warning"
        assert calls[0]["app"].state.config.port == 9100
