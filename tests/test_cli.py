"""Tests for the rulesync CLI commands."""

import json

import pytest
import yaml

from rulesync.cli.apply import apply_command, validate_command
from rulesync.cli.main import build_parser, main
from rulesync.cli.remote import get_command, list_command, pull_command
from rulesync.config.settings import get_settings
from rulesync.core.errors import ExitCode
from rulesync.mimir.client import MimirRulerError
from rulesync.resources.io import load_resources

RULE_GROUP_YAML = """
apiVersion: rulesync/v1alpha1
kind: PrometheusRuleGroup
metadata:
  name: {name}
  namespace: teamA
spec:
  {uid}rules:
    - type: alerting
      name: HighLatency
      query: up == 0
"""


def write_group(directory, name, uid=None):
    uid_line = f"uid: {uid}\n  " if uid else ""
    path = directory / f"{name}.yaml"
    path.write_text(RULE_GROUP_YAML.format(name=name, uid=uid_line))
    return path


class TestListCommand:
    """Tests for `rulesync list`."""

    def test_list_json(self, registry, capsys):
        result = list_command(output_format="json", registry=registry)

        assert result == ExitCode.SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert {item["uid"] for item in data} == {"teamA.latency", "teamA.errors", "teamB.rates"}
        assert all(item["kind"] == "PrometheusRuleGroup" for item in data)

    def test_list_text(self, registry, capsys):
        assert list_command(registry=registry) == ExitCode.SUCCESS
        assert "teamB.rates" in capsys.readouterr().out

    def test_list_remote_failure(self, registry, ruler_client):
        ruler_client.list_rules.side_effect = MimirRulerError("Failed to list rules: 500", status_code=500)

        assert list_command(registry=registry) == ExitCode.REMOTE_ERROR


class TestGetCommand:
    """Tests for `rulesync get`."""

    def test_get_yaml(self, registry, capsys):
        result = get_command("teamA.latency", registry=registry)

        assert result == ExitCode.SUCCESS
        data = yaml.safe_load(capsys.readouterr().out)
        assert data["kind"] == "PrometheusRuleGroup"
        assert data["metadata"] == {"name": "latency", "namespace": "teamA"}
        assert data["spec"]["rules"] == [{"alert": "HighLatency", "expr": "latency_p99 > 1"}]

    def test_get_json(self, registry, capsys):
        assert get_command("teamB.rates", output_format="json", registry=registry) == ExitCode.SUCCESS
        assert json.loads(capsys.readouterr().out)["metadata"]["name"] == "rates"

    def test_get_not_found(self, registry):
        assert get_command("teamA.missing", registry=registry) == ExitCode.NOT_FOUND

    def test_get_malformed_uid(self, registry):
        assert get_command("latency", registry=registry) == ExitCode.VALIDATION_ERROR

    def test_get_unknown_kind(self, registry):
        assert get_command("a.b", kind="Dashboard", registry=registry) == ExitCode.UNSUPPORTED


class TestPullCommand:
    """Tests for `rulesync pull`."""

    def test_pull_writes_every_group(self, registry, tmp_path):
        result = pull_command(str(tmp_path), registry=registry)

        assert result == ExitCode.SUCCESS
        files = sorted(p.name for p in (tmp_path / "prometheus").iterdir())
        assert files == ["rules-errors.yaml", "rules-latency.yaml", "rules-rates.yaml"]

        pulled = {r.name: r for r in load_resources(tmp_path)}
        assert pulled["rates"].get_metadata("namespace") == "teamB"


class TestValidateCommand:
    """Tests for `rulesync validate`."""

    def test_validate_ok(self, registry, ruler_client, tmp_path):
        write_group(tmp_path, "latency")

        assert validate_command(str(tmp_path), registry=registry) == ExitCode.SUCCESS
        ruler_client.list_rules.assert_not_called()

    def test_validate_uid_mismatch(self, registry, tmp_path):
        write_group(tmp_path, "latency", uid="other")

        assert validate_command(str(tmp_path), registry=registry) == ExitCode.VALIDATION_ERROR

    def test_validate_unknown_kind(self, registry, tmp_path):
        (tmp_path / "dash.yaml").write_text("kind: Dashboard\nmetadata:\n  name: d\n")

        assert validate_command(str(tmp_path), registry=registry) == ExitCode.UNSUPPORTED


class TestApplyCommand:
    """Tests for `rulesync apply`."""

    def test_apply_updates_existing(self, registry, ruler_client, tmp_path):
        write_group(tmp_path, "latency")

        assert apply_command(str(tmp_path), registry=registry) == ExitCode.SUCCESS

        grouping = ruler_client.create_rules.call_args.args[0]
        assert grouping.namespace == "teamA"
        assert grouping.groups[0].rules == [
            {"type": "alerting", "alert": "HighLatency", "expr": "up == 0"}
        ]

    def test_apply_adds_missing(self, registry, ruler_client, tmp_path):
        write_group(tmp_path, "brand-new")

        assert apply_command(str(tmp_path), registry=registry) == ExitCode.SUCCESS
        assert ruler_client.create_rules.call_args.args[0].groups[0].name == "brand-new"

    def test_apply_dry_run(self, registry, ruler_client, tmp_path):
        write_group(tmp_path, "latency")

        assert apply_command(str(tmp_path), dry_run=True, registry=registry) == ExitCode.SUCCESS
        ruler_client.create_rules.assert_not_called()

    def test_apply_stops_on_invalid(self, registry, ruler_client, tmp_path):
        write_group(tmp_path, "latency", uid="other")

        assert apply_command(str(tmp_path), registry=registry) == ExitCode.VALIDATION_ERROR
        ruler_client.create_rules.assert_not_called()

    def test_apply_remote_failure(self, registry, ruler_client, tmp_path):
        write_group(tmp_path, "latency")
        ruler_client.create_rules.side_effect = MimirRulerError("Failed to push", status_code=400)

        assert apply_command(str(tmp_path), registry=registry) == ExitCode.REMOTE_ERROR


class TestMain:
    """Tests for argument parsing and the entry point."""

    def test_parser_get(self):
        args = build_parser().parse_args(["get", "teamA.latency", "-o", "json"])

        assert args.command == "get"
        assert args.uid == "teamA.latency"
        assert args.output == "json"
        assert args.kind == "PrometheusRuleGroup"

    def test_no_command(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2

    def test_missing_address_is_config_error(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("RULESYNC_MIMIR_ADDRESS", raising=False)
        get_settings.cache_clear()

        try:
            with pytest.raises(SystemExit) as exc_info:
                main(["list"])
        finally:
            get_settings.cache_clear()

        assert exc_info.value.code == ExitCode.CONFIG_ERROR
