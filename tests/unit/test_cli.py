"""Tests for the switchboard command-line interface."""

import json

from switchboard.cli import main


def write_app(directory, filename, body):
    (directory / filename).write_text(body, encoding="utf-8")


class TestHelp:
    def test_no_args_prints_help(self, capsys):
        assert main([]) == 0
        assert "switchboard <command>" in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        assert main(["frobnicate"]) == 1
        assert "Unknown command: frobnicate" in capsys.readouterr().err


class TestCheckCatalog:
    def test_bundled_catalog_is_clean(self, capsys):
        assert main(["check-catalog"]) == 0
        assert "Catalog OK" in capsys.readouterr().out

    def test_reports_issues(self, tmp_path, capsys):
        write_app(tmp_path, "bad.yaml", """
id: bad
name: Bad
resources:
  - id: item
    name: Item
    value: item
    operations:
      - id: get
        name: Get
        value: get
        routing:
          request: {method: GET, url: "/items/{itemId}"}
""")

        assert main(["check-catalog", "--catalog", str(tmp_path)]) == 1
        assert "unbound-placeholder" in capsys.readouterr().out

    def test_unloadable_catalog(self, tmp_path, capsys):
        write_app(tmp_path, "broken.yaml", "id: [oops")

        assert main(["check-catalog", "--catalog", str(tmp_path)]) == 1
        assert "broken.yaml" in capsys.readouterr().err

    def test_option_without_value(self, capsys):
        assert main(["check-catalog", "--catalog"]) == 1
        assert "requires a value" in capsys.readouterr().err


class TestAuditCoverage:
    def test_against_catalog(self, tmp_path, capsys):
        write_app(tmp_path, "a.yaml", "id: alpha\nname: Alpha\n")
        write_app(tmp_path, "b.yaml", "id: beta\nname: Beta\n")
        supported = tmp_path / "supported.txt"
        supported.write_text("alpha\n", encoding="utf-8")

        code = main(["audit-coverage", "--catalog", str(tmp_path), "--supported", str(supported)])

        assert code == 0
        report = json.loads(capsys.readouterr().out)
        assert report == {"apps": 2, "supported": 1, "missing": 1, "missing_first_60": ["beta"]}

    def test_against_app_config_source(self, tmp_path, capsys):
        configs = tmp_path / "app-configs.ts"
        configs.write_text(
            "export const aConfig: AppConfig = {\n  id: 'a',\n};\n"
            "export const bConfig: AppConfig = {\n  id: 'b',\n};\n",
            encoding="utf-8",
        )
        runner = tmp_path / "runner.ts"
        runner.write_text("if (appId === 'b') {}\n", encoding="utf-8")

        code = main(["audit-coverage", "--supported", str(runner), "--app-config", str(configs)])

        assert code == 0
        assert json.loads(capsys.readouterr().out)["missing_first_60"] == ["a"]

    def test_supported_is_required(self, capsys):
        assert main(["audit-coverage"]) == 1
        assert "--supported is required" in capsys.readouterr().err

    def test_missing_supported_file(self, tmp_path, capsys):
        assert main(["audit-coverage", "--supported", str(tmp_path / "nope.txt")]) == 1
        assert "Error" in capsys.readouterr().err
