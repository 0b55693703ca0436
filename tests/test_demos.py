"""
Integration tests for the demo catalog and the CLI.
"""

import json

import pytest

from patterncraft.cli import build_parser, main
from patterncraft.config_loader import load_config_bundle
from patterncraft.demos import DemoReport, available_demos, demo_registry, run_demo
from patterncraft.errors import InvalidArgumentError, RegistryLookupError

EXPECTED_DEMOS = {
    "decorator",
    "strategy",
    "observer",
    "factory",
    "adapter",
    "builder",
    "settings",
    "srp",
    "ocp",
    "lsp",
    "isp",
    "dip",
    "errors",
}


@pytest.fixture
def failing_demo():
    def boom(config):
        raise InvalidArgumentError("config", None, "demo exploded")

    demo_registry.register("boom", lambda: boom)
    yield "boom"
    demo_registry.unregister("boom")


class TestDemoCatalog:
    def test_every_vignette_registered(self):
        assert set(available_demos()) == EXPECTED_DEMOS

    @pytest.mark.parametrize("name", sorted(EXPECTED_DEMOS))
    def test_each_demo_produces_a_report(self, name, config_dir):
        report = run_demo(name, load_config_bundle(config_dir=str(config_dir)))
        assert isinstance(report, DemoReport)
        assert report.title
        assert report.lines

    @pytest.mark.parametrize("name", sorted(EXPECTED_DEMOS))
    def test_each_demo_has_a_summary_line(self, name):
        func = demo_registry.resolve(name)
        assert func.__doc__ and func.__doc__.strip()

    def test_unknown_demo(self):
        with pytest.raises(RegistryLookupError):
            run_demo("visitor")

    def test_decorator_demo_orders_channels(self):
        report = run_demo("decorator", load_config_bundle(config_dir="/nonexistent"))
        start = report.lines.index(
            "## Basic + Email + SMS "
            "(SmsNotificationDecorator -> EmailNotificationDecorator -> BasicNotification)"
        )
        assert report.lines[start + 1 : start + 4] == [
            "[sms] +1-555-0123: Server is running",
            "[email] admin@example.com: Server is running",
            "[basic] Server is running",
        ]

    def test_configured_chain_uses_config(self, config_dir):
        report = run_demo("decorator", load_config_bundle(config_dir=str(config_dir)))
        assert "## Configured chain" in report.lines
        assert "[email] ops@example.com: URGENT: Deployment finished" in report.lines

    def test_factory_demo_uses_configured_limits(self, config_dir):
        report = run_demo("factory", load_config_bundle(config_dir=str(config_dir)))
        assert "$100 -> Credit Card (tier < 5000)" in report.lines

    def test_errors_demo_distinguishes_failures(self):
        report = run_demo("errors", load_config_bundle(config_dir="/nonexistent"))
        assert "get_by_id(1) -> Ada" in report.lines
        assert "get_by_id(-1) -> InvalidArgumentError" in report.lines
        assert "get_by_id(99999) -> NotFoundError" in report.lines

    def test_observer_demo_counts(self):
        report = run_demo("observer", load_config_bundle(config_dir="/nonexistent"))
        assert "SMS +1-555-0123 received 2 updates" in report.lines
        assert "Email investor@example.com received 3 updates" in report.lines

    def test_report_sections(self):
        report = DemoReport("t")
        report.section("first")
        report.add("line")
        report.section("second")
        assert report.lines == ["## first", "line", "", "## second"]


class TestCli:
    def _run(self, args, tmp_path, console):
        return main(["--log-dir", str(tmp_path / "logs"), *args], console=console)

    def test_list(self, tmp_path, console, isolated_logging):
        assert self._run(["list"], tmp_path, console) == 0
        output = console.file.getvalue()
        assert "Available demos" in output
        assert "decorator" in output
        assert "Stack email, SMS and Slack channels around a basic notification." in output
        assert "decorator_demo" not in output

    def test_run_single_demo(self, tmp_path, console, config_dir, isolated_logging):
        code = self._run(["--config-dir", str(config_dir), "run", "decorator"], tmp_path, console)
        assert code == 0
        assert "Decorator: stacked notifications" in console.file.getvalue()

    def test_run_all(self, tmp_path, console, config_dir, isolated_logging):
        code = self._run(["--config-dir", str(config_dir), "run", "--all"], tmp_path, console)
        assert code == 0
        assert "Error handling: distinguishable failures" in console.file.getvalue()

    def test_unknown_demo_exit_code(self, tmp_path, console, isolated_logging):
        assert self._run(["run", "visitor"], tmp_path, console) == 2
        output = console.file.getvalue()
        assert "Unknown demo(s): visitor" in output

    def test_demo_failure_exit_code(self, tmp_path, console, failing_demo, isolated_logging):
        code = self._run(["run", failing_demo, "lsp"], tmp_path, console)
        output = console.file.getvalue()
        assert code == 1
        assert "boom failed" in output
        assert "demo exploded" in output
        assert "Liskov substitution" in output

    def test_failures_recorded_in_audit_log(
        self, tmp_path, console, failing_demo, isolated_logging
    ):
        self._run(["run", failing_demo], tmp_path, console)
        audit = (tmp_path / "logs" / "patterncraft-audit.log").read_text(encoding="utf-8")
        assert "Demo failed | demo=boom | error=InvalidArgumentError" in audit

    def test_strict_config_failure(self, tmp_path, console, isolated_logging):
        broken = tmp_path / "broken"
        broken.mkdir()
        (broken / "runtime_config.json").write_text("{", encoding="utf-8")
        code = self._run(
            ["--config-dir", str(broken), "--strict-config", "run", "lsp"], tmp_path, console
        )
        assert code == 1
        assert "config failed" in console.file.getvalue()

    def test_run_without_names_is_usage_error(self, tmp_path, console, isolated_logging):
        with pytest.raises(SystemExit) as exc_info:
            self._run(["run"], tmp_path, console)
        assert exc_info.value.code == 2

    def test_parser_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_json_logs_flag(self, tmp_path, console, isolated_logging):
        self._run(["--json-logs", "run", "lsp"], tmp_path, console)
        first = (tmp_path / "logs" / "patterncraft.log").read_text(encoding="utf-8").splitlines()[0]
        assert "message" in json.loads(first)
