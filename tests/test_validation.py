import pytest

from conftest import FakeProcessRunner, make_result
from scraper_builder.config import PYTHON_RUNTIME, TYPESCRIPT_RUNTIME
from scraper_builder.models import ValidationStatus
from scraper_builder.validation import ScraperValidator, follows_data_path_convention

PY_GOOD = 'scraper_name = "quotes"\ndata_dir = Path.cwd() / "data" / scraper_name\n'
TS_GOOD = "const out = `data/${scraperName}/latest.json`;\n"


@pytest.mark.parametrize("pattern", PYTHON_RUNTIME.data_path_patterns)
def test_every_python_pattern_is_accepted(pattern):
    assert follows_data_path_convention(f"x = {pattern}\n", PYTHON_RUNTIME.data_path_patterns)


def test_missing_pattern_warns_without_running_checker(tmp_path):
    runner = FakeProcessRunner([make_result(1, stdout="would fail")])
    validator = ScraperValidator(PYTHON_RUNTIME, runner)

    result = validator.validate("quotes", "print('no output path')\n", tmp_path)

    assert result.status is ValidationStatus.WARNING
    assert 'scraper_name = "quotes"' in result.message
    assert 'Path.cwd() / "data" / scraper_name' in result.message
    assert runner.calls == []


def test_missing_pattern_warns_even_if_checker_would_pass(tmp_path):
    runner = FakeProcessRunner()
    validator = ScraperValidator(TYPESCRIPT_RUNTIME, runner)

    result = validator.validate("odds", "console.log('hi');\n", tmp_path)

    assert result.status is ValidationStatus.WARNING
    assert "const scraperName = 'odds';" in result.message
    assert runner.calls == []


def test_template_literal_data_path_reaches_typescript_checker(tmp_path):
    runner = FakeProcessRunner([make_result(0)])
    validator = ScraperValidator(TYPESCRIPT_RUNTIME, runner)

    result = validator.validate("odds", TS_GOOD, tmp_path)

    assert result.status is ValidationStatus.PASSED
    assert result.message == "TypeScript Check Passed"
    assert runner.calls == [(("npx", "tsc", "--noEmit"), tmp_path, None)]


def test_checker_failure_is_reported_and_truncated(tmp_path):
    diagnostics = "scrapers/quotes.py:1: error: " + "x" * 1000
    runner = FakeProcessRunner([make_result(1, stdout=diagnostics)])
    validator = ScraperValidator(PYTHON_RUNTIME, runner)

    result = validator.validate("quotes", PY_GOOD, tmp_path)

    assert result.status is ValidationStatus.FAILED
    assert result.message.startswith("Type Check Failed:\n")
    body = result.message.split("\n", 1)[1]
    assert body == diagnostics[:500] + "..."
    assert runner.calls[0][0] == PYTHON_RUNTIME.check_command


def test_checker_stderr_used_when_stdout_empty(tmp_path):
    runner = FakeProcessRunner([make_result(1, stderr="No module named mypy")])
    validator = ScraperValidator(PYTHON_RUNTIME, runner)

    result = validator.validate("quotes", PY_GOOD, tmp_path)

    assert result.status is ValidationStatus.FAILED
    assert "No module named mypy" in result.message


def test_checker_that_cannot_start_counts_as_failed(tmp_path):
    runner = FakeProcessRunner([FileNotFoundError(2, "No such file or directory", "npx")])
    validator = ScraperValidator(TYPESCRIPT_RUNTIME, runner)

    result = validator.validate("odds", TS_GOOD, tmp_path)

    assert result.status is ValidationStatus.FAILED
    assert "No such file or directory" in result.message
