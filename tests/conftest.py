"""Shared fixtures for the scraper builder tests."""

import dataclasses
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest

from scraper_builder.config import PYTHON_RUNTIME, ServerConfig
from scraper_builder.lifecycle import ScraperLifecycle
from scraper_builder.models import ProcessResult

QUOTES_SCRAPER = '''import json
from pathlib import Path

scraper_name = "quotes"
data_dir = Path.cwd() / "data" / scraper_name
data_dir.mkdir(parents=True, exist_ok=True)
(data_dir / "out.json").write_text(json.dumps({"items": [1, 2, 3]}))
'''

NO_DATA_PATH_SCRAPER = 'print("scraped nothing worth keeping")\n'


class FakeProcessRunner:
    """Records commands and replays scripted results instead of spawning."""

    def __init__(self, results: Optional[List] = None) -> None:
        self.results = list(results or [])
        self.calls: List[Tuple[Tuple[str, ...], Path, Optional[float]]] = []

    def run(self, command: Sequence[str], cwd: Path, timeout: Optional[float] = None) -> ProcessResult:
        self.calls.append((tuple(command), Path(cwd), timeout))
        if not self.results:
            return ProcessResult(command=tuple(command), returncode=0)
        result = self.results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result


def make_result(returncode: int = 0, stdout: str = "", stderr: str = "") -> ProcessResult:
    return ProcessResult(command=("fake",), returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def fake_runner():
    return FakeProcessRunner()


@pytest.fixture
def passing_runtime():
    """Python runtime whose static check always succeeds without mypy."""
    return dataclasses.replace(PYTHON_RUNTIME, check_command=(sys.executable, "-c", "pass"))


@pytest.fixture
def lifecycle(tmp_path, fake_runner):
    return ScraperLifecycle(ServerConfig(base_dir=tmp_path), process_runner=fake_runner)


@pytest.fixture
def real_lifecycle(tmp_path, passing_runtime):
    return ScraperLifecycle(ServerConfig(base_dir=tmp_path, runtime=passing_runtime))
