"""Configuration objects and constants for the scraper builder."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

SCRAPERS_DIRNAME = "scrapers"
DATA_DIRNAME = "data"

DEFAULT_PAGE_TIMEOUT = 30.0
DEFAULT_CHECK_OUTPUT_CHARS = 500
DEFAULT_RUN_OUTPUT_CHARS = 10_000

DEFAULT_CLICK_TIMEOUT_MS = 5000
DEFAULT_WAIT_TIMEOUT_MS = 10_000
DEFAULT_SCROLL_PIXELS = 500
DEFAULT_CONTENT_MAX_LENGTH = 50_000
DEFAULT_FIND_LIMIT = 20
DEFAULT_EXTRACT_LIMIT = 50
DEFAULT_DOWNLOAD_TEXT_CHARS = 10_000

# Runs argv[1] as __main__ without putting the scrapers directory on sys.path,
# so a scraper named after a module cannot shadow it for the others.
PYTHON_SCRIPT_LAUNCHER = (
    "import sys\n"
    "if sys.path and sys.path[0] == '':\n"
    "    del sys.path[0]\n"
    "import runpy\n"
    "sys.argv = sys.argv[1:]\n"
    "runpy.run_path(sys.argv[0], run_name='__main__')\n"
)


@dataclass(frozen=True)
class ScraperRuntime:
    """How scrapers of one language are stored, checked and executed."""

    name: str
    source_suffix: str
    listed_suffixes: Tuple[str, ...]
    interpreter: Tuple[str, ...]
    check_command: Tuple[str, ...]
    check_label: str
    data_path_patterns: Tuple[str, ...]
    data_path_hint: str
    data_suffixes: Tuple[str, ...] = (".json",)

    def hint_for(self, scraper_name: str) -> str:
        return self.data_path_hint.format(name=scraper_name)


PYTHON_RUNTIME = ScraperRuntime(
    name="python",
    source_suffix=".py",
    listed_suffixes=(".py",),
    interpreter=(sys.executable, "-c", PYTHON_SCRIPT_LAUNCHER),
    check_command=(
        sys.executable,
        "-m",
        "mypy",
        "--ignore-missing-imports",
        "--no-error-summary",
        SCRAPERS_DIRNAME,
    ),
    check_label="Type Check",
    data_path_patterns=(
        'os.path.join(os.getcwd(), "data", scraper_name)',
        "os.path.join(os.getcwd(), 'data', scraper_name)",
        'Path.cwd() / "data" / scraper_name',
        "Path.cwd() / 'data' / scraper_name",
        'Path.cwd() / "data" / "',
        "Path.cwd() / 'data' / '",
        "data/{scraper_name}",
    ),
    data_path_hint=(
        '  scraper_name = "{name}"\n'
        '  data_dir = Path.cwd() / "data" / scraper_name'
    ),
)

TYPESCRIPT_RUNTIME = ScraperRuntime(
    name="typescript",
    source_suffix=".ts",
    listed_suffixes=(".ts", ".js"),
    interpreter=("npx", "tsx"),
    check_command=("npx", "tsc", "--noEmit"),
    check_label="TypeScript Check",
    data_path_patterns=(
        "path.join(process.cwd(), 'data', scraperName)",
        "path.join(process.cwd(), 'data', '",
        "data/${scraperName}",
    ),
    data_path_hint=(
        "  const scraperName = '{name}';\n"
        "  const dataDir = path.join(process.cwd(), 'data', scraperName);"
    ),
)

RUNTIMES: Dict[str, ScraperRuntime] = {
    PYTHON_RUNTIME.name: PYTHON_RUNTIME,
    TYPESCRIPT_RUNTIME.name: TYPESCRIPT_RUNTIME,
}


def get_runtime(name: str) -> ScraperRuntime:
    """Look up a runtime preset by name."""
    try:
        return RUNTIMES[name.lower()]
    except KeyError:
        choices = ", ".join(sorted(RUNTIMES))
        raise ValueError(f"Unknown scraper runtime {name!r} (expected one of: {choices})") from None


@dataclass
class ServerConfig:
    """Top-level settings shared by the MCP server and the CLI."""

    base_dir: Optional[Path] = None
    runtime: ScraperRuntime = PYTHON_RUNTIME
    headed: bool = False
    page_timeout: float = DEFAULT_PAGE_TIMEOUT
    run_timeout: Optional[float] = None
    check_output_chars: int = DEFAULT_CHECK_OUTPUT_CHARS
    run_output_chars: int = DEFAULT_RUN_OUTPUT_CHARS


def config_from_env(environ: Optional[Dict[str, str]] = None) -> ServerConfig:
    """Build a ServerConfig from environment variables."""
    env = os.environ if environ is None else environ
    config = ServerConfig()

    base_dir = env.get("SCRAPER_BUILDER_DIR")
    if base_dir:
        config.base_dir = Path(base_dir).expanduser()

    runtime = env.get("SCRAPER_BUILDER_RUNTIME")
    if runtime:
        config.runtime = get_runtime(runtime)

    config.headed = env.get("HEADED", "").lower() == "true"

    run_timeout = env.get("SCRAPER_BUILDER_RUN_TIMEOUT")
    if run_timeout:
        config.run_timeout = float(run_timeout)
    return config
