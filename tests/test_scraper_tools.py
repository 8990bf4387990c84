from conftest import QUOTES_SCRAPER, make_result
from scraper_builder.tools import list_scrapers, run_scraper, save_scraper


def test_save_conflict_is_reported_not_raised(lifecycle, tmp_path):
    save_scraper(lifecycle, "quotes", QUOTES_SCRAPER)

    response = save_scraper(lifecycle, "quotes", "other = 1\n")

    assert response == {
        "success": False,
        "error": 'Scraper "quotes.py" already exists. Set overwrite: true to replace it.',
    }
    assert (tmp_path / "scrapers" / "quotes.py").read_text(encoding="utf-8") == QUOTES_SCRAPER


def test_save_with_overwrite_replaces(lifecycle, tmp_path):
    save_scraper(lifecycle, "quotes", QUOTES_SCRAPER)

    response = save_scraper(lifecycle, "quotes", "other = 1\n", overwrite=True)

    assert response["success"] is True
    assert list_scrapers(lifecycle)["scrapers"][0]["size"] == len("other = 1\n")


def test_save_failed_check_is_still_a_successful_save(lifecycle, fake_runner):
    fake_runner.results.append(make_result(1, stdout="quotes.py:3: error: Name 'x' is not defined"))

    response = save_scraper(lifecycle, "quotes", QUOTES_SCRAPER)

    assert response["success"] is True
    assert response["validation_status"].startswith("Type Check Failed:")
    assert "Name 'x' is not defined" in response["validation_status"]


def test_save_into_explicit_directory(lifecycle, tmp_path):
    target = tmp_path / "project"

    response = save_scraper(lifecycle, "Quotes Page", QUOTES_SCRAPER, directory=str(target))

    assert response["path"] == str(target / "scrapers" / "quotes_page.py")
    assert response["current_working_directory"] == str(target)
    assert (target / "data").is_dir()


def test_save_filesystem_error_becomes_failure(lifecycle, tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("a file, not a directory", encoding="utf-8")

    response = save_scraper(lifecycle, "quotes", QUOTES_SCRAPER, directory=str(blocker))

    assert response["success"] is False
    assert response["error"].startswith("Failed to save scraper:")


def test_list_without_directory(lifecycle):
    assert list_scrapers(lifecycle) == {
        "success": True,
        "count": 0,
        "scrapers": [],
        "message": "No scrapers directory found.",
    }


def test_run_unknown_scraper(lifecycle, fake_runner, tmp_path):
    response = run_scraper(lifecycle, "ghost")

    assert response["success"] is False
    assert response["error"] == f"Scraper script not found: {tmp_path / 'scrapers' / 'ghost.py'}"
    assert fake_runner.calls == []


def test_run_with_corrupt_output(lifecycle, tmp_path):
    save_scraper(lifecycle, "quotes", QUOTES_SCRAPER)
    data_dir = tmp_path / "data" / "quotes"
    data_dir.mkdir()
    (data_dir / "out.json").write_text("[1, 2,", encoding="utf-8")

    response = run_scraper(lifecycle, "quotes")

    assert response["success"] is False
    assert "not valid JSON" in response["error"]


def test_run_with_empty_data_directory(lifecycle, tmp_path):
    save_scraper(lifecycle, "quotes", QUOTES_SCRAPER)
    (tmp_path / "data" / "quotes").mkdir()

    response = run_scraper(lifecycle, "quotes")

    assert response == {
        "success": True,
        "message": "Scraper ran successfully, but no JSON data files were found.",
        "data": None,
    }


def test_save_invalid_name_or_code_is_reported_not_raised(lifecycle, fake_runner):
    empty = save_scraper(lifecycle, "", QUOTES_SCRAPER)
    surrogate = save_scraper(lifecycle, "s", "x = '\ud800'\n")

    assert empty == {"success": False, "error": "Scraper name must not be empty."}
    assert surrogate["success"] is False
    assert "UTF-8" in surrogate["error"]
    assert fake_runner.calls == []


def test_run_with_deeply_nested_output(lifecycle, tmp_path):
    save_scraper(lifecycle, "nested", QUOTES_SCRAPER)
    data_dir = tmp_path / "data" / "nested"
    data_dir.mkdir(parents=True)
    (data_dir / "out.json").write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")

    response = run_scraper(lifecycle, "nested")

    assert response["success"] is False
    assert "is not valid JSON" in response["error"]
