# ABOUTME: End-to-end tests for the Shelfsense CLI.
# ABOUTME: Drives every command through CliRunner with fake catalogs and a fake recommender.

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from shelfsense.catalog.types import CatalogEntry, Seed
from shelfsense.cli import cli
from shelfsense.core.recommendation import Recommendation
from tests.fixtures.fakes import FakeRecommender, make_catalog


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default database at a temp file and drop real API keys."""
    db_path = tmp_path / "default.db"
    monkeypatch.setenv("SHELFSENSE_DB", str(db_path))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_BOOKS_API_KEY", raising=False)
    return db_path


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "library.db"


@pytest.fixture
def catalog_factory(clean_code_entry: CatalogEntry, refactoring_entry: CatalogEntry):
    """Factory building a fresh fake catalog per command invocation."""

    def factory(config):
        client, _, _ = make_catalog(
            google=lambda q: [clean_code_entry] if "Clean Code" in q or "9780132350884" in q else [],
            openlibrary=lambda q: [refactoring_entry],
        )
        return client

    return factory


@pytest.fixture
def recommender() -> FakeRecommender:
    return FakeRecommender(
        recommendations=[
            Recommendation(title="Clean Code", reason="Already owned."),
            Recommendation(
                title="Refactoring",
                reason="Same craft.",
                authors=("Martin Fowler",),
                confidence=0.9,
                related_to=("Clean Code",),
            ),
        ],
        extracted=[Seed(title="Clean Code")],
    )


class TestCliRoot:
    """E2e tests for the root command group."""

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "shelfsense" in result.output

    def test_help_lists_commands(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("resolve", "lookup", "recommend", "library", "recommended"):
            assert name in result.output


class TestResolveCli:
    """E2e tests for `shelfsense resolve`."""

    def test_shows_best_match(self, catalog_factory) -> None:
        runner = CliRunner()
        with patch(
            "shelfsense.cli.commands.resolve_cmd._create_catalog", side_effect=catalog_factory
        ):
            result = runner.invoke(cli, ["resolve", "Clean Code", "-a", "Robert C. Martin"])
        assert result.exit_code == 0
        assert "Clean Code" in result.output
        assert "Robert C. Martin" in result.output
        assert "9780132350884" in result.output

    def test_reports_no_match(self) -> None:
        runner = CliRunner()
        with patch(
            "shelfsense.cli.commands.resolve_cmd._create_catalog",
            side_effect=lambda config: make_catalog()[0],
        ):
            result = runner.invoke(cli, ["resolve", "Nothing Here"])
        assert result.exit_code == 0
        assert "No match found" in result.output


class TestLookupCli:
    """E2e tests for `shelfsense lookup`."""

    def test_lookup_adds_to_library(self, catalog_factory, db_path: Path) -> None:
        runner = CliRunner()
        with patch(
            "shelfsense.cli.commands.lookup_cmd._create_catalog", side_effect=catalog_factory
        ):
            result = runner.invoke(cli, ["lookup", "978-0-13-235088-4", "--db", str(db_path)])
        assert result.exit_code == 0
        assert "Added Clean Code to the library" in result.output

        listed = runner.invoke(cli, ["library", "ls", "--db", str(db_path)])
        assert listed.exit_code == 0
        assert "Clean Code" in listed.output
        assert "1 book(s)" in listed.output

    def test_no_save_leaves_library_empty(self, catalog_factory, db_path: Path) -> None:
        runner = CliRunner()
        with patch(
            "shelfsense.cli.commands.lookup_cmd._create_catalog", side_effect=catalog_factory
        ):
            result = runner.invoke(
                cli, ["lookup", "9780132350884", "--no-save", "--db", str(db_path)]
            )
        assert result.exit_code == 0
        assert "Clean Code" in result.output
        assert "Added" not in result.output

        listed = runner.invoke(cli, ["library", "ls", "--db", str(db_path)])
        assert "No books in the library." in listed.output

    def test_unknown_isbn_exits_nonzero(self, db_path: Path) -> None:
        runner = CliRunner()
        with patch(
            "shelfsense.cli.commands.lookup_cmd._create_catalog",
            side_effect=lambda config: make_catalog()[0],
        ):
            result = runner.invoke(cli, ["lookup", "9780000000000", "--db", str(db_path)])
        assert result.exit_code == 1
        assert "No book found for ISBN 9780000000000" in result.output


class TestRecommendCli:
    """E2e tests for `shelfsense recommend`."""

    def _invoke(self, args: list[str], catalog_factory, recommender: FakeRecommender):
        runner = CliRunner()
        with (
            patch(
                "shelfsense.cli.commands.recommend_cmd._create_catalog",
                side_effect=catalog_factory,
            ),
            patch(
                "shelfsense.cli.commands.recommend_cmd._create_recommender",
                return_value=recommender,
            ),
        ):
            return runner.invoke(cli, ["recommend", *args])

    def test_prints_ranked_recommendations(self, catalog_factory, recommender) -> None:
        result = self._invoke(["Clean Code", "-l", "en"], catalog_factory, recommender)
        assert result.exit_code == 0
        assert "1/1 seed(s) matched" in result.output
        assert "Refactoring" in result.output
        assert "Already owned." not in result.output

    def test_passes_options_to_model(self, catalog_factory, recommender) -> None:
        result = self._invoke(
            ["Clean Code", "-n", "3", "-l", "en", "--hardness", "advanced"],
            catalog_factory,
            recommender,
        )
        assert result.exit_code == 0
        [request] = recommender.requests
        assert request.target_count == 3
        assert request.language == "en"
        assert request.hardness == "advanced"

    def test_save_stores_recommendations(
        self, catalog_factory, recommender, db_path: Path
    ) -> None:
        result = self._invoke(
            ["Clean Code", "--save", "--db", str(db_path)], catalog_factory, recommender
        )
        assert result.exit_code == 0
        assert "Saved 1 recommendation(s)." in result.output

        listed = CliRunner().invoke(cli, ["recommended", "ls", "--db", str(db_path)])
        assert listed.exit_code == 0
        assert "Refactoring" in listed.output
        assert "1 recommendation(s)" in listed.output

    def test_ocr_file_supplies_seeds(
        self, catalog_factory, recommender, tmp_path: Path
    ) -> None:
        ocr_file = tmp_path / "spines.txt"
        ocr_file.write_text("CleanCode\n", encoding="utf-8")
        result = self._invoke(["--ocr-file", str(ocr_file)], catalog_factory, recommender)
        assert result.exit_code == 0
        assert recommender.extract_calls == ["CleanCode\n"]
        assert "Refactoring" in result.output

    def test_no_seeds_is_usage_error(self, catalog_factory, recommender) -> None:
        result = self._invoke([], catalog_factory, recommender)
        assert result.exit_code == 2
        assert recommender.requests == []

    def test_zero_count_is_usage_error(self, catalog_factory, recommender) -> None:
        result = self._invoke(["Clean Code", "-n", "0"], catalog_factory, recommender)
        assert result.exit_code == 2
        assert "target count must be at least 1" in result.output
        assert recommender.requests == []

    def test_bad_literal_seeds_fail_before_api_key_check(self, catalog_factory) -> None:
        runner = CliRunner()
        with (
            patch(
                "shelfsense.cli.commands.recommend_cmd._create_catalog",
                side_effect=catalog_factory,
            ) as create_catalog,
            patch(
                "shelfsense.cli.commands.recommend_cmd._create_recommender",
                side_effect=AssertionError("recommender built"),
            ) as create_recommender,
        ):
            result = runner.invoke(cli, ["recommend", "Clean Code", "-n", "0"])
        assert result.exit_code == 2
        assert "target count must be at least 1" in result.output
        assert "OPENAI_API_KEY" not in result.output
        create_recommender.assert_not_called()
        create_catalog.assert_not_called()

    def test_missing_api_key_fails(self, catalog_factory) -> None:
        runner = CliRunner()
        with patch(
            "shelfsense.cli.commands.recommend_cmd._create_catalog", side_effect=catalog_factory
        ):
            result = runner.invoke(cli, ["recommend", "Clean Code"])
        assert result.exit_code == 1
        assert "OPENAI_API_KEY is not set." in result.output

    def test_no_recommendations_message(self, catalog_factory) -> None:
        result = self._invoke(["Clean Code"], catalog_factory, FakeRecommender())
        assert result.exit_code == 0
        assert "No recommendations." in result.output


class TestLibraryCli:
    """E2e tests for `shelfsense library`."""

    @pytest.fixture
    def stocked_db(self, catalog_factory, db_path: Path) -> Path:
        with patch(
            "shelfsense.cli.commands.lookup_cmd._create_catalog", side_effect=catalog_factory
        ):
            result = CliRunner().invoke(cli, ["lookup", "9780132350884", "--db", str(db_path)])
        assert result.exit_code == 0
        return db_path

    def test_toggle_removes_then_restores(self, stocked_db: Path) -> None:
        runner = CliRunner()
        off = runner.invoke(cli, ["library", "toggle", "1", "--db", str(stocked_db)])
        assert off.exit_code == 0
        assert "Book 1 library: off" in off.output

        on = runner.invoke(cli, ["library", "toggle", "1", "--db", str(stocked_db)])
        assert "Book 1 library: on" in on.output

    def test_rm_reports_count(self, stocked_db: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["library", "rm", "1", "42", "--db", str(stocked_db)])
        assert result.exit_code == 0
        assert "Removed 1 book(s) from the library." in result.output

    def test_toggle_unknown_id_exits_nonzero(self, db_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["library", "toggle", "99", "--db", str(db_path)])
        assert result.exit_code == 1
        assert "Book with id 99 not found" in result.output

    def test_ls_uses_database_from_environment(self, isolated_env: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["library", "ls"])
        assert result.exit_code == 0
        assert "No books in the library." in result.output
        assert isolated_env.exists()


class TestRecommendedCli:
    """E2e tests for `shelfsense recommended`."""

    def test_empty_list(self, db_path: Path) -> None:
        result = CliRunner().invoke(cli, ["recommended", "ls", "--db", str(db_path)])
        assert result.exit_code == 0
        assert "No saved recommendations." in result.output

    def test_toggle_library_book_onto_list(self, catalog_factory, db_path: Path) -> None:
        runner = CliRunner()
        with patch(
            "shelfsense.cli.commands.lookup_cmd._create_catalog", side_effect=catalog_factory
        ):
            runner.invoke(cli, ["lookup", "9780132350884", "--db", str(db_path)])

        on = runner.invoke(
            cli, ["recommended", "toggle", "1", "--reason", "Reread", "--db", str(db_path)]
        )
        assert on.exit_code == 0
        assert "Book 1 recommended: on" in on.output

        listed = runner.invoke(cli, ["recommended", "ls", "--db", str(db_path)])
        assert "Reread" in listed.output

        off = runner.invoke(cli, ["recommended", "toggle", "1", "--db", str(db_path)])
        assert "Book 1 recommended: off" in off.output

    def test_toggle_unknown_id_exits_nonzero(self, db_path: Path) -> None:
        result = CliRunner().invoke(cli, ["recommended", "toggle", "7", "--db", str(db_path)])
        assert result.exit_code == 1
        assert "Book with id 7 not found" in result.output
