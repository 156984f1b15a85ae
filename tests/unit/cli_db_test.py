"""Tests for the CLI db commands."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from page_tree.cli.app import app

runner = CliRunner()


class TestMigrate:
    def test_uses_explicit_url_and_config(self) -> None:
        with patch("page_tree.db.migrations.run_migrations") as mock_run:
            result = runner.invoke(app, ["db", "migrate", "--url", "postgresql+asyncpg://x/y", "--config", "a.ini"])

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once_with("postgresql+asyncpg://x/y", "a.ini")

    def test_falls_back_to_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://env/db")

        with patch("page_tree.db.migrations.run_migrations") as mock_run:
            result = runner.invoke(app, ["db", "migrate"])

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once_with("postgresql+asyncpg://env/db", "alembic.ini")


class TestCheck:
    def _patched(self, ping_result: bool) -> tuple[MagicMock, AsyncMock]:
        instance = AsyncMock()
        instance.ping.return_value = ping_result
        factory = MagicMock(return_value=instance)
        return factory, instance

    def test_database_up(self) -> None:
        factory, instance = self._patched(True)

        with (
            patch("page_tree.db.engine.get_engine"),
            patch("page_tree.db.postgres.PostgresHierarchyDatabase", factory),
        ):
            result = runner.invoke(app, ["db", "check"])

        assert result.exit_code == 0
        assert "up" in result.output
        instance.dispose.assert_awaited_once()

    def test_database_down(self) -> None:
        factory, instance = self._patched(False)

        with (
            patch("page_tree.db.engine.get_engine"),
            patch("page_tree.db.postgres.PostgresHierarchyDatabase", factory),
        ):
            result = runner.invoke(app, ["db", "check"])

        assert result.exit_code == 1
        assert "down" in result.output
        instance.dispose.assert_awaited_once()
