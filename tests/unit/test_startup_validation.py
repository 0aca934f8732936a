"""Tests for application startup and shutdown."""

from unittest.mock import AsyncMock, patch

import pytest

from src.main import app, lifespan


@pytest.mark.unit
async def test_startup_initializes_database_and_closes_on_shutdown() -> None:
    """Test the lifespan creates the schema on startup and closes the connection on shutdown."""
    with (
        patch("src.main.configure_logfire") as mock_configure,
        patch("src.main.init_db", new_callable=AsyncMock) as mock_init,
        patch("src.main.close_connection", new_callable=AsyncMock) as mock_close,
    ):
        async with lifespan(app):
            mock_configure.assert_called_once()
            mock_init.assert_awaited_once()
            mock_close.assert_not_awaited()

        mock_close.assert_awaited_once()


@pytest.mark.unit
async def test_startup_exits_when_database_init_fails(capsys) -> None:
    """Test the application refuses to start without a usable database."""
    with (
        patch("src.main.configure_logfire"),
        patch("src.main.init_db", new_callable=AsyncMock, side_effect=RuntimeError("unable to open database file")),
        pytest.raises(SystemExit) as exc_info,
    ):
        async with lifespan(app):
            pass

    assert exc_info.value.code == 1
    assert "Database initialization failed" in capsys.readouterr().err
