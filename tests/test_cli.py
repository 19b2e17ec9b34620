"""Tests for the command-line entry point."""
import json
import sys
from unittest.mock import patch

import pytest

import book_search
from booksearch.config import Config


@pytest.fixture
def config(tmp_path):
    config = Config()
    config.HISTORY_BACKEND = "file"
    config.HISTORY_DIR = str(tmp_path)
    return config


def _run(argv, config):
    with patch.object(sys, "argv", ["book_search.py"] + argv), \
            patch.object(book_search, "Config", return_value=config):
        with pytest.raises(SystemExit) as info:
            book_search.main()
    return info.value.code


def test_blank_search_exits_nonzero(config, capsys):
    """Test that a blank query is reported without any HTTP request."""
    with patch("booksearch.client.requests.Session.get") as get:
        code = _run(["search", "   ", "--mode", "title"], config)

    assert code == 1
    assert "Please enter a search query" in capsys.readouterr().out
    get.assert_not_called()


def test_search_records_history(config, capsys):
    response = {"items": [{"volumeInfo": {"title": "Dune", "authors": ["Frank Herbert"]}}]}
    with patch("booksearch.client.FetchClient.fetch", return_value=response):
        code = _run(["search", "dune", "--mode", "title", "--format", "json"], config)

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["books"][0]["title"] == "Dune"

    assert _run(["history"], config) == 0
    assert "dune" in capsys.readouterr().out


def test_no_command_prints_help(config):
    assert _run([], config) == 1


def test_commands_close_storage(config, capsys):
    """Test that the postgres history storage is closed after each command."""
    config.HISTORY_BACKEND = "postgres"
    with patch("booksearch.database.PostgresStorage") as storage_class:
        storage = storage_class.return_value
        storage.read.return_value = None

        assert _run(["history"], config) == 0
        storage.close.assert_called_once()

        with patch("booksearch.client.FetchClient.fetch", return_value={"totalItems": 0}):
            assert _run(["search", "dune", "--mode", "title"], config) == 0

    assert storage.close.call_count == 2
    storage.init_schema.assert_called()
    storage.write.assert_called_once()
