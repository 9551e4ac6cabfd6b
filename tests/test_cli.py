"""Lightweight CLI tests with mocking (no MongoDB or uvicorn needed)."""

import json
from argparse import Namespace
from unittest.mock import patch

from pymongo.errors import PyMongoError

from main import build_parser, cmd_games, cmd_serve


def test_parser_serve_defaults():
    args = build_parser().parse_args(["serve"])
    assert args.command == "serve"
    assert args.host == "127.0.0.1"
    assert args.port == 8000
    assert args.reload is False
    assert args.log_level == "info"


@patch("main.list_games")
@patch("main.get_database")
@patch("main.get_client")
def test_games_json_output(mock_client, mock_database, mock_list, capsys):
    mock_list.return_value = [{"_id": "a", "name": "Chess", "rating": 9}]

    rc = cmd_games(Namespace(json=True, uri=None, database=None))

    assert rc == 0
    assert json.loads(capsys.readouterr().out) == [{"_id": "a", "name": "Chess", "rating": 9}]
    mock_client.assert_called_once_with(None)
    mock_database.assert_called_once_with(mock_client.return_value, None)


@patch("main.list_games", return_value=[{"_id": "a", "name": "Chess", "rating": 9}, {"_id": "b", "title": "Ludo"}])
@patch("main.get_database")
@patch("main.get_client")
def test_games_table_output(mock_client, mock_database, mock_list, capsys):
    rc = cmd_games(Namespace(json=False, uri="mongodb://h/db", database="db"))
    out = capsys.readouterr().out
    assert rc == 0
    assert "Chess" in out and "Ludo" in out
    mock_client.assert_called_once_with("mongodb://h/db")


@patch("main.list_games", side_effect=PyMongoError("down"))
@patch("main.get_database")
@patch("main.get_client")
def test_games_store_failure(mock_client, mock_database, mock_list, capsys):
    rc = cmd_games(Namespace(json=False, uri=None, database=None))
    assert rc == 1
    assert "Failed to fetch games" in capsys.readouterr().err


@patch("uvicorn.run")
def test_serve_runs_uvicorn(mock_run):
    args = build_parser().parse_args(["serve", "--port", "9001", "--host", "0.0.0.0"])
    rc = cmd_serve(args)
    assert rc == 0
    mock_run.assert_called_once_with("api.app:app", host="0.0.0.0", port=9001, reload=False, log_level="info")
