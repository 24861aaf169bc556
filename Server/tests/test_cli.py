"""
Tests for the FileDepot command line interface
"""

import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from cli import main, EXIT_SUCCESS, EXIT_FAILURE, EXIT_CONFIG_ERROR


@pytest.fixture
def config_path(tmp_path):
    """Configuration file pointing at temporary storage"""
    config_file = tmp_path / "filedepot.json"
    config_file.write_text(json.dumps({
        "base_path": str(tmp_path / "webroot"),
        "database_path": str(tmp_path / "database" / "cli.db")
    }))
    return str(config_file)


def test_save_show_search_delete(config_path, tmp_path, capsys):
    """Files can be stored, inspected and deleted from the command line"""
    source = tmp_path / "Meeting Notes.txt"
    source.write_text("agenda")

    assert main(["--config", config_path, "save", str(source), "--path", "minutes"]) == EXIT_SUCCESS
    saved = capsys.readouterr().out
    assert saved.startswith("1\tminutes/Meeting-Notes-1.txt\ttext/plain\t6\tverified\t")

    assert main(["--config", config_path, "show", "1"]) == EXIT_SUCCESS
    assert "Meeting-Notes-1.txt" in capsys.readouterr().out

    assert main(["--config", config_path, "search", "--name", "meeting"]) == EXIT_SUCCESS
    assert "(1 files)" in capsys.readouterr().out

    assert main(["--config", config_path, "check"]) == EXIT_SUCCESS

    assert main(["--config", config_path, "delete", "1"]) == EXIT_SUCCESS
    assert main(["--config", config_path, "show", "1"]) == EXIT_FAILURE
    assert main(["--config", config_path, "delete", "1"]) == EXIT_FAILURE


def test_check_reports_missing_file(config_path, tmp_path, capsys):
    """The check command fails when a record lost its file"""
    source = tmp_path / "data.csv"
    source.write_text("a,b")
    main(["--config", config_path, "save", str(source)])

    (tmp_path / "webroot" / "files" / "data-1.csv").unlink()
    capsys.readouterr()

    assert main(["--config", config_path, "check"]) == EXIT_FAILURE
    assert "missing file\t1" in capsys.readouterr().out


def test_save_missing_source(config_path, tmp_path):
    """Saving a file that does not exist fails without storing anything"""
    assert main(["--config", config_path, "save", str(tmp_path / "nope.txt")]) == EXIT_FAILURE
    assert main(["--config", config_path, "search"]) == EXIT_SUCCESS
    assert main(["--config", config_path, "show", "1"]) == EXIT_FAILURE


def test_invalid_model_class(tmp_path):
    """An unusable model class is a configuration error"""
    config_file = tmp_path / "filedepot.json"
    config_file.write_text(json.dumps({
        "model_class": "collections:OrderedDict",
        "database_path": str(tmp_path / "cli.db")
    }))

    assert main(["--config", str(config_file), "check"]) == EXIT_CONFIG_ERROR
