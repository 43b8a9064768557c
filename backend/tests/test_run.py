"""
Tests for the run script
"""
import importlib
import os


def test_importing_run_keeps_working_directory(tmp_path, monkeypatch):
    """Only main() changes directory and loads .env"""
    monkeypatch.chdir(tmp_path)

    run = importlib.import_module("run")
    importlib.reload(run)

    assert os.getcwd() == str(tmp_path)
    assert run.BACKEND_DIR.name == "backend"
