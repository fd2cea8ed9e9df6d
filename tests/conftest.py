import pytest


@pytest.fixture
def work_dir(tmp_path, monkeypatch):
    """Run inside an empty temp dir so the default EXTRACTED root lands there."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
