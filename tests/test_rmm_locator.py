from pathlib import Path

from huntress_probe.services import rmm_locator
from huntress_probe.services.rmm_locator import CLIENT_EXECUTABLES, candidate_paths, locate


def test_returns_none_when_nothing_exists(tmp_path):
    candidates = [tmp_path / "a" / "Syncro.exe", tmp_path / "b" / "Syncro.exe"]
    assert locate(candidates) is None


def test_returns_the_single_existing_path(tmp_path):
    present = tmp_path / "b" / "Syncro.Service.Runner.exe"
    present.parent.mkdir()
    present.write_text("")
    candidates = [tmp_path / "a" / "Syncro.exe", present]
    assert locate(candidates) == present


def test_first_match_wins_and_is_deterministic(tmp_path):
    first = tmp_path / "first.exe"
    second = tmp_path / "second.exe"
    first.write_text("")
    second.write_text("")
    candidates = [tmp_path / "missing.exe", first, second]
    assert locate(candidates) == first
    assert locate(candidates) == locate(candidates)


def test_directories_are_not_matches(tmp_path):
    (tmp_path / "Syncro.exe").mkdir()
    assert locate([tmp_path / "Syncro.exe"]) is None


def test_candidates_cross_directories_and_executables(monkeypatch, tmp_path):
    monkeypatch.setenv("ProgramFiles", str(tmp_path / "pf"))
    monkeypatch.setenv("ProgramFiles(x86)", str(tmp_path / "pf86"))
    monkeypatch.setenv("ProgramData", str(tmp_path / "pd"))
    candidates = candidate_paths(extra_paths=["/opt/custom/syncro"])
    assert candidates[0] == Path("/opt/custom/syncro")
    assert len(candidates) == 1 + 3 * len(CLIENT_EXECUTABLES)
    assert candidates[1] == tmp_path / "pf" / "RepairTech" / "Syncro" / "Syncro.exe"


def test_default_search_finds_client_in_program_files(monkeypatch, tmp_path):
    monkeypatch.setattr(rmm_locator, "install_directories", lambda: [tmp_path / "none", tmp_path / "syncro"])
    client = tmp_path / "syncro" / "Syncro.Service.Runner.exe"
    client.parent.mkdir()
    client.write_text("")
    assert locate() == client


def test_extra_paths_are_searched_first(monkeypatch, tmp_path):
    monkeypatch.setattr(rmm_locator, "install_directories", lambda: [tmp_path])
    (tmp_path / "Syncro.exe").write_text("")
    custom = tmp_path / "custom-syncro"
    custom.write_text("")
    assert locate(extra_paths=[str(custom)]) == custom
