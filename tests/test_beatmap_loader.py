from __future__ import annotations

import zipfile

import pytest

from osu_difficulty.io.beatmap_loader_impl import (
    is_pack,
    list_versions,
    load_beatmap,
    load_beatmap_pack,
)

from tests.helpers import sample_osu_text


@pytest.fixture()
def osz_path(tmp_path):
    path = tmp_path / "set.osz"
    with zipfile.ZipFile(path, "w") as z:
        z.writestr("Someone - Sample Song (mapper) [Hard].osu", sample_osu_text("Hard"))
        z.writestr("Someone - Sample Song (mapper) [Easy].osu", sample_osu_text("Easy"))
        z.writestr("audio.mp3", b"\x00")
    return path


@pytest.fixture()
def osu_path(tmp_path):
    path = tmp_path / "map.osu"
    path.write_text(sample_osu_text("Insane"), encoding="utf-8")
    return path


def test_is_pack() -> None:
    assert is_pack("a.osz")
    assert is_pack("A.ZIP")
    assert not is_pack("a.osu")


def test_load_single_file(osu_path) -> None:
    assert load_beatmap(str(osu_path)).version == "Insane"


def test_single_file_ignores_version(osu_path, caplog: pytest.LogCaptureFixture) -> None:
    assert load_beatmap(str(osu_path), "Easy").version == "Insane"
    assert "ignored" in caplog.text


def test_pack_members_sorted(osz_path) -> None:
    names = [name for name, _ in load_beatmap_pack(str(osz_path))]
    assert names == sorted(names)
    assert len(names) == 2
    assert list_versions(str(osz_path)) == ["Easy", "Hard"]


def test_pack_default_and_named_version(osz_path) -> None:
    assert load_beatmap(str(osz_path)).version == "Easy"
    assert load_beatmap(str(osz_path), " hard ").version == "Hard"


def test_pack_unknown_version(osz_path) -> None:
    with pytest.raises(ValueError, match="available"):
        load_beatmap(str(osz_path), "Expert")


def test_empty_pack(tmp_path) -> None:
    path = tmp_path / "empty.osz"
    with zipfile.ZipFile(path, "w") as z:
        z.writestr("readme.txt", "nothing here")
    with pytest.raises(ValueError, match="no .osu files"):
        load_beatmap(str(path))


def test_missing_path(tmp_path) -> None:
    with pytest.raises(ValueError):
        load_beatmap(str(tmp_path / "nope.osu"))
