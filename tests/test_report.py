from __future__ import annotations

import csv
import io
import json
import math

import pytest

from osu_difficulty.engine import calculate
from osu_difficulty.formats.osu_impl import parse_osu
from osu_difficulty.io.report_impl import (
    COLUMNS,
    dump_csv,
    dump_json,
    features_to_rows,
    format_table,
    render_report,
)

from tests.helpers import SAMPLE_OSU


@pytest.fixture()
def result():
    return calculate(parse_osu(SAMPLE_OSU))


def test_rows(result) -> None:
    rows = features_to_rows(result.objects, precision=2)
    assert [r["index"] for r in rows] == [1, 2, 3]
    assert [r["kind"] for r in rows] == ["slider", "spinner", "circle"]
    assert rows[0]["start_time"] == 500.0
    assert rows[1]["angle"] is None and rows[1]["angle_deg"] is None
    for r in rows:
        if r["angle"] is not None:
            assert r["angle_deg"] == pytest.approx(math.degrees(r["angle"]), abs=0.5)


def test_table(result) -> None:
    text = format_table(features_to_rows(result.objects))
    lines = text.splitlines()
    assert lines[0].split() == COLUMNS
    assert set(lines[1].replace(" ", "")) == {"-"}
    assert len(lines) == 2 + len(result.objects)


def test_csv(result) -> None:
    text = dump_csv(features_to_rows(result.objects))
    rows = list(csv.DictReader(io.StringIO(text)))
    assert list(rows[0]) == COLUMNS
    assert rows[1]["kind"] == "spinner"
    assert rows[1]["angle"] == ""


def test_json(result) -> None:
    payload = json.loads(dump_json(result, precision=3))
    assert payload["clock_rate"] == 1.0
    assert payload["beatmap"]["version"] == "Normal"
    assert payload["beatmap"]["hit_objects"] == 4
    assert len(payload["objects"]) == 3
    assert payload["objects"][1]["angle"] is None


def test_render_dispatch(result) -> None:
    assert render_report(result, "csv").startswith(",".join(COLUMNS))
    assert json.loads(render_report(result, "json"))["objects"]
    assert render_report(result, "table").splitlines()[0].split() == COLUMNS
    with pytest.raises(ValueError):
        render_report(result, "yaml")
