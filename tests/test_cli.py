#!/usr/bin/env python3
"""
Tests for the tripmiles command-line interface.
"""

import argparse
import logging
import os

import pytest

from tripmiles import cli
from tripmiles.cli import create_argument_parser, main
from tripmiles.config import TripMilesConfig
from tripmiles.geometry import GeodeticPosition
from tripmiles.trip import Trip
from tripmiles.utm import UTMPosition

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


def test_prints_one_line_per_traveler(capsys):
    main([os.path.join(FIXTURES, "trips.tsv")])

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Traveler 1 traveled 138.19 miles",
        "Traveler 2 traveled 69.09 miles",
        "Traveler 3 traveled 0.00 miles",
    ]


def test_precision(capsys):
    main([os.path.join(FIXTURES, "trips.tsv"), "--precision", "0", "--workers", "2"])

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Traveler 1 traveled 138 miles"


def test_no_filename_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_missing_file_exits(tmp_path, caplog):
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path / "missing.tsv")])
    assert exc_info.value.code == 1
    assert "Trip file not found" in caplog.text


def test_decode_failure_aborts_run(caplog):
    with pytest.raises(SystemExit) as exc_info:
        main([os.path.join(FIXTURES, "bad_zone.tsv")])
    assert exc_info.value.code == 1
    assert "line 2" in caplog.text


def test_missing_zone_letter_aborts_run(caplog):
    with pytest.raises(SystemExit) as exc_info:
        main([os.path.join(FIXTURES, "missing_zone_letter.tsv")])
    assert exc_info.value.code == 1
    assert "line 2" in caplog.text
    assert "ZoneLetter" in caplog.text


def test_invalid_utf8_aborts_run(tmp_path, caplog):
    path = tmp_path / "trips.tsv"
    path.write_bytes(b"\xff\xfe\n")
    with pytest.raises(SystemExit) as exc_info:
        main([str(path)])
    assert exc_info.value.code == 1
    assert "line 1" in caplog.text


def test_position_error_during_totals_aborts_run(monkeypatch, capsys, caplog):
    def trips_with_bad_position(filename):
        yield Trip("1", [GeodeticPosition(0.0, 0.0), UTMPosition(500000, 0, 31, "")])

    monkeypatch.setattr(cli, "load_trips", trips_with_bad_position)
    with pytest.raises(SystemExit) as exc_info:
        main(["trips.tsv"])
    assert exc_info.value.code == 1
    assert capsys.readouterr().out == ""
    assert "Cannot compute distances" in caplog.text


def test_invalid_precision_is_rejected():
    with pytest.raises(SystemExit) as exc_info:
        main([os.path.join(FIXTURES, "trips.tsv"), "--precision", "-1"])
    assert exc_info.value.code == 2


def test_metrics(capsys, caplog):
    with caplog.at_level(logging.INFO):
        main([os.path.join(FIXTURES, "trips.tsv"), "--metrics"])

    assert len(capsys.readouterr().out.splitlines()) == 3
    assert "total_trips=3" in caplog.text
    assert "total_positions=6" in caplog.text
    assert "positions[geodetic]=4" in caplog.text
    assert "positions[nvector]=1" in caplog.text
    assert "positions[utm]=1" in caplog.text


def test_config_from_args():
    args = create_argument_parser().parse_args(["trips.tsv", "--debug", "--workers", "3"])
    config = TripMilesConfig.from_args(args)
    assert config == TripMilesConfig(precision=2, workers=3, log_level="DEBUG", metrics=False)


def test_config_rejects_zero_workers():
    args = argparse.Namespace(precision=2, workers=0, debug=False, log_level="INFO", metrics=False)
    with pytest.raises(ValueError):
        TripMilesConfig.from_args(args)
