"""Tests for the command-line interface."""
import argparse
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from atomengine.cli import load_content, main, parse_building


def test_levels_command(capsys):
    main(["levels", "250"])
    out = capsys.readouterr().out
    assert "Level: 2" in out
    assert "XP into level: 8" in out
    assert "XP for next level: 201" in out
    assert "Progress: 4.0%" in out


def test_info_command(capsys):
    main(["info", "examples.atom_example", "--building", "electron=10"])
    out = capsys.readouterr().out
    assert "Atom Clicker" in out
    assert "Atoms/s: 1\n" in out
    assert "Click power: 2\n" in out


def test_info_with_levels_and_upgrades(capsys):
    main([
        "info", "examples.atom_example",
        "--building", "electron=10:1",
        "--upgrade", "electron_boost",
    ])
    out = capsys.readouterr().out
    # 10 * 0.2 * (10/2)^2/5
    assert "Atoms/s: 10\n" in out


def test_achievements_command(capsys):
    main(["achievements", "examples.atom_example"])
    out = capsys.readouterr().out
    assert "first_atom" in out
    assert out.rstrip().endswith("110 achievements")


def test_no_command_prints_help():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 0


def test_parse_building():
    assert parse_building("electron=10") == ("electron", 10, 0)
    assert parse_building("electron=10:2") == ("electron", 10, 2)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_building("electron")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_building("=10")


def test_load_content_requires_define_content():
    with pytest.raises(SystemExit):
        load_content("atomengine.formatting")


def test_info_rejects_malformed_building(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["info", "examples.atom_example", "--building", "electron="])
    assert exc.value.code == 2
    assert "Invalid building 'electron='" in capsys.readouterr().err
