"""
Testing the command line build_polygons_from_file.py
Essentially is an integration test
"""

import pathlib

import pytest

from pygraphical.exec.build_polygons_from_file import build_parser, main


def test_build_polygons_from_file(testing_fileinfo: tuple[pathlib.Path, pathlib.Path],
                                  tmp_path: pathlib.Path,
                                  capsys: pytest.CaptureFixture) -> None:
    """
    Reads each test shape, prints bucket counts and writes the SVG.
    """
    # Retrieve parameters
    base_data_folderpath: pathlib.Path
    csv_filepath: pathlib.Path
    base_data_folderpath, csv_filepath = testing_fileinfo
    output_filepath: pathlib.Path = tmp_path / "output.svg"
    buckets: list[str] = (base_data_folderpath / "buckets.csv").read_text(
        encoding="utf-8").strip().split(",")

    args = build_parser().parse_args(["-i", str(csv_filepath), "-o", str(output_filepath)])
    assert main(args) == 0

    captured: str = capsys.readouterr().out
    assert f"polygons: {buckets[0]}" in captured
    assert f"polylines: {buckets[1]}" in captured
    assert f"isolated: {buckets[2]}" in captured
    assert output_filepath.exists()


def test_segments_flag(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture) -> None:
    csv_filepath: pathlib.Path = tmp_path / "segments.csv"
    csv_filepath.write_text("1,0,0,0\n0,0,0,1\n5,0,5,1\n", encoding="utf-8")

    args = build_parser().parse_args(["-i", str(csv_filepath), "--segments", "-t", "1e-3"])
    assert main(args) == 0

    captured: str = capsys.readouterr().out
    assert "polylines: 0" in captured
    assert "isolated: 3" in captured
