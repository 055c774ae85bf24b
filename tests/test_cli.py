"""
Tests for the command-line entry point.
"""

import pytest
from PIL import Image

from BE_Libs.cli import parse_args, run
from BE_Libs.RasterLib.raster import Raster


def write_ring_image(path):
    img = Image.new("RGBA", (6, 6), (255, 255, 255, 255))
    for x in range(2, 4):
        for y in range(2, 4):
            img.putpixel((x, y), (0, 0, 0, 255))
    img.save(path)


class TestParseArgs:

    def test_defaults(self, tmp_path):
        args = parse_args([str(tmp_path / "a.png"), str(tmp_path / "b.png")])

        assert args.algorithm == "FLOOD_FILL"
        assert args.tolerance == 15
        assert args.smoothing == 0
        assert not args.verbose

    def test_algorithm_is_case_insensitive(self, tmp_path):
        args = parse_args(["a.png", "b.png", "--algorithm", "border_model"])

        assert args.algorithm == "BORDER_MODEL"

    def test_rejects_unknown_algorithm(self):
        with pytest.raises(SystemExit):
            parse_args(["a.png", "b.png", "--algorithm", "magic"])


class TestRun:

    def test_writes_transparent_png(self, tmp_path):
        source = tmp_path / "in.png"
        target = tmp_path / "out.png"
        write_ring_image(source)

        assert run([str(source), str(target), "--tolerance", "10"]) == 0

        result = Raster.from_file(target)
        assert result.get_pixel(0, 0)[3] == 0
        assert result.get_pixel(2, 2) == (0, 0, 0, 255)

    def test_missing_input(self, tmp_path):
        with pytest.raises(SystemExit):
            run([str(tmp_path / "missing.png"), str(tmp_path / "out.png")])

    def test_undecodable_input(self, tmp_path):
        source = tmp_path / "broken.png"
        source.write_bytes(b"not a png")

        with pytest.raises(SystemExit):
            run([str(source), str(tmp_path / "out.png")])
