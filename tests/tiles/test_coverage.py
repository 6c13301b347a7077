"""Tests for tiles_covering()."""

import pytest

from tiles.coverage import tiles_covering, tiles_under_pixels


class TestTilesCovering:
    """Tests for the z15 tile walk along a polyline."""

    def test_single_tile(self, short_line):
        assert tiles_covering(short_line['coordinates']) == [(16384, 16384, 15)]

    def test_crossing_boundary_in_walk_order(self, crossing_line):
        tiles = tiles_covering(crossing_line['coordinates'])
        assert tiles == [(16383, 16384, 15), (16384, 16384, 15)]

    def test_reverse_direction(self, crossing_line):
        coords = list(reversed(crossing_line['coordinates']))
        tiles = tiles_covering(coords)
        assert tiles == [(16384, 16384, 15), (16383, 16384, 15)]

    def test_end_vertex_on_tile_edge(self):
        # Longitude 0 is exactly the left edge of column 16384
        tiles = tiles_covering([(-0.001, -0.001), (0.0, -0.001)])
        assert tiles == [(16383, 16384, 15), (16384, 16384, 15)]

    def test_repeated_point(self):
        assert tiles_covering([(0.002, -0.002), (0.002, -0.002)]) == []

    def test_no_duplicates_on_back_and_forth(self):
        coords = [(-0.001, -0.001), (0.001, -0.001), (-0.001, -0.001)]
        tiles = tiles_covering(coords)
        assert len(tiles) == len(set(tiles)) == 2

    def test_diagonal_is_connected(self):
        # Roughly 4 tiles east and 3 tiles north
        tiles = tiles_covering([(0.001, 0.001), (0.05, 0.035)])
        xs = sorted({t[0] for t in tiles})
        ys = sorted({t[1] for t in tiles})
        assert xs == list(range(xs[0], xs[-1] + 1))
        assert ys == list(range(ys[0], ys[-1] + 1))
        # Consecutive tiles share an edge
        for (ax, ay, _), (bx, by, _) in zip(tiles, tiles[1:]):
            assert abs(ax - bx) + abs(ay - by) == 1

    @pytest.mark.parametrize('zoom', [10, 15])
    def test_zoom_is_carried(self, short_line, zoom):
        assert all(t[2] == zoom for t in tiles_covering(short_line['coordinates'], zoom))

    def test_longitude_180_wraps_to_column_zero(self):
        tiles = tiles_covering([(179.999, 10.0), (180.0, 10.0)])
        assert [t[0] for t in tiles] == [2**15 - 1, 0]
        assert all(0 <= t[0] < 2**15 for t in tiles)


class TestTilesUnderPixels:
    """Tests for tiles_under_pixels()."""

    def test_floors_and_deduplicates(self):
        pixels = [(256.5, 511.9), (300.0, 300.0), (512.0, 256.0)]
        assert tiles_under_pixels(pixels) == [(1, 1, 15), (2, 1, 15)]

    def test_wraps_columns(self):
        world = 256 * 2**15
        assert tiles_under_pixels([(world + 10.0, 5.0)]) == [(0, 0, 15)]

    def test_empty(self):
        assert tiles_under_pixels([]) == []
