"""
Unit tests for grid topology and the tile bitfield model.

Tests cover:
- Bit rotation of tile values
- Index/coordinate mapping and neighbours on both lattices
- Edge enumeration
- Display point lookup
"""

import pytest

from loops.engine import GridTopology, InvariantViolation, Shape, rotate_value
from loops.engine.tile import clamp_value, edge_value, rotate_tile
from loops.engine.topology import DOWN, LEFT, RIGHT, UP


# =============================================================================
# Tile Model Tests
# =============================================================================

class TestRotateValue:
    """Tests for circular bit rotation."""

    def test_single_click_on_square(self):
        """A corner (down+left) turns into left+up."""
        assert rotate_value(6, 1, 4) == 12
        assert rotate_value(6, 1, 4) == 0xF & ((6 << 1) | (6 >> 3))

    def test_wraps_high_bit_around(self):
        assert rotate_value(8, 1, 4) == 1
        assert rotate_value(32, 1, 6) == 1

    @pytest.mark.parametrize("edges_per_tile", [4, 6])
    def test_full_turn_is_identity(self, edges_per_tile):
        for value in range(1 << edges_per_tile):
            assert rotate_value(value, edges_per_tile, edges_per_tile) == value

    @pytest.mark.parametrize("edges_per_tile", [4, 6])
    def test_times_is_taken_modulo(self, edges_per_tile):
        for value in range(1 << edges_per_tile):
            for times in range(-8, 15):
                assert (rotate_value(value, times, edges_per_tile) ==
                        rotate_value(value, times % edges_per_tile, edges_per_tile))

    def test_negative_undoes_positive(self):
        for value in range(64):
            assert rotate_value(rotate_value(value, 2, 6), -2, 6) == value

    def test_result_stays_in_range(self):
        for value in range(64):
            for times in range(6):
                assert 0 <= rotate_value(value, times, 6) < 64


class TestTileHelpers:

    def test_edge_value(self):
        tile = [6, 1]
        assert edge_value(tile, 0, DOWN) == 1
        assert edge_value(tile, 0, RIGHT) == 0
        assert edge_value(tile, 1, RIGHT) == 1

    def test_clamp_drops_extra_bits(self):
        assert clamp_value(0xFF, 4) == 15
        assert clamp_value(0xFF, 6) == 63

    def test_rotate_tile_turns_every_color(self):
        assert rotate_tile([1, 2], 1, 4) == [2, 4]


# =============================================================================
# Square Grid Tests
# =============================================================================

class TestSquareTopology:

    def test_index_round_trip(self):
        topology = GridTopology(Shape.SQUARE, 5, 4)
        for index in topology.all_tile_indexes():
            x, y = topology.index_to_coord(index)
            assert index == y * 5 + x
            assert topology.coord_to_index(x, y) == index

    def test_neighbors(self):
        topology = GridTopology(Shape.SQUARE, 4, 4)
        index = topology.coord_to_index(1, 1)
        assert topology.neighbor_index(index, RIGHT) == topology.coord_to_index(2, 1)
        assert topology.neighbor_index(index, DOWN) == topology.coord_to_index(1, 2)
        assert topology.neighbor_index(index, LEFT) == topology.coord_to_index(0, 1)
        assert topology.neighbor_index(index, UP) == topology.coord_to_index(1, 0)

    def test_neighbors_wrap(self):
        topology = GridTopology(Shape.SQUARE, 4, 3, toroidal=True)
        assert topology.neighbor_index(topology.coord_to_index(3, 0), RIGHT) == topology.coord_to_index(0, 0)
        assert topology.neighbor_index(topology.coord_to_index(0, 0), UP) == topology.coord_to_index(0, 2)

    def test_reverse_direction(self):
        topology = GridTopology(Shape.SQUARE, 4, 4)
        assert topology.reverse_direction(RIGHT) == LEFT
        assert topology.reverse_direction(DOWN) == UP
        for direction in topology.directions:
            assert topology.reverse_direction(topology.reverse_direction(direction)) == direction

    def test_edge_count(self):
        """A w x h square grid has 2*w*h edges."""
        topology = GridTopology(Shape.SQUARE, 7, 5)
        edges = topology.all_edges()
        assert len(edges) == 2 * 7 * 5
        assert len(set(edges)) == len(edges)

    def test_in_bounds_excludes_frame(self):
        topology = GridTopology(Shape.SQUARE, 5, 5)
        inside = [i for i in topology.all_tile_indexes() if topology.is_in_bounds(i)]
        assert inside == [6, 7, 8, 11, 12, 13, 16, 17, 18]

    def test_display_point_floors(self):
        topology = GridTopology(Shape.SQUARE, 5, 5)
        assert topology.display_point_to_tile_index(2.3, 1.7) == topology.coord_to_index(2, 1)
        assert topology.display_point_to_tile_index(0.0, 0.0) == 0

    def test_wrap_display_point(self):
        topology = GridTopology(Shape.SQUARE, 5, 5)
        assert topology.wrap_display_point(1.5, 2.5) == (1.5, 2.5)
        assert topology.wrap_display_point(-0.5, 2.0) == (4.5, 2.0)

    def test_bad_direction_fails_fast(self):
        topology = GridTopology(Shape.SQUARE, 4, 4)
        with pytest.raises(InvariantViolation):
            topology.neighbor_index(5, 16)

    def test_unknown_shape_fails_fast(self):
        with pytest.raises(InvariantViolation):
            GridTopology("triangle", 4, 4)


# =============================================================================
# Hexagon Grid Tests
# =============================================================================

class TestHexagonTopology:

    def test_offset_columns(self):
        """Odd columns sit half a row lower, so their diagonal steps move down a row."""
        topology = GridTopology(Shape.HEXAGON, 5, 5)
        even = topology.coord_to_index(2, 2)
        odd = topology.coord_to_index(1, 2)
        assert topology.neighbor_index(even, 1) == topology.coord_to_index(3, 2)  # down right
        assert topology.neighbor_index(even, 32) == topology.coord_to_index(3, 1)  # up right
        assert topology.neighbor_index(odd, 1) == topology.coord_to_index(2, 3)
        assert topology.neighbor_index(odd, 32) == topology.coord_to_index(2, 2)

    def test_neighbor_and_reverse_agree(self):
        topology = GridTopology(Shape.HEXAGON, 6, 6, toroidal=True)
        for index in topology.all_tile_indexes():
            for direction in topology.directions:
                other = topology.neighbor_index(index, direction)
                assert topology.neighbor_index(other, topology.reverse_direction(direction)) == index

    def test_reverse_direction(self):
        topology = GridTopology(Shape.HEXAGON, 4, 4)
        assert topology.reverse_direction(1) == 8
        assert topology.reverse_direction(2) == 16
        assert topology.reverse_direction(4) == 32
        for direction in topology.directions:
            assert topology.reverse_direction(topology.reverse_direction(direction)) == direction

    def test_edges_have_no_duplicates(self):
        topology = GridTopology(Shape.HEXAGON, 6, 5)
        edges = topology.all_edges()
        assert len(edges) == 3 * 6 * 5
        assert len({(e.tile_index, e.direction) for e in edges}) == len(edges)

    def test_toroidal_6x6(self):
        """Every tile is in bounds and every step is defined."""
        topology = GridTopology(Shape.HEXAGON, 6, 6, toroidal=True)
        for index in topology.all_tile_indexes():
            assert topology.is_in_bounds(index)
            for direction in topology.directions:
                assert 0 <= topology.neighbor_index(index, direction) < 36

    def test_odd_width_toroid_is_rejected(self):
        with pytest.raises(InvariantViolation):
            GridTopology(Shape.HEXAGON, 5, 6, toroidal=True)

    @pytest.mark.parametrize("toroidal,size", [(False, (5, 5)), (True, (6, 4))])
    def test_tile_centers_map_back(self, toroidal, size):
        topology = GridTopology(Shape.HEXAGON, *size, toroidal=toroidal)
        for index in topology.all_tile_indexes():
            center = topology.tile_center(*topology.index_to_coord(index))
            assert topology.display_point_to_tile_index(*center) == index

    def test_point_near_center_picks_that_tile(self):
        topology = GridTopology(Shape.HEXAGON, 5, 5)
        center_x, center_y = topology.tile_center(1, 1)
        # close to the centre of the lowered odd column, not the coarse cell
        assert topology.display_point_to_tile_index(center_x + 0.3, center_y + 0.7) == topology.coord_to_index(1, 1)

    def test_display_geometry(self):
        topology = GridTopology(Shape.HEXAGON, 6, 6)
        assert topology.units_per_tile_x == 1.5
        assert topology.units_per_tile_y == pytest.approx(3 ** 0.5)
        assert topology.edges_per_tile == 6
