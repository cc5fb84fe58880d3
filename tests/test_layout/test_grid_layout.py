# tests/test_layout/test_grid_layout.py
import numpy as np
import pytest

from fpga_arch_core import CellKind
from fpga_arch_core.layout import (
    CoordinateOverflowError,
    DegenerateGridError,
    GridLayoutError,
    PlacementSizing,
    SizeTooSmallError,
    compute_grid_size,
    derive_grid_layout,
)


class TestAutomaticSizing:

    def test_square_grid_for_100_blocks(self):
        layout = derive_grid_layout(io_rat=2, sizing=PlacementSizing(num_blocks=100, num_pads=20, aspect_ratio=1.0))

        assert (layout.width, layout.height) == (10, 10)
        assert layout.cell_kind.shape == (12, 12)
        assert np.count_nonzero(layout.cell_kind == CellKind.LOGIC) == 100
        assert np.count_nonzero(layout.cell_kind == CellKind.IO) == 40
        assert np.count_nonzero(layout.cell_kind == CellKind.ILLEGAL) == 4
        for x, y in [(0, 0), (11, 0), (0, 11), (11, 11)]:
            assert layout.kind_at(x, y) is CellKind.ILLEGAL
        assert layout.kind_at(0, 5) is CellKind.IO
        assert layout.kind_at(5, 11) is CellKind.IO
        assert layout.kind_at(1, 1) is CellKind.LOGIC
        assert layout.kind_at(10, 10) is CellKind.LOGIC

    def test_aspect_ratio_widens_grid(self):
        assert compute_grid_size(1, PlacementSizing(num_blocks=50, num_pads=0, aspect_ratio=2.0)) == (10, 5)

    def test_partial_rows_round_up(self):
        assert compute_grid_size(1, PlacementSizing(num_blocks=10, num_pads=0)) == (4, 4)

    def test_pad_count_can_drive_size(self):
        # 100 pads at 2 per I/O cell need 2 * 2 * (1 + 1) * height >= 100, so height 13.
        assert compute_grid_size(2, PlacementSizing(num_blocks=4, num_pads=100)) == (13, 13)

    def test_empty_circuit_gets_one_cell(self):
        layout = derive_grid_layout(1, PlacementSizing(num_blocks=0, num_pads=0))
        assert (layout.width, layout.height) == (1, 1)

    def test_single_block_is_degenerate(self):
        with pytest.raises(DegenerateGridError) as excinfo:
            derive_grid_layout(1, PlacementSizing(num_blocks=1, num_pads=2))
        assert "only one valid location" in excinfo.value.get_diagnostic_report()

    def test_oversized_circuit_overflows_coordinates(self):
        with pytest.raises(CoordinateOverflowError):
            derive_grid_layout(1, PlacementSizing(num_blocks=32767 * 32767, num_pads=0))


class TestUserSizedGrid:

    def test_fixed_size_is_used(self):
        layout = derive_grid_layout(1, PlacementSizing(num_blocks=6, num_pads=10, fixed_size=(3, 2)))
        assert (layout.width, layout.height) == (3, 2)

    def test_too_few_sites(self):
        with pytest.raises(SizeTooSmallError) as excinfo:
            derive_grid_layout(1, PlacementSizing(num_blocks=7, num_pads=0, fixed_size=(3, 2)))
        assert excinfo.value.width == 3
        assert "too small" in str(excinfo.value)

    def test_too_few_io_slots(self):
        with pytest.raises(SizeTooSmallError):
            derive_grid_layout(1, PlacementSizing(num_blocks=1, num_pads=9, fixed_size=(2, 2)))

    def test_io_slots_exactly_full(self):
        layout = derive_grid_layout(1, PlacementSizing(num_blocks=1, num_pads=8, fixed_size=(2, 2)))
        assert layout.io_slot_count == 8

    def test_fixed_one_by_one_with_a_block_is_degenerate(self):
        with pytest.raises(DegenerateGridError):
            derive_grid_layout(4, PlacementSizing(num_blocks=1, num_pads=0, fixed_size=(1, 1)))

    def test_fixed_size_over_limit(self):
        with pytest.raises(CoordinateOverflowError):
            derive_grid_layout(1, PlacementSizing(num_blocks=0, num_pads=0, fixed_size=(32767, 2)))

    def test_limit_itself_is_allowed(self):
        width, height = compute_grid_size(1, PlacementSizing(num_blocks=0, num_pads=0, fixed_size=(32766, 1)))
        assert width == 32766

    def test_errors_share_a_base_class(self):
        with pytest.raises(GridLayoutError):
            derive_grid_layout(1, PlacementSizing(num_blocks=100, num_pads=0, fixed_size=(2, 2)))


class TestLayoutTables:

    def test_channel_arrays_sized_by_opposite_axis(self):
        layout = derive_grid_layout(1, PlacementSizing(num_blocks=50, num_pads=0, aspect_ratio=2.0))
        assert (layout.width, layout.height) == (10, 5)
        assert layout.chan_width_x.shape == (6,)
        assert layout.chan_width_y.shape == (11,)
        assert not layout.chan_width_x.any()

    def test_capacity_and_occupancy(self):
        layout = derive_grid_layout(3, PlacementSizing(num_blocks=4, num_pads=0))
        assert layout.capacity[0, 1] == 3
        assert layout.capacity[1, 1] == 1
        assert layout.capacity[0, 0] == 0
        assert layout.capacity.sum() == 3 * 2 * (2 + 2) + 4
        assert layout.io_slot_count == 24
        assert layout.occupancy.shape == layout.capacity.shape
        assert not layout.occupancy.any()

    def test_arrays_are_read_only(self):
        layout = derive_grid_layout(1, PlacementSizing(num_blocks=4, num_pads=0))
        with pytest.raises(ValueError):
            layout.cell_kind[1, 1] = CellKind.IO
        with pytest.raises(ValueError):
            layout.chan_width_y[0] = 5

    def test_derivation_is_repeatable(self):
        sizing = PlacementSizing(num_blocks=37, num_pads=12, aspect_ratio=1.5)
        assert derive_grid_layout(2, sizing).same_as(derive_grid_layout(2, sizing))


class TestPlacementSizing:

    @pytest.mark.parametrize("aspect_ratio", [0.0, -1.0, float("inf"), float("nan")])
    def test_aspect_ratio_must_be_positive_and_finite(self, aspect_ratio):
        with pytest.raises(ValueError):
            PlacementSizing(num_blocks=1, num_pads=1, aspect_ratio=aspect_ratio)

    def test_counts_must_be_non_negative(self):
        with pytest.raises(ValueError):
            PlacementSizing(num_blocks=-1, num_pads=0)
