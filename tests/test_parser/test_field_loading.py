# tests/test_parser/test_field_loading.py
import logging

import pytest

from fpga_arch_core.arch_enums import ChannelKind, FcType, PinDirection, PinSide, SwitchBlockType
from fpga_arch_core.parser import (
    InvalidPinLocationError,
    MissingValueError,
    MixedDirectionClassError,
    NoPinLocationError,
    OutOfRangeError,
    TokenStream,
    TrailingTokensError,
    UnknownDistributionKindError,
    allocate_pin_storage,
    discover_classes,
    load_fields,
)


def load(text: str):
    stream = TokenStream(text, source="test.arch")
    schema = discover_classes(stream)
    return load_fields(stream, schema, allocate_pin_storage(schema))


class TestScalarFields:

    def test_loads_all_scalar_fields(self, detailed_arch_text):
        context = load(detailed_arch_text)
        assert context.io_rat == 4
        assert context.chan_width_io == 1.0
        assert context.max_subblocks_per_block == 4
        assert context.subblock_lut_size == 4
        assert context.fc_type is FcType.FRACTIONAL
        assert (context.fc_output, context.fc_input, context.fc_pad) == (1.0, 0.5, 1.0)
        assert context.switch_block_type is SwitchBlockType.SUBSET
        assert context.has_detailed_routing

    def test_each_field_counted_once(self, detailed_arch_text):
        context = load(detailed_arch_text)
        for name in ("io_rat", "chan_width_x", "chan_width_y", "chan_width_io",
                     "subblocks_per_cluster", "subblock_lut_size",
                     "Fc_type", "Fc_output", "Fc_input", "Fc_pad", "switch_block_type"):
            assert context.counters.count(name) == 1, name
        assert context.counters.count("outpin") == 1
        assert context.counters.count("inpin") == 1

    def test_repeated_field_records_every_line(self, minimal_arch_text):
        context = load(minimal_arch_text + "io_rat 8\n")
        assert context.counters.count("io_rat") == 2
        assert context.counters.lines("io_rat") == [1, 9]
        assert context.io_rat == 8

    def test_unknown_keywords_are_skipped(self, minimal_arch_text):
        context = load("future_option 42 yes\n" + minimal_arch_text + "another_one\n")
        assert context.io_rat == 4
        assert context.counters.count("future_option") == 0

    def test_unknown_keywords_are_logged_at_debug(self, minimal_arch_text, caplog):
        caplog.set_level(logging.DEBUG, logger="fpga_arch_core")
        load("future_option 42\n" + minimal_arch_text)
        skipped = [r for r in caplog.records if "future_option" in r.getMessage()]
        assert len(skipped) == 1
        assert skipped[0].levelno == logging.DEBUG
        assert "Line 1" in skipped[0].getMessage()

    def test_keywords_are_case_sensitive(self, minimal_arch_text):
        context = load(minimal_arch_text.replace("io_rat", "IO_RAT"))
        assert context.io_rat is None
        assert context.counters.count("io_rat") == 0

    def test_standalone_float_rejects_trailing_tokens(self):
        with pytest.raises(TrailingTokensError):
            load("Fc_output 1.0 2.0\n")

    def test_fc_bounds(self):
        with pytest.raises(OutOfRangeError):
            load("Fc_pad 0\n")
        assert load("Fc_pad 1e20\n").fc_pad == 1e20


class TestChannelReader:

    def test_uniform(self):
        chan = load("chan_width_x uniform 0.75\n").chan_x
        assert chan.kind is ChannelKind.UNIFORM
        assert (chan.peak, chan.width, chan.xpeak, chan.dc) == (0.75, 0.0, 0.0, 0.0)

    def test_delta(self):
        chan = load("chan_width_y delta -3 0.5 0\n").chan_y
        assert chan.kind is ChannelKind.DELTA
        assert (chan.peak, chan.width, chan.xpeak, chan.dc) == (-3.0, 0.0, 0.5, 0.0)

    @pytest.mark.parametrize("kind", [ChannelKind.GAUSSIAN, ChannelKind.PULSE])
    def test_shaped(self, kind):
        chan = load(f"chan_width_x {kind.value} -0.5 0.3 0.2 0.1\n").chan_x
        assert chan.kind is kind
        assert (chan.peak, chan.width, chan.xpeak, chan.dc) == (-0.5, 0.3, 0.2, 0.1)

    def test_uniform_peak_must_be_positive(self):
        with pytest.raises(OutOfRangeError) as excinfo:
            load("chan_width_x uniform -0.5\n")
        assert excinfo.value.field_name == "chan_width_x"

    def test_uniform_peak_upper_bound(self):
        assert load("chan_width_x uniform 1\n").chan_x.peak == 1.0
        with pytest.raises(OutOfRangeError):
            load("chan_width_x uniform 1.5\n")

    def test_xpeak_above_one_rejected(self):
        with pytest.raises(OutOfRangeError):
            load("chan_width_x delta 1 1.5 0\n")

    def test_unknown_distribution(self):
        with pytest.raises(UnknownDistributionKindError) as excinfo:
            load("io_rat 2\nchan_width_y triangle 0.5\n")
        assert excinfo.value.token == "triangle"
        assert excinfo.value.line_number == 2

    def test_missing_distribution_kind(self):
        with pytest.raises(MissingValueError):
            load("chan_width_x\n")

    def test_missing_shape_values(self):
        with pytest.raises(MissingValueError):
            load("chan_width_x gaussian 0.5 0.3\n")

    def test_extra_values(self):
        with pytest.raises(TrailingTokensError):
            load("chan_width_x uniform 0.5 0.5\n")

    def test_presence_counted_per_axis(self):
        context = load("chan_width_x uniform 0.5\nchan_width_x uniform 0.5\n")
        assert context.counters.count("chan_width_x") == 2
        assert context.counters.count("chan_width_y") == 0


class TestPinReader:

    def test_pin_tables(self, lut4_arch_text):
        storage = load(lut4_arch_text).storage
        assert storage.directions == [PinDirection.RECEIVER, PinDirection.DRIVER, PinDirection.RECEIVER]
        assert [list(members) for members in storage.class_members] == [[0, 1, 2, 3], [4], [5]]
        assert list(storage.pin_class) == [0, 0, 0, 0, 1, 2]
        assert storage.pin_sides[0] == {PinSide.BOTTOM}
        assert storage.pin_sides[4] == {PinSide.TOP, PinSide.BOTTOM, PinSide.LEFT, PinSide.RIGHT}

    def test_member_order_follows_declaration_order(self):
        storage = load("inpin class: 1 top\noutpin class: 0 top\ninpin class: 1 left\n").storage
        assert list(storage.class_members[1]) == [0, 2]
        assert list(storage.class_members[0]) == [1]

    def test_duplicate_sides_are_harmless(self):
        storage = load("outpin class: 0 left top left\n").storage
        assert storage.pin_sides[0] == {PinSide.LEFT, PinSide.TOP}

    def test_mixed_direction_class(self):
        with pytest.raises(MixedDirectionClassError) as excinfo:
            load("inpin class: 0 top\noutpin class: 0 bottom\n")
        assert excinfo.value.line_number == 2
        assert "Class 0 contains both input and output pins" in excinfo.value.details

    def test_no_sides(self):
        with pytest.raises(NoPinLocationError):
            load("outpin class: 0\n")

    def test_bad_side(self):
        with pytest.raises(InvalidPinLocationError) as excinfo:
            load("inpin class: 0 top center\n")
        assert excinfo.value.token == "center"

    def test_pin_counters(self, lut4_arch_text):
        context = load(lut4_arch_text)
        assert context.counters.count("inpin") == 5
        assert context.counters.count("outpin") == 1
        assert context.next_pin == 6
