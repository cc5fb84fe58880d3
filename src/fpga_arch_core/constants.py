# src/fpga_arch_core/constants.py
"""
Keywords, field bounds and grid limits of the architecture description format.
"""

# --- Statement keywords, in the order the fields are reported ---
IO_RAT = "io_rat"
CHAN_WIDTH_X = "chan_width_x"
CHAN_WIDTH_Y = "chan_width_y"
CHAN_WIDTH_IO = "chan_width_io"
OUTPIN = "outpin"
INPIN = "inpin"
SUBBLOCKS_PER_CLUSTER = "subblocks_per_cluster"
SUBBLOCK_LUT_SIZE = "subblock_lut_size"
FC_OUTPUT = "Fc_output"
FC_INPUT = "Fc_input"
FC_PAD = "Fc_pad"
FC_TYPE = "Fc_type"
SWITCH_BLOCK_TYPE = "switch_block_type"

FIELD_NAMES = (
    IO_RAT, CHAN_WIDTH_X, CHAN_WIDTH_Y, CHAN_WIDTH_IO, OUTPIN, INPIN,
    SUBBLOCKS_PER_CLUSTER, SUBBLOCK_LUT_SIZE,
    FC_OUTPUT, FC_INPUT, FC_PAD, FC_TYPE, SWITCH_BLOCK_TYPE,
)

# Only needed when detailed routing is performed.
DETAILED_ONLY_FIELDS = (FC_OUTPUT, FC_INPUT, FC_PAD, FC_TYPE, SWITCH_BLOCK_TYPE)

# Counted per pin statement rather than once per file.
PIN_FIELDS = (OUTPIN, INPIN)

CLASS_MARKER = "class:"

# --- Float bounds, checked as (low, high] ---
CHAN_WIDTH_IO_BOUNDS = (0.0, 5000.0)
FC_BOUNDS = (0.0, 1.0e20)
UNIFORM_PEAK_BOUNDS = (0.0, 1.0)
SHAPED_PEAK_BOUNDS = (-1.0, 1.0)
DELTA_PEAK_BOUNDS = (-1.0e5, 1.0e5)
CHANNEL_WIDTH_BOUNDS = (0.0, 1.0e10)
# The tiny negative low bound lets an exact 0 through.
FRACTION_BOUNDS = (-1.0e-30, 1.0)

# --- Grid limits ---
# Downstream routing structures store coordinates in 16 bits.
MAX_GRID_DIMENSION = 32766

DEFAULT_ECHO_FILE = "arch.echo"
