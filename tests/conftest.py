# tests/conftest.py
import pytest

# A two-class logic block: one driver, one receiver.
MINIMAL_ARCH = """\
io_rat 4
chan_width_io 1.0
chan_width_x uniform 1.0
chan_width_y uniform 1.0
outpin class: 0 top
inpin class: 1 bottom
subblocks_per_cluster 4
subblock_lut_size 4
"""

# Fields only required for detailed routing.
DETAILED_FIELDS = """\
Fc_type fractional
Fc_output 1.0
Fc_input 0.5
Fc_pad 1.0
switch_block_type subset
"""

# A 4-LUT cluster: four equivalent LUT inputs, one output on all sides, a clock.
LUT4_CLUSTER_ARCH = """\
# Architecture for a single 4-LUT logic block.
io_rat 2
chan_width_io 1

chan_width_x gaussian 0.5 0.25 0.5 0.1   # peaked in the middle
chan_width_y delta 2.0 0.5 0

inpin class: 0 bottom
inpin class: 0 left
inpin class: 0 top
inpin class: 0 right
outpin class: 1 top bottom \\
      left right
inpin class: 2 top    # clock

subblocks_per_cluster 1
subblock_lut_size 4
"""


@pytest.fixture
def minimal_arch_text():
    return MINIMAL_ARCH


@pytest.fixture
def detailed_arch_text():
    return MINIMAL_ARCH + DETAILED_FIELDS


@pytest.fixture
def lut4_arch_text():
    return LUT4_CLUSTER_ARCH


@pytest.fixture
def write_arch(tmp_path):
    """Returns a helper that writes architecture text to a file under tmp_path."""
    def _write(text: str, name: str = "arch.txt"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write


@pytest.fixture
def without_line():
    """Returns a helper that drops every line starting with the given keyword."""
    def _without(text: str, keyword: str) -> str:
        return "".join(
            line for line in text.splitlines(keepends=True)
            if not line.split() or line.split()[0] != keyword
        )
    return _without
