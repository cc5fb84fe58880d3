# --- src/fpga_arch_core/log_config.py ---
import logging
import sys

PACKAGE_LOGGER = "fpga_arch_core"


def setup_logging(level=logging.INFO, stream=sys.stdout):
    """
    Sends the parser's progress messages (pass summaries, skipped keywords,
    grid sizes) to `stream`. Only the package logger is configured; records
    still propagate to the root logger.
    """
    formatter = logging.Formatter("%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s")
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    # Calling this again replaces the handler instead of stacking a second one.
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(formatter)
    package_logger.setLevel(level)
    package_logger.addHandler(console_handler)
    package_logger.debug("Architecture logging configured at level %s.", logging.getLevelName(level))
