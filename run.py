# -*- coding: utf-8 -*-

"""
Main entry point for launching Layout Toolkit from a source checkout.
"""

import logging
import sys

from layout_toolkit.logging_config import setup_logging
from layout_toolkit.cli import main as cli_main


def main():
    """
    Configure logging and run the command-line interface.
    """
    setup_logging()
    return cli_main()


if __name__ == '__main__':
    exit_code = main()
    logging.getLogger("layout_toolkit").info("===== Layout Toolkit terminated =====")
    sys.exit(exit_code)
