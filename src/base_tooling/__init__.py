"""Workstation bootstrap: Nix, a configuration checkout and its activation."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
