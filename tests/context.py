# pyre-unsafe
"""Test context for importing resample_stat modules."""

import os
import sys

sys.path.insert(
    0,
    os.path.abspath(os.path.join(os.path.dirname(__file__), "..")),
)

import resample_stat  # noqa: F401, E402
from resample_stat import _utils, datasets, stats  # noqa: F401, E402
