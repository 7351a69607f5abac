"""Pytest configuration for bitset128 tests.

This module provides hypothesis settings profiles and re-exports
strategies for convenient imports in test files.
"""

import os

from hypothesis import settings, Verbosity


# ========== Hypothesis Settings ==========

settings.register_profile("factory")
settings.register_profile("build", print_blob=True, deadline=500)
settings.register_profile("fast", max_examples=10)
settings.register_profile("thorough", max_examples=1000)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "fast"))


# Re-export strategies for convenient imports
from .strategies import (
    u64_values,
    u128_values,
    positions,
    out_of_range_positions,
    shift_amounts,
    bitsets,
    bit_strings,
)
