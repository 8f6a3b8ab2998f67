"""Hypothesis strategies for property-based testing of klaw-mersenne."""

from hypothesis import strategies as st

# -----------------------------------------------------------------------------
# Generator inputs
# -----------------------------------------------------------------------------

words = st.integers(min_value=0, max_value=2**32 - 1)

seeds = words

# Values a seed must reject
bad_seeds = st.one_of(
    st.integers(max_value=-1),
    st.integers(min_value=2**32),
)

# -----------------------------------------------------------------------------
# Distribution inputs
# -----------------------------------------------------------------------------

byte_lengths = st.integers(min_value=1, max_value=64)

non_positive_lengths = st.integers(max_value=0)

bounds = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
