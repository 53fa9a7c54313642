"""Hypothesis strategies for property-based testing of klaw-enum types."""

from hypothesis import strategies as st
from klaw_enum import Err, Nothing, Ok, Some

# -----------------------------------------------------------------------------
# Basic value strategies
# -----------------------------------------------------------------------------

integers = st.integers()
texts = st.text(min_size=0, max_size=100)
booleans = st.booleans()

# JSON-compatible payloads, so wire and codec round trips are lossless
json_scalars = st.none() | st.booleans() | st.integers(min_value=-(2**53), max_value=2**53) | texts
json_payloads = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=5) | st.dictionaries(texts, children, max_size=5),
    max_leaves=20,
)

# Exception strategies
exceptions = st.sampled_from([
    ValueError('test'),
    TypeError('test'),
    RuntimeError('test'),
])

# -----------------------------------------------------------------------------
# Variant strategies
# -----------------------------------------------------------------------------

# Variant names: non-empty identifiers that are never the reserved '_'
tags = st.from_regex(r'[A-Z][A-Za-z0-9]{0,15}', fullmatch=True)

results = st.one_of(integers.map(Ok), texts.map(Err))
options = st.one_of(integers.map(Some), st.just(Nothing))
