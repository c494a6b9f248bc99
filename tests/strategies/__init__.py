"""Hypothesis strategies for nlsbundler property-based testing.

Strategies are organized by domain:

- bundles: keys, messages, LocalizeKey variants and MessageBundle values
- sources: Python source files containing localize() call sites
- sourcemap: VLQ values and position map segments

Usage:
    from tests.strategies import message_bundles, bundle_keys
    from tests.strategies.sources import localize_sources

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - localize_keys, message_bundles, localize_sources
"""

from .bundles import (
    bundle_keys,
    localize_keys,
    message_bundles,
    messages,
)
from .sourcemap import segments, vlq_values
from .sources import localize_sources

__all__ = [
    "bundle_keys",
    "localize_keys",
    "localize_sources",
    "message_bundles",
    "messages",
    "segments",
    "vlq_values",
]
