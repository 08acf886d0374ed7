"""Type-directed random value generation for round-trip and fuzz tests.

:class:`Generator` fills dataclasses, pydantic models and :class:`Ref`
references with random data derived from their annotations, honoring user
overrides, ``generate_self`` hooks, a recursion ceiling and configurable nil
and size probabilities.  A fixed seed yields identical values run to run.
"""

from .continuation import Continuation, SelfGenerating
from .generator import Generator
from .ref import Ref, attr_ref
from .utils.errors import (
    ConfigurationError,
    GenerationError,
    InvalidOverrideError,
    NotAReferenceError,
    StaleContinuationError,
    TypefillError,
    UnsupportedKindError,
)

__version__ = "0.1.0"

__all__ = [
    "Continuation",
    "SelfGenerating",
    "Generator",
    "Ref",
    "attr_ref",
    "TypefillError",
    "ConfigurationError",
    "InvalidOverrideError",
    "GenerationError",
    "NotAReferenceError",
    "UnsupportedKindError",
    "StaleContinuationError",
    "__version__",
]
