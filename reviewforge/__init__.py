"""ReviewForge - spaced-repetition scheduling engine for vocabulary learning.

This package provides a pure scheduling engine (reviewforge.engine), the
storage collaborators it is driven through, and a command-line interface.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
