"""seq-spine: per-category sequential identifiers for published records."""

__version__ = "0.1.0"

from seqspine.sequencing.service import SequenceService  # noqa: E402

__all__ = ["__version__", "SequenceService"]
