from __future__ import annotations


class IndexInputError(ValueError):
    """Raised when an alphabetical index handed to the builder is inconsistent.

    Individual unusable entries never raise; they are skipped. This error means
    the index as a whole cannot be traversed and the page build must stop.
    """
