class KnnBoundaryError(Exception):
    """Base class for errors raised by the knn_boundary engine"""


class InsufficientData(KnnBoundaryError):
    """Raised when classification or binning is asked to work on an empty point set"""


class MalformedPoint(KnnBoundaryError, ValueError):
    """A loaded record is missing a numeric measurement or its label"""

    def __init__(self, row_index, reason):
        self.row_index = row_index
        self.reason = reason
        super().__init__(f"Malformed record at row {row_index}: {reason}")


class LoadFailure(KnnBoundaryError):
    """The dataset could not be read or is missing required columns"""

    def __init__(self, source, reason):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load dataset from '{source}': {reason}")
