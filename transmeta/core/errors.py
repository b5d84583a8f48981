class TransmetaError(Exception):
    """
    Base exception for failures outside the normalization core.
    """

    pass


class CatalogReadError(TransmetaError):
    """
    Raised when a catalog file cannot be opened at all.
    """

    pass


class ReaderSelectionError(TransmetaError):
    """
    Raised when catalog readers are misregistered or none applies.
    """

    pass


class NoReaderFoundError(ReaderSelectionError):
    """
    Raised when no registered reader accepts a file.
    """

    pass


class DuplicateReaderError(ReaderSelectionError):
    """
    Raised when two readers register the same reader_id.
    """

    pass
