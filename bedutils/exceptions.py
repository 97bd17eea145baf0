class BEDUtilsError(Exception):
    pass


class BEDValidationError(BEDUtilsError):
    """
    Raised in strict mode when a feature cannot produce a valid BED record.
    """
    pass


class TransferError(BEDUtilsError):
    """
    Raised when a feature is moved onto a slice of a different region.
    """
    pass
