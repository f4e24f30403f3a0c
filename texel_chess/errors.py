class InvalidInputError(ValueError):
    """Raised for malformed FEN fields, dataset lines, labels or file types.

    Always fatal: a tuning run never skips bad data.
    """
