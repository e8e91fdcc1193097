class Id(int):
    """ Opaque handle used by the service for accounts, orders, trades, etc.

    Notes:
        Only equality and "non-zero-ness" carry meaning. An `Id` of `0` means "unset" and is false-y, which is
        how account selection is disabled.

    Raises:
        ValueError: when constructed from a negative value.
    """
    def __new__(cls, value: int = 0):
        value = super().__new__(cls, value)
        if value < 0:
            raise ValueError(f"Id must be unsigned, got {int(value)}")
        return value

    def __repr__(self):
        return f"Id({int(self)})"
