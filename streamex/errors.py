class StreamConsumedError(RuntimeError):
    """raised when a stream stage is used again after being linked, consumed or closed."""

    def __init__(self, message: str = "stream has already been operated upon or closed"):
        super().__init__(message)
