class StoreUnavailable(RuntimeError):
    """The inventory document store could not be reached or rejected a request.

    Raised for network, authentication and API failures alike. The original
    exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"Inventory store unavailable during {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
