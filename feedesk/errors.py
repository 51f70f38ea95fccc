"""Domain errors raised by the services and rendered by the API layer."""


class FeeDeskError(Exception):
    """Base class; `code` is the machine-readable tag returned to clients."""

    code = "ERROR"
    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.message = message or self.__class__.__doc__ or self.code


class ValidationError(FeeDeskError):
    """Malformed input."""

    code = "VALIDATION_ERROR"
    status_code = 400


class DuplicateError(FeeDeskError):
    """A record with the same identifying field already exists."""

    code = "DUPLICATE"
    status_code = 409


class DuplicateTransactionError(DuplicateError):
    """This Transaction ID has already been used for a previous payment."""

    code = "DUPLICATE_TXID"

    def __init__(self, external_transaction_id: str):
        super().__init__(
            f"Transaction ID {external_transaction_id!r} has already been used for a previous payment."
        )
        self.external_transaction_id = external_transaction_id


class NotFoundError(FeeDeskError):
    """Referenced record does not exist."""

    code = "NOT_FOUND"
    status_code = 404
