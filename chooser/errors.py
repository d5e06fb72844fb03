class ChooserError(Exception):
    """
    Base error: carries the HTTP status the API renders it with.
    """
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(ChooserError):
    status_code = 400


class Forbidden(ChooserError):
    status_code = 403


class NotFound(ChooserError):
    status_code = 404


class Internal(ChooserError):
    status_code = 500
