# laundry_service/errors.py


class AuthenticationError(Exception):
    """Missing session or bad credentials. Rendered as a 401 ``{message}`` body."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
        self.message = message


class ConflictError(Exception):
    """A uniqueness rule was violated. Rendered as a 400 ``{message, field}`` body."""

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.message = message
        self.field = field


class PhoneAlreadyRegisteredError(ConflictError):
    def __init__(self):
        super().__init__("Phone number already registered", field="phone")
