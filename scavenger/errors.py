class HuntError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HuntError):
    status_code = 400


class AuthError(HuntError):
    status_code = 401


class NotFoundError(HuntError):
    status_code = 404


class StoreError(HuntError):
    status_code = 500

    def __init__(self, message: str = "Database error"):
        super().__init__(message)
