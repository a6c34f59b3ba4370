class ReviewError(Exception):
    """A review attempt that ends before a result is shown."""

    level = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReviewError):
    pass


class LowConfidenceError(ReviewError):
    level = "warning"


class LanguageMismatchError(ReviewError):
    def __init__(self, message: str, declared: str, detected: str):
        super().__init__(message)
        self.declared = declared
        self.detected = detected


class ServiceError(ReviewError):
    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code
