from pydantic import ValidationError


class InvalidTaskIdError(ValueError):
    """Raised when a path id is not a positive base-10 integer"""

    def __init__(self, raw_id):
        self.raw_id = raw_id
        super().__init__("Invalid id")


class TaskValidationError(Exception):
    """Raised when a request body fails its schema"""

    def __init__(self, error: ValidationError):
        self.error = error
        super().__init__("Validation error")
