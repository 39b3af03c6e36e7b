# util/errors.py
from fastapi import HTTPException, status


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)


class GroundingInputError(Exception):
    """Evidence handed to the prompt compiler cannot ground a prompt."""


class EmptyEvidenceError(GroundingInputError):
    def __init__(self) -> None:
        super().__init__("No evidence chunks provided")


class EmptyContentError(GroundingInputError):
    def __init__(self, chunk_id: str) -> None:
        super().__init__(f"Evidence chunk {chunk_id} has empty content")
        self.chunk_id = chunk_id


class DuplicateEvidenceError(GroundingInputError):
    def __init__(self, chunk_id: str) -> None:
        super().__init__(f"Evidence chunk id {chunk_id} appears more than once")
        self.chunk_id = chunk_id


class ResponseValidationError(Exception):
    # Only raised by ValidationResult.unwrap(); validation itself returns values.
    def __init__(self, failure) -> None:
        super().__init__(str(failure))
        self.failure = failure
