class APIError(Exception):
    def __init__(self, code: str, message: str, http_status: int = 400, details: dict = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details = details


class ValidationError(APIError):
    def __init__(self, message: str, details: dict = None):
        super().__init__("INVALID_INPUT", message, 422, details)


class MissingFieldsError(APIError):
    def __init__(self, fields: list):
        super().__init__(
            "MISSING_FIELDS",
            "Transcript and consultation ID are required",
            400,
            {"missing": fields},
        )


class ProcessingFailedError(APIError):
    def __init__(self, message: str = "Failed to process global transcript", details: dict = None):
        super().__init__("PROCESSING_FAILED", message, 500, details)
