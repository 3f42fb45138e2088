class GatewayError(Exception):
    """
    Base class for failures that map to an error envelope:
    {"error": <label>, "message": <text>, "details": <optional>} plus an HTTP status.
    """

    status_code = 500
    error = "Server error"

    def __init__(self, message, details=None, status_code=None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        body = {"error": self.error, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigError(GatewayError):
    status_code = 500
    error = "Server configuration error"


class ValidationError(GatewayError):
    status_code = 400
    error = "City name is required"


class NotFoundError(GatewayError):
    status_code = 404
    error = "No data found"


class UpstreamError(GatewayError):
    error = "CWA API error"

    def __init__(self, status_code, message, details=None):
        super().__init__(message, details=details, status_code=status_code)


class ServerError(GatewayError):
    status_code = 500
    error = "Server error"


class MalformedDataError(GatewayError):
    status_code = 502
    error = "Malformed upstream data"
