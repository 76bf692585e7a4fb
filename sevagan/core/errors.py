"""Domain error taxonomy.

Every error carries an HTTP status and a machine-checkable ``code`` so the
web client can tell "not logged in" apart from a server or network failure.
"""


class SevaganError(Exception):
    status_code = 400
    code = "Error"
    message = "Request failed"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self):
        return {"error": self.message, "code": self.code}


class NotAuthorized(SevaganError):
    status_code = 401
    code = "NotAuthorized"
    message = "Not authorized"


class NotFound(SevaganError):
    status_code = 404
    code = "NotFound"
    message = "Not found"


class NeedNotFound(NotFound):
    code = "NeedNotFound"
    message = "Need not found"


class NoOtpRequested(SevaganError):
    code = "NoOtpRequested"
    message = "No OTP requested"


class OtpExpired(SevaganError):
    code = "OtpExpired"
    message = "OTP expired"


class InvalidOtp(SevaganError):
    code = "InvalidOtp"
    message = "Invalid OTP"


class ValidationError(SevaganError):
    code = "ValidationError"
    message = "Validation failed"
