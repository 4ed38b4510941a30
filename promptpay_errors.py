# Purpose: Error taxonomy for PromptPay payload generation.

class PayloadError(ValueError):
    """Base class for every failure raised while building a payload."""

    def __init__(self, message, field=None, value=None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def to_dict(self):
        return {
            "error": type(self).__name__,
            "field": self.field,
            "message": self.message,
        }


class InvalidPhoneNumber(PayloadError):
    expected_length = 9

    def __init__(self, value):
        super().__init__(
            f"Invalid phone number {value!r}: expected {self.expected_length} digits "
            "after removing the country code or leading zero",
            field="phoneNumber",
            value=value,
        )


class InvalidNationalId(PayloadError):
    expected_length = 13

    def __init__(self, value):
        super().__init__(
            f"Invalid national ID {value!r}: expected {self.expected_length} digits",
            field="nationalId",
            value=value,
        )


class AmountOutOfRange(PayloadError):
    def __init__(self, value, reason):
        super().__init__(f"Amount {value!r} out of range: {reason}", field="amount", value=value)
        self.reason = reason


class MissingIdentifier(PayloadError):
    def __init__(self, value=None):
        super().__init__(
            "A phone number or national ID is required",
            field="identifier",
            value=value,
        )
