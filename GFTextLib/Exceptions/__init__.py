class FormatError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LengthMismatchError(FormatError):
    def __init__(self, what: str, expected: int, actual: int):
        message = f"{what} does not match the header! (Expected {expected} got {actual}.)"
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class ContractViolation(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


__all__ = ["FormatError", "LengthMismatchError", "ContractViolation"]
