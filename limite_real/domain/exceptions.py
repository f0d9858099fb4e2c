"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Financial parameters are malformed"""

    kind = "ValidationError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTotalLimit(ValidationError):
    """Total limit missing or not greater than zero"""

    kind = "InvalidTotalLimit"


class NegativeMonthSpend(ValidationError):
    """Month-to-date spend below zero"""

    kind = "NegativeMonthSpend"


class NegativeInstallments(ValidationError):
    """Active installments below zero"""

    kind = "NegativeInstallments"


class InvalidClosingDay(ValidationError):
    """Closing day missing or outside 1..31"""

    kind = "InvalidClosingDay"


class InvalidExpenseAmountError(DomainException):
    """Expense amount must be greater than zero"""

    pass


class ExpenseNotFoundError(DomainException):
    """No expense with the given id in today's log"""

    pass


class ProfileNotConfiguredError(DomainException):
    """No financial profile has been stored yet"""

    pass


class GatewayUnavailableError(DomainException):
    """Gateway API timed out or could not be reached"""

    pass


class GatewayRequestError(DomainException):
    """Gateway API answered with an error status"""

    def __init__(self, status_code: int, detail):
        super().__init__(f"Gateway error {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail
