"""Errors raised while accepting an order."""


class OrderFormError(ValueError):
    """Raised when submitted order form fields are missing or malformed."""

    pass


class OrderSubmissionError(Exception):
    """Base class for failures that abort an order submission."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidCustomerError(OrderSubmissionError):
    """Raised when the customer id does not match any customer."""

    def __init__(self, customer_id: int):
        super().__init__("Invalid customer id!")
        self.customer_id = customer_id


class TransactionAbortedError(OrderSubmissionError):
    """Raised when a step after ``begin`` fails and the order is rolled back."""

    def __init__(self, step: str, message: str):
        super().__init__(message)
        self.step = step
