# ecommerce/core/domain/exceptions.py
class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Validation Errors ---

class ValidationError(DomainError):
    """Raised when input is missing a required field or has the wrong shape."""
    def __init__(self, reason: str):
        super().__init__(f"Validation failed: {reason}")
        self.reason = reason

# --- Conflict Errors ---

class DuplicateUserError(DomainError):
    """Raised when registering an email that already belongs to a user."""
    def __init__(self, email: str):
        super().__init__(f"A user with email '{email}' already exists.")
        self.email = email

class DuplicateProductError(DomainError):
    """Raised when a product name is already taken in the catalog."""
    def __init__(self, name: str):
        super().__init__(f"A product named '{name}' already exists.")
        self.name = name

# --- Entity Not Found Errors ---

class NotFoundError(DomainError):
    """Base class for lookups that found nothing."""

class UserNotFoundError(NotFoundError):
    def __init__(self, identifier: str):
        super().__init__(f"User '{identifier}' was not found.")
        self.identifier = identifier

class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: object):
        super().__init__(f"Order '{order_id}' was not found.")
        self.order_id = order_id

class ProductNotFoundError(NotFoundError):
    def __init__(self, identifier: object):
        super().__init__(f"Product '{identifier}' was not found.")
        self.identifier = identifier

# --- Authentication Errors ---

class InvalidCredentialsError(DomainError):
    """Raised when the password does not match or the account cannot log in."""
    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message)

class InvalidTokenError(DomainError):
    """Raised when a bearer token is malformed, expired or has a bad signature."""
    def __init__(self, reason: str):
        super().__init__(f"Invalid token: {reason}")
        self.reason = reason
