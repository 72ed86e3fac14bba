# orders/services/exceptions.py

"""
ORDER DOMAIN ERRORS

Every service failure is one of these. Views map them to
{"error": {"code": ..., "message": ...}} with status_code.
"""


class OrderServiceError(Exception):
    status_code = 400
    code = "order_error"
    default_message = "Order operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(OrderServiceError):
    status_code = 401
    code = "unauthorized"
    default_message = "Authentication required"


class Forbidden(OrderServiceError):
    status_code = 403
    code = "forbidden"
    default_message = "You do not have access to this order"


class NotFound(OrderServiceError):
    status_code = 404
    code = "not_found"
    default_message = "Order not found"


class InvalidState(OrderServiceError):
    code = "invalid_state"
    default_message = "Order is not in a state that allows this action"


class InsufficientStock(OrderServiceError):
    code = "insufficient_stock"
    default_message = "Insufficient stock"

    def __init__(self, message: str | None = None, *, product_id=None, product_name: str = ""):
        self.product_id = product_id
        self.product_name = product_name
        super().__init__(message)


class ValidationError(OrderServiceError):
    code = "validation_error"
    default_message = "Invalid request"
