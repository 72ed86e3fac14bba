from .checkout import PlacedOrder, place_order
from .exceptions import (
    Forbidden,
    InsufficientStock,
    InvalidState,
    NotFound,
    OrderServiceError,
    Unauthorized,
    ValidationError,
)
from .reimbursement import confirm_reimbursement, total_reimbursed
from .transitions import OrderTransitionService

__all__ = [
    "Forbidden",
    "InsufficientStock",
    "InvalidState",
    "NotFound",
    "OrderServiceError",
    "OrderTransitionService",
    "PlacedOrder",
    "Unauthorized",
    "ValidationError",
    "confirm_reimbursement",
    "place_order",
    "total_reimbursed",
]
