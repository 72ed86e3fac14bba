from .order import Order
from .order_item import OrderItem
from .reimbursement import Reimbursement

__all__ = [
    "Order",
    "OrderItem",
    "Reimbursement",
]
