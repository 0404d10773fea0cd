from django.db import models


class UserRole(models.TextChoices):
    ADMIN = "admin", "Administrator"
    VENDOR = "vendor", "Vendor"
    STAFF = "staff", "Staff"


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    ACCEPTED = "accepted", "Accepted"
    REJECTED = "rejected", "Rejected"
    COMPLETED = "completed", "Completed"

    @classmethod
    def terminal(cls):
        return [cls.REJECTED, cls.COMPLETED]

    @classmethod
    def active(cls):
        return [cls.PENDING, cls.ACCEPTED]


class PaymentStatus(models.TextChoices):
    UNPAID = "unpaid", "Unpaid"
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"


class PaymentMethod(models.TextChoices):
    CASH = "cash", "Cash"
    ESEWA = "esewa", "eSewa"
    CARD = "card", "Card"


class NotificationType(models.TextChoices):
    NEW_ORDER = "new_order", "New order"
    ORDER_STATUS = "order_status", "Order status"
    PAYMENT = "payment", "Payment"
    ISSUE = "issue", "Delivery issue"
    VERIFICATION = "verification", "Delivery verified"
    WAITER_CALL = "waiter_call", "Waiter call"


UNNAMED_ITEM = "Unnamed Item"
DELETED_ITEM = "Deleted Item"
