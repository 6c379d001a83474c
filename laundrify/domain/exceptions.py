class DomainException(Exception):
    pass


class OrderNotFoundError(DomainException):
    pass


class ShopNotFoundError(DomainException):
    pass


class InvalidTransitionError(DomainException):
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move order from '{_value(current)}' to '{_value(target)}'")


class StaleOrderError(DomainException):
    """The order changed in the store between read and write."""

    def __init__(self, order_id: str, expected):
        self.order_id = order_id
        self.expected = expected
        super().__init__(f"Order {order_id} is no longer '{_value(expected)}', reload and retry")


class WebhookPayloadError(DomainException):
    pass


class PaymentGatewayError(DomainException):
    pass


class NotificationServiceError(DomainException):
    pass


class ProfileValidationError(DomainException):
    pass


def _value(status) -> str:
    return getattr(status, "value", status)
