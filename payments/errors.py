class GatewayError(Exception):
    pass


class PaymentError(GatewayError):
    """Order submission to Soisy failed (transport, HTTP or decoding error)."""


class UnsupportedOperationError(GatewayError, NotImplementedError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__("This gateway does not support that functionality.")


class WebhookAuthenticationError(GatewayError):
    """Inbound callback did not carry the shared webhook secret."""
