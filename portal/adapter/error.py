"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class EmailDeliveryError(ProviderError):
    """The email provider did not accept a message."""

    pass
