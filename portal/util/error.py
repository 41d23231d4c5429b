"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings cannot be used in the current environment."""

    def __init__(self, settings: list[str], environment: str) -> None:
        self.settings = settings
        self.environment = environment
        names = ", ".join(settings)
        super().__init__(f"Placeholder values not allowed in {environment}: {names}")
