"""Asset registry exceptions."""


class PageAssetsError(Exception):
    """Base class for pageassets errors."""


class ClassNameExhaustedError(PageAssetsError):
    """Raised when no unused class name could be generated."""

    def __init__(self, prefix: str, attempts: int):
        self.prefix = prefix
        self.attempts = attempts
        super().__init__(f"Could not generate unused class name for '{prefix}'")

    def __str__(self) -> str:
        return f"{self.args[0]} after {self.attempts} attempts"
