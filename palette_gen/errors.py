"""
Exception types raised by the palette engine.
"""


class PaletteError(Exception):
    """Base class for all palette engine errors."""


class InvalidArgument(PaletteError, ValueError):
    """An argument violates a documented constraint."""

    def __init__(self, argument, constraint, value=None):
        self.argument = argument
        self.constraint = constraint
        self.value = value
        message = f"invalid argument '{argument}': {constraint}"
        if value is not None:
            message += f" (got {value!r})"
        super().__init__(message)


class ConversionDomainError(PaletteError, ValueError):
    """Input is so far outside a color space that clamping would be meaningless."""

    def __init__(self, space, values):
        self.space = space
        self.values = tuple(values)
        super().__init__(f"{space} coordinates out of domain: {self.values}")
