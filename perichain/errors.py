"""
Fatal conditions raised while building a peripheral chain.

Every error aborts the build; the CLI reports the message and exits 1.
"""


class ChainError(Exception):
    """Base class for all chain build failures."""


class UsageError(ChainError):
    """Wrong command line usage."""


class ChainIOError(ChainError):
    """Input or output file could not be opened, read or written."""


class ConfigFormatError(ChainError):
    """The peripheral list does not have the expected layout."""


class UnknownPeripheralError(ChainError):
    """A peripheral name does not resolve against the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown peripheral: {name}")


class CapacityError(ChainError):
    """More slots requested than the driver ID table can address."""
