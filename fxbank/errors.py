"""
Exceptions raised by the FXBank engine.

Not-found lookups and failed validations are returned as values; only
conditions the caller cannot recover from locally are raised.
"""


class FXBankError(Exception):
    """Base class for fxbank errors."""


class UnknownToolError(FXBankError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown tool: {self.name}"


class UnknownPromptError(FXBankError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown prompt: {self.name}"


class TransferStateError(FXBankError):
    """
    A store mutation failed part-way through a transfer.

    Steps applied before the failure are NOT rolled back.
    """

    def __init__(self, message: str, transaction_id: str, applied_steps: list[str]):
        super().__init__(message)
        self.transaction_id = transaction_id
        self.applied_steps = applied_steps
