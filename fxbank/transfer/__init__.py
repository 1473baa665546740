"""
Transfer engine: target resolution -> pre-condition validation -> execution.
"""

from .resolver import TargetResolver  # noqa: F401
from .schemas import (  # noqa: F401
    TransferArgs,
    TransferDetails,
    TransferRequest,
    TransferResult,
    ValidationResult,
)
from .service import TransferExecutor  # noqa: F401
from .validator import PreConditionValidator  # noqa: F401
