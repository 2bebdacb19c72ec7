"""statusflow: explicit failure propagation with Status values.

Public API:
    - Status, StatusCode, Success, StatusOr: result values
    - propagating: decorator enabling early returns in a function
    - return_if_error(): forward a failed Status out of the enclosing function
    - assign_or_return(): extract a payload or forward the failure
    - if_error(): explicit-return form yielding an ErrorBuilder
    - ErrorBuilder: chainable augmentation of a failing Status
    - check_ok(), check(), value_or_die(): fatal checks
"""

from __future__ import annotations

import logging

from statusflow.builder import CONTINUE, ErrorBuilder
from statusflow.checks import check, check_ok, value_or_die
from statusflow.config import Config, current_config, reload_config, use_config
from statusflow.errors import (
    BadResultAccessError,
    BuilderConsumedError,
    CheckFailedError,
    ConfigurationError,
    MisuseError,
    StatusflowError,
)
from statusflow.propagate import (
    Propagate,
    assign_or_return,
    if_error,
    propagating,
    return_if_error,
)
from statusflow.status import (
    Status,
    StatusCode,
    StatusOr,
    Success,
    aborted_error,
    already_exists_error,
    cancelled_error,
    data_loss_error,
    deadline_exceeded_error,
    failed_precondition_error,
    internal_error,
    invalid_argument_error,
    not_found_error,
    ok_status,
    out_of_range_error,
    permission_denied_error,
    resource_exhausted_error,
    unauthenticated_error,
    unavailable_error,
    unimplemented_error,
    unknown_error,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("statusflow")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("statusflow").addHandler(logging.NullHandler())

__all__ = [
    "CONTINUE",
    "BadResultAccessError",
    "BuilderConsumedError",
    "CheckFailedError",
    "Config",
    "ConfigurationError",
    "ErrorBuilder",
    "MisuseError",
    "Propagate",
    "Status",
    "StatusCode",
    "StatusOr",
    "StatusflowError",
    "Success",
    "aborted_error",
    "already_exists_error",
    "assign_or_return",
    "cancelled_error",
    "check",
    "check_ok",
    "current_config",
    "data_loss_error",
    "deadline_exceeded_error",
    "failed_precondition_error",
    "if_error",
    "internal_error",
    "invalid_argument_error",
    "not_found_error",
    "ok_status",
    "out_of_range_error",
    "permission_denied_error",
    "propagating",
    "reload_config",
    "resource_exhausted_error",
    "return_if_error",
    "unauthenticated_error",
    "unavailable_error",
    "unimplemented_error",
    "unknown_error",
    "use_config",
    "value_or_die",
]
