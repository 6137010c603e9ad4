"""Core shared contracts and utilities."""

from core.errors import (
    ConfigValidationError,
    GoSyntaxError,
    NothingToGenerateError,
    ScaneoError,
    TargetError,
)
from core.structured_logging import (
    configure_structured_logging,
    get_phase,
    get_run_id,
    phase_scope,
    resolve_log_level,
    set_run_id,
)
from core.scan_config import (
    ScanConfig,
    load_scan_config,
    merge_cli_overrides,
)

__version__ = "1.2.0"

__all__ = [
    "__version__",
    "ConfigValidationError",
    "GoSyntaxError",
    "NothingToGenerateError",
    "ScaneoError",
    "TargetError",
    "configure_structured_logging",
    "get_phase",
    "get_run_id",
    "phase_scope",
    "resolve_log_level",
    "set_run_id",
    "ScanConfig",
    "load_scan_config",
    "merge_cli_overrides",
]
