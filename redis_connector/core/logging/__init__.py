from .logger import (
    clear_execution_id,
    get_execution_id,
    get_logger,
    log_command,
    log_stage,
    set_execution_id,
    setup_logging,
)

__all__ = [
    "clear_execution_id",
    "get_execution_id",
    "get_logger",
    "log_command",
    "log_stage",
    "set_execution_id",
    "setup_logging",
]
