"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class ContractError(PipelineError):
    """Raised when exported outputs or report counts break their contract."""

    error_code = "CONTRACT_ERROR"


class StageError(PipelineError):
    """Raised for missing inputs or unreadable sources; halts in strict mode."""

    error_code = "STAGE_ERROR"
