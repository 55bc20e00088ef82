"""Process exit codes used by CLI commands."""

SYSTEM_EXIT_CODE = 1
VALIDATION_EXIT_CODE = 2
ACQUISITION_EXIT_CODE = 3

__all__ = ["SYSTEM_EXIT_CODE", "VALIDATION_EXIT_CODE", "ACQUISITION_EXIT_CODE"]
