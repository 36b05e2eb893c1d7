"""Exit codes of the carrier tool.

    0   success (also for an unknown mode, which is only reported)
    1   fatal exit / unexpected error
    2   invalid command-line arguments
    3   carrier rows were not created in time
    4   element could not be opened
    5   forced abort (SIGTERM)
    6   run timeout
    130 interrupted (Ctrl-C)
"""


class ExitCode:
    SUCCESS: int = 0
    GENERAL_ERROR: int = 1
    INVALID_ARGS: int = 2
    ROWS_NOT_CREATED: int = 3
    ELEMENT_UNAVAILABLE: int = 4
    FORCE_ABORT: int = 5
    TIMEOUT: int = 6
    INTERRUPTED: int = 130

    @classmethod
    def message(cls, code: int) -> str:
        messages = {
            cls.SUCCESS: "Success",
            cls.GENERAL_ERROR: "General error",
            cls.INVALID_ARGS: "Invalid arguments",
            cls.ROWS_NOT_CREATED: "Carrier rows not created",
            cls.ELEMENT_UNAVAILABLE: "Element unavailable",
            cls.FORCE_ABORT: "Forced abort",
            cls.TIMEOUT: "Run timeout",
            cls.INTERRUPTED: "Interrupted",
        }
        return messages.get(code, f"Unknown exit code {code}")
