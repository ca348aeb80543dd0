"""
User-visible notices (the app's alert dialogs).
"""

from dataclasses import dataclass

ERROR = "error"
SUCCESS = "success"
INFO = "info"


@dataclass(frozen=True)
class Notice:
    level: str
    title: str
    message: str

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(ERROR, "Error", message)

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(SUCCESS, "Success", message)

    @classmethod
    def info(cls, message: str) -> "Notice":
        return cls(INFO, "Info", message)
