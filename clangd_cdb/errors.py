from pathlib import Path


class CdbError(Exception):
    """Base user-facing application error."""


class ConfigFileError(CdbError):
    def __init__(self, path: Path | str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MalformedConfigError(ConfigFileError):
    """A rule set could not be built from a config file."""


class ConfigUnreadableError(MalformedConfigError):
    def __init__(self, path: Path, detail: str | None = None) -> None:
        self.detail = detail
        message = "Cannot read config file"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(path=path, message=message)


class InvalidPatternError(MalformedConfigError):
    def __init__(self, path: Path | str, pattern: str, detail: str) -> None:
        self.pattern = pattern
        self.detail = detail
        super().__init__(path=path, message=f"Invalid pattern {pattern!r} ({detail})")


class InvalidCompilationDatabaseError(CdbError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid compilation database ({detail}): {path}")
