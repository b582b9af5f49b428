from enum import Enum

from clangd_cdb.models import ResolutionStatus


class UIStyle(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    DIM = "dim"
    WHITE = "white"


class SectionStyle(str, Enum):
    """Border style of each output section."""

    PROJECT = "blue"
    RULES = "cyan"
    DATABASES = "bright_cyan"
    COVERAGE = "magenta"
    WARNING = "yellow"
    ERROR = "red"


RESOLUTION_STATUS_STYLE = {
    ResolutionStatus.FOUND: UIStyle.GREEN.value,
    ResolutionStatus.NOT_FOUND: UIStyle.RED.value,
    ResolutionStatus.DISABLED: UIStyle.YELLOW.value,
}
