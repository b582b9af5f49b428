from typing import Final


CONFIG_FILENAME: Final[str] = ".clangd"
COMPILE_COMMANDS_FILENAME: Final[str] = "compile_commands.json"
BUILD_DIRNAME: Final[str] = "build"

NONE_TOKEN: Final[str] = "none"
ANCESTORS_TOKEN: Final[str] = "ancestors"

PROJECT_ENVVAR: Final[str] = "CLANGD_CDB_PROJECT"
