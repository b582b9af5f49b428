from clangd_cdb.tui.renderers import ResolverConsoleUI

__all__ = ["ResolverConsoleUI"]
