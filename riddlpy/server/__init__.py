"""LSP host adapter."""

from riddlpy.server.server import RiddlLanguageServer, main, server

__all__ = ["RiddlLanguageServer", "main", "server"]
