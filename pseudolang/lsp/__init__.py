"""
LSP server for pseudo description files.

This module provides:
- LSP server for VSCode and other LSP clients
- Real-time structural diagnostics
- Context-aware keyword completion
"""

from .server import PseudoLanguageServer, create_server, start_server

__all__ = ["PseudoLanguageServer", "create_server", "start_server"]
