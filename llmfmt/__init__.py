"""Tools for the .llm prompt format: diagnostics, document model, lexer, formatter and include resolution."""

__version__ = "0.1.0"

__all__ = ["ast", "diagnostics", "formatter", "include", "lexer"]