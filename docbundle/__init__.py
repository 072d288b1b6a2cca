"""docbundle: turn selected source files into generated Markdown documentation."""

__version__ = "0.1.0"
