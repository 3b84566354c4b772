"""pseudolang - editor tooling for the pseudo description language."""

__version__ = "0.1.0"
