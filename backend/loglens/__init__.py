"""LogLens: error and warning analysis for multi-line text logs."""

__version__ = "1.0.0"
