"""infracascade: infrastructure dependency cascade engine."""

__version__ = "0.4.0"
