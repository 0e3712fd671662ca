"""OpsRunner: a browser console for catalogued operational scripts."""

__version__ = "0.1.0"
