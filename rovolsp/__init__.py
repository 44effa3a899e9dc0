"""Code actions, doc-section helpers and documentation lookup for Rovo-annotated handlers."""

__version__ = "0.2.1"