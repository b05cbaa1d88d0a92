"""smithywire — Smithy model build wiring for host build projects."""

__version__ = "0.1.0"
