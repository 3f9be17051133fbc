"""Live-streaming session building blocks: SQLite session storage, an expiring cache, a message bus and response envelopes."""

__version__ = "0.1.0"