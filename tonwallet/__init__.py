"""Models and in-memory services for a TON wallet API: addresses, records, events, authentication, settings and per-account locks."""

__version__ = "0.1.0"