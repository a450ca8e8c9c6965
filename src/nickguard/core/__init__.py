"""Core primitives shared by config, handlers and adapters."""
