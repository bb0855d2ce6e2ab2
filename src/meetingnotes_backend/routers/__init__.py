# Router modules are exported here for easier access.

from . import emails, health, summarize

__all__ = ["emails", "health", "summarize"]
