"""IRC host integration."""

from nickguard.adapters.irc import IRCService, NickGuardClient, PydleConnection
from nickguard.adapters.throttle import TokenBucket

__all__ = ["IRCService", "NickGuardClient", "PydleConnection", "TokenBucket"]
