"""IRC host: pydle client feeding NickServ handlers and flushing their commands."""

from __future__ import annotations

import asyncio
import contextlib
import random

import pydle
from loguru import logger

from nickguard.adapters.throttle import TokenBucket
from nickguard.config.schema import Config
from nickguard.events import (
    OutboundCommand,
    SendPrivateMessage,
    SetNickname,
    nick_change,
    nickname_in_use,
    notice,
    quit,
)
from nickguard.handlers import NickServHandlers
from nickguard.queue import CommandQueue

# Backoff: min 2s, max 60s, jitter
_BACKOFF_MIN = 2
_BACKOFF_MAX = 60
_MAX_ATTEMPTS = 10


async def _connect_with_backoff(
    client: pydle.Client,
    hostname: str,
    port: int,
    tls: bool,
) -> None:
    """Connect with exponential backoff and jitter on failure; reconnect on disconnect."""
    attempt = 0
    while True:
        try:
            await client.connect(hostname=hostname, port=port, tls=tls)
            # connect() returns when disconnected
            attempt = 0
            wait = _BACKOFF_MIN * random.uniform(0.5, 1.5)
            logger.info("IRC disconnected, reconnecting in {:.1f}s", wait)
            await asyncio.sleep(wait)
        except Exception as exc:
            attempt += 1
            if attempt >= _MAX_ATTEMPTS:
                logger.exception("IRC connect failed after {} attempts", _MAX_ATTEMPTS)
                raise
            delay = min(_BACKOFF_MAX, _BACKOFF_MIN * (2 ** (attempt - 1)))
            wait = delay * random.uniform(0.5, 1.5)
            logger.warning(
                "IRC connect failed (attempt {}): {}, retrying in {:.1f}s",
                attempt,
                exc,
                wait,
            )
            await asyncio.sleep(wait)


class PydleConnection:
    """Connection over a pydle client's own nickname attribute."""

    def __init__(self, client: pydle.Client) -> None:
        self._client = client

    def current_nickname(self) -> str:
        return self._client.nickname

    def set_nickname(self, nickname: str) -> None:
        self._client.nickname = nickname


class NickGuardClient(pydle.Client):
    """Pydle client that keeps its registered nickname with NickServ's help."""

    def __init__(
        self,
        handlers: NickServHandlers,
        nick: str,
        channels: list[str] | None = None,
        throttle_limit: int = 10,
        **kwargs,
    ):
        super().__init__(nick, **kwargs)
        self._handlers = handlers
        self._channels = channels or []
        self._connection = PydleConnection(self)
        self._commands = CommandQueue()
        self._throttle = TokenBucket(capacity=throttle_limit, rate=float(throttle_limit))
        self._consumer_task: asyncio.Task | None = None

    @property
    def commands(self) -> CommandQueue:
        return self._commands

    @property
    def handlers(self) -> NickServHandlers:
        return self._handlers

    @handlers.setter
    def handlers(self, handlers: NickServHandlers) -> None:
        self._handlers = handlers

    def _ensure_consumer(self) -> None:
        if self._consumer_task is None or self._consumer_task.done():
            self._consumer_task = asyncio.create_task(self._consume_commands())

    def _dispatch(self, evt: object) -> None:
        self._handlers.dispatch(evt, self._commands)
        if len(self._commands):
            self._ensure_consumer()

    async def on_connect(self):
        """After registration, join channels and start the consumer."""
        await super().on_connect()
        logger.info("IRC connected as {}", self.nickname)
        for channel in self._channels:
            await self.join(channel)
        self._ensure_consumer()

    async def on_notice(self, target, by, message):
        await super().on_notice(target, by, message)
        if target.startswith("#"):
            return
        evt = notice(by, message, self._connection)
        self._dispatch(evt)

    async def on_quit(self, user, message=None):
        await super().on_quit(user, message)
        evt = quit(user, self._connection, reason=message)
        self._dispatch(evt)

    async def on_nick_change(self, old, new):
        await super().on_nick_change(old, new)
        evt = nick_change(old, new, self._connection)
        self._dispatch(evt)

    async def on_raw_433(self, message):
        """ERR_NICKNAMEINUSE: recover the desired nickname, else let pydle cycle nicks.

        A 433 for any other nickname (the fallback included) goes to pydle so a
        taken fallback cannot restart the fallback/GHOST sequence.
        """
        params = getattr(message, "params", [])
        attempted = params[1] if len(params) > 1 else None
        desired = self._handlers.config.desired_nickname(self._connection)
        if attempted != desired:
            logger.debug("IRC: nickname {} in use, not the protected one", attempted)
            await super().on_raw_433(message)
            return
        source = getattr(message, "source", "") or ""
        evt = nickname_in_use(source, self._connection, nickname=attempted)
        self._dispatch(evt)

    async def _consume_commands(self) -> None:
        """Flush queued commands in order with token bucket throttling."""
        while True:
            try:
                command = await self._commands.get()
                await self._throttle.take()
                await self._send_command(command)
            except asyncio.CancelledError:
                break
            except Exception as exc:
                logger.exception("IRC send failed: {}", exc)

    async def _send_command(self, command: OutboundCommand) -> None:
        if isinstance(command, SetNickname):
            await self.rawmsg("NICK", command.nickname)
            logger.debug("IRC: sent NICK {}", command.nickname)
        elif isinstance(command, SendPrivateMessage):
            await self.message(command.target, command.text)
            logger.debug("IRC: sent PRIVMSG to {}", command.target)

    async def disconnect(self, expected=True):
        """Stop the consumer and drop commands meant for this session."""
        if self._consumer_task:
            self._consumer_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._consumer_task
            self._consumer_task = None
        dropped = self._commands.drain()
        if dropped:
            logger.debug("IRC: dropped {} unsent command(s) on disconnect", len(dropped))
        await super().disconnect(expected)


class IRCService:
    """Owns one NickGuardClient and its reconnect task."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._client: NickGuardClient | None = None
        self._task: asyncio.Task | None = None

    @property
    def client(self) -> NickGuardClient | None:
        return self._client

    async def start(self) -> None:
        """Start IRC connection."""
        config = self._config
        handlers = NickServHandlers(config.session())
        kwargs: dict = {}
        if config.irc_realname:
            kwargs["realname"] = config.irc_realname
        self._client = NickGuardClient(
            handlers,
            nick=config.irc_nick,
            channels=config.irc_channels,
            throttle_limit=config.irc_throttle_limit,
            **kwargs,
        )
        self._task = asyncio.create_task(
            _connect_with_backoff(
                self._client,
                hostname=config.irc_server,
                port=config.irc_port,
                tls=config.irc_tls,
            )
        )
        logger.info(
            "IRC connection started: {}:{} as {}",
            config.irc_server,
            config.irc_port,
            config.irc_nick,
        )

    def reload(self) -> None:
        """Rebuild handlers from the (reloaded) config; the connection is kept."""
        if self._client:
            self._client.handlers = NickServHandlers(self._config.session())
            logger.info("NickServ settings reloaded")

    async def stop(self) -> None:
        """Stop IRC connection."""
        if self._client:
            await self._client.disconnect()
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self._client = None
        self._task = None
