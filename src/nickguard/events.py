"""Inbound event variants, outbound commands and collaborator protocols."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol, runtime_checkable


@runtime_checkable
class Connection(Protocol):
    """Owner of the client's own nickname field."""

    def current_nickname(self) -> str:
        """Nickname the client currently holds."""
        ...

    def set_nickname(self, nickname: str) -> None:
        """Authoritative local update; sends nothing to the server."""
        ...


@dataclass(frozen=True)
class SetNickname:
    """Request a NICK change."""

    nickname: str


@dataclass(frozen=True)
class SendPrivateMessage:
    """Send a PRIVMSG body to a single target."""

    target: str
    text: str


OutboundCommand = SetNickname | SendPrivateMessage


@runtime_checkable
class OutboundQueue(Protocol):
    """Ordered sink of outbound commands, flushed by the host."""

    def enqueue(self, command: OutboundCommand) -> None:
        ...


_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class Notice:
    """NOTICE addressed to the client."""

    source: str
    text: str
    connection: Connection = field(repr=False, compare=False)

    @property
    def params(self) -> Mapping[str, str]:
        return MappingProxyType({"text": self.text})


@dataclass(frozen=True)
class Quit:
    """A user disconnected."""

    source: str
    connection: Connection = field(repr=False, compare=False)
    reason: str | None = None

    @property
    def params(self) -> Mapping[str, str]:
        return _EMPTY


@dataclass(frozen=True)
class Nick:
    """A user (possibly the client itself) changed nickname."""

    source: str
    new_nickname: str
    connection: Connection = field(repr=False, compare=False)

    @property
    def params(self) -> Mapping[str, str]:
        return MappingProxyType({"nickname": self.new_nickname})


@dataclass(frozen=True)
class NicknameInUse:
    """ERR_NICKNAMEINUSE (433) for a nickname the client tried to take."""

    source: str
    connection: Connection = field(repr=False, compare=False)
    nickname: str | None = None

    @property
    def params(self) -> Mapping[str, str]:
        if self.nickname is None:
            return _EMPTY
        return MappingProxyType({"nickname": self.nickname})


InboundEvent = Notice | Quit | Nick | NicknameInUse


def notice(source: str, text: str | None, connection: Connection) -> Notice:
    return Notice(source=source, text=text or "", connection=connection)


def quit(source: str, connection: Connection, *, reason: str | None = None) -> Quit:
    return Quit(source=source, connection=connection, reason=reason)


def nick_change(source: str, new_nickname: str, connection: Connection) -> Nick:
    return Nick(source=source, new_nickname=new_nickname, connection=connection)


def nickname_in_use(
    source: str,
    connection: Connection,
    *,
    nickname: str | None = None,
) -> NicknameInUse:
    return NicknameInUse(source=source, connection=connection, nickname=nickname)
