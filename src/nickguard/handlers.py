"""NickServ event handlers: identify, ghost recovery, nickname tracking."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from loguru import logger

from nickguard.classifier import NoticeIntent, classify_notice, is_identified_confirmation
from nickguard.config.session import SessionConfig
from nickguard.events import (
    InboundEvent,
    Nick,
    NicknameInUse,
    Notice,
    OutboundQueue,
    Quit,
    SendPrivateMessage,
    SetNickname,
)
from nickguard.identity import IdentityTracker

Handler = Callable[[InboundEvent, OutboundQueue], None]


class NickServHandlers:
    """Reacts to NickServ-relevant events for any number of connections.

    Holds only the shared, read-only SessionConfig. Identity state is read
    from and written to each event's own connection, so one instance may
    serve several connections as long as the host dispatches each
    connection's events serially.
    """

    def __init__(self, config: SessionConfig) -> None:
        self._config = config

    @property
    def config(self) -> SessionConfig:
        return self._config

    def _tracker(self, evt: InboundEvent) -> IdentityTracker:
        return IdentityTracker(evt.connection, self._config)

    def handle_notice(self, evt: Notice, queue: OutboundQueue) -> None:
        """Identify on request; reclaim the nickname once its ghost is gone."""
        agent = self._config.agent
        intent = classify_notice(evt.source, evt.text, agent)
        if intent is NoticeIntent.AUTH_REQUEST:
            desired = self._tracker(evt).desired_nickname
            logger.info("{} requested identification for {}", agent, desired)
            queue.enqueue(
                SendPrivateMessage(agent, f"IDENTIFY {desired} {self._config.password}")
            )
        elif intent is NoticeIntent.GHOST_NOTIFICATION:
            desired = self._tracker(evt).desired_nickname
            logger.info("{} ghosted {}; reclaiming nickname", agent, desired)
            queue.enqueue(SetNickname(desired))
        elif is_identified_confirmation(evt.source, evt.text, agent):
            logger.info("Identified with {}", agent)

    def handle_quit(self, evt: Quit, queue: OutboundQueue) -> None:
        """Take the protected nickname when its holder disconnects."""
        tracker = self._tracker(evt)
        if not tracker.is_desired(evt.source):
            return
        logger.info("{} quit; claiming nickname", evt.source)
        queue.enqueue(SetNickname(tracker.desired_nickname))

    def handle_nick(self, evt: Nick, queue: OutboundQueue) -> None:
        """Record a server-confirmed switch to the protected nickname.

        Writes to the connection directly; the queue is never touched.
        """
        tracker = self._tracker(evt)
        desired = tracker.desired_nickname
        if evt.source != desired or evt.new_nickname != desired:
            return
        tracker.set_nickname(desired)
        logger.debug("Nickname confirmed by server: {}", desired)

    def handle_nickname_in_use(self, evt: NicknameInUse, queue: OutboundQueue) -> None:
        """Switch to a fallback nickname, then ask the agent to ghost the holder.

        The fallback must be queued first: the GHOST request is sent under it.
        """
        tracker = self._tracker(evt)
        desired = tracker.desired_nickname
        fallback = tracker.fallback_nickname
        logger.warning("Nickname {} in use; falling back to {}", desired, fallback)
        queue.enqueue(SetNickname(fallback))
        if not self._config.ghost:
            return
        agent = self._config.agent
        queue.enqueue(SendPrivateMessage(agent, f"GHOST {desired} {self._config.password}"))
        logger.info("Asked {} to ghost {}", agent, desired)

    def dispatch_table(self) -> Mapping[type, Handler]:
        """Explicit event type -> handler mapping."""
        return {
            Notice: self.handle_notice,
            Quit: self.handle_quit,
            Nick: self.handle_nick,
            NicknameInUse: self.handle_nickname_in_use,
        }

    def dispatch(self, evt: object, queue: OutboundQueue) -> None:
        """Route evt to its handler; unknown event types are ignored."""
        handler = self.dispatch_table().get(type(evt))
        if handler is None:
            logger.debug("No handler for {}", type(evt).__name__)
            return
        handler(evt, queue)
