"""Dispatch of parsed IRC messages to the events a session listens for."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

CTCP_DELIMITER = "\x01"


class Event(enum.Enum):
    """Events a session can subscribe to."""

    NICK = "nick"
    QUIT = "quit"
    JOIN = "join"
    PART = "part"
    MODE = "mode"
    UMODE = "umode"
    TOPIC = "topic"
    KICK = "kick"
    CHANNEL = "channel"
    PRIVMSG = "privmsg"
    NOTICE = "notice"
    CHANNEL_NOTICE = "channel_notice"
    INVITE = "invite"
    CTCP_REQ = "ctcp_req"
    CTCP_REP = "ctcp_rep"
    CTCP_ACTION = "ctcp_action"
    DCC_REQUEST = "dcc_request"
    UNKNOWN = "unknown"


@dataclass
class ParserResult:
    """A parsed IRC line: the sender's nick and the command parameters."""

    nick: Optional[str] = None
    params: List[Optional[str]] = field(default_factory=list)

    @property
    def num_params(self) -> int:
        return len(self.params)


Callback = Callable[["Session", str, ParserResult], None]


class Session:
    """The client side of one IRC connection as seen by the command handlers."""

    def __init__(self, nick: str, writer: Optional[Callable[[str], None]] = None) -> None:
        self.nick = nick
        self.callbacks: Dict[Event, Callback] = {}
        self.sent: List[str] = []
        self._writer = writer

    def on(self, event: Event, callback: Callback) -> None:
        """Register ``callback`` for ``event``, replacing any earlier one."""
        self.callbacks[event] = callback

    def handles(self, event: Event) -> bool:
        return event in self.callbacks

    def emit(self, event: Event, command: str, result: ParserResult) -> bool:
        """Call the callback for ``event``; return whether there was one."""
        callback = self.callbacks.get(event)
        if callback is None:
            return False
        callback(self, command, result)
        return True

    def send_raw(self, line: str) -> None:
        """Send one raw line to the server."""
        if self._writer is not None:
            self._writer(line)
        else:
            self.sent.append(line)


Handler = Callable[[Session, str, ParserResult], None]


@dataclass(frozen=True)
class Command:
    """A known IRC command and the handler that processes it.

    A command without a handler is recognised but ignored.
    """

    name: str
    execute: Optional[Handler] = None


def _starts_with_nick(text: Optional[str], nick: str, ignore_case: bool = False) -> bool:
    if text is None:
        return False
    if ignore_case:
        return text.lower().startswith(nick.lower())
    return text.startswith(nick)


def _is_ctcp(text: Optional[str]) -> bool:
    return bool(text) and text[0] == CTCP_DELIMITER and text[-1] == CTCP_DELIMITER


def _ctcp_body(text: str) -> str:
    return text[1:-1] if len(text) >= 2 else ""


def _emitter(event: Event) -> Handler:
    def handle(session: Session, command: str, result: ParserResult) -> None:
        session.emit(event, command, result)

    return handle


def _ping(session: Session, command: str, result: ParserResult) -> None:
    if not result.params or result.params[0] is None:
        return
    session.send_raw(f"PONG {result.params[0]}")


def _nick(session: Session, command: str, result: ParserResult) -> None:
    if _starts_with_nick(result.nick, session.nick) and result.params:
        session.nick = result.params[0]
    session.emit(Event.NICK, command, result)


def _mode(session: Session, command: str, result: ParserResult) -> None:
    if result.params and _starts_with_nick(result.params[0], session.nick):
        result.params = [result.params[1] if len(result.params) > 1 else None]
        session.emit(Event.UMODE, command, result)
    else:
        session.emit(Event.MODE, command, result)


def _ctcp_request(session: Session, result: ParserResult) -> None:
    body = _ctcp_body(result.params[1])
    lowered = body.lower()
    if lowered.startswith("dcc "):
        result.params = [result.params[0], body]
        session.emit(Event.DCC_REQUEST, "DCC", result)
    elif lowered.startswith("action ") and session.handles(Event.CTCP_ACTION):
        result.params = [result.params[0], body[len("action "):]]
        session.emit(Event.CTCP_ACTION, "ACTION", result)
    else:
        result.params = [body]
        session.emit(Event.CTCP_REQ, "CTCP", result)


def _privmsg(session: Session, command: str, result: ParserResult) -> None:
    if result.num_params <= 1:
        return
    if _is_ctcp(result.params[1]):
        _ctcp_request(session, result)
    elif _starts_with_nick(result.params[0], session.nick, ignore_case=True):
        session.emit(Event.PRIVMSG, "PRIVMSG", result)
    else:
        session.emit(Event.CHANNEL, "CHANNEL", result)


def _notice(session: Session, command: str, result: ParserResult) -> None:
    params = result.params
    if len(params) > 1 and _is_ctcp(params[1]) and session.handles(Event.CTCP_REP):
        result.params = [_ctcp_body(params[1])]
        session.emit(Event.CTCP_REP, "CTCP", result)
    elif params and _starts_with_nick(params[0], session.nick, ignore_case=True):
        session.emit(Event.NOTICE, command, result)
    else:
        session.emit(Event.CHANNEL_NOTICE, command, result)


COMMANDS = (
    Command("PING", _ping),
    Command("NICK", _nick),
    Command("QUIT", _emitter(Event.QUIT)),
    Command("JOIN", _emitter(Event.JOIN)),
    Command("PART", _emitter(Event.PART)),
    Command("MODE", _mode),
    Command("TOPIC", _emitter(Event.TOPIC)),
    Command("KICK", _emitter(Event.KICK)),
    Command("PRIVMSG", _privmsg),
    Command("NOTICE", _notice),
    Command("INVITE", _emitter(Event.INVITE)),
    # Not all servers generate KILL, so it is recognised and ignored.
    Command("KILL"),
)

UNKNOWN_COMMAND = Command("UNKNOWN", _emitter(Event.UNKNOWN))


def get_command(name: str) -> Command:
    """Return the first known command whose name begins with ``name``.

    An empty or unmatched name gives the UNKNOWN command.
    """
    if not name:
        return UNKNOWN_COMMAND
    return next((cmd for cmd in COMMANDS if cmd.name.startswith(name)), UNKNOWN_COMMAND)


def dispatch(session: Session, command: str, result: ParserResult) -> Command:
    """Run the handler for ``command`` and return the command that handled it."""
    handler = get_command(command)
    if handler.execute is not None:
        handler.execute(session, command, result)
    return handler