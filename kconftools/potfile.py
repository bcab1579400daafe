"""Collection of translatable strings into a gettext message catalogue."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

_CONTINUATION = '"\n"'


def escape(text: str) -> str:
    """Quote text as a gettext string literal, splitting it at newlines."""
    multiline = "\n" in text
    parts = ['"']
    if multiline:
        parts.append(_CONTINUATION)
    for ch in text:
        if ch == '"':
            parts.append('\\"')
        elif ch == "\n":
            parts.append("\\n" + _CONTINUATION)
        elif ch == "\\":
            parts.append("\\\\")
        else:
            parts.append(ch)
    body = "".join(parts)
    if multiline and text.endswith("\n"):
        body = body[: -len(_CONTINUATION)]
    return body + '"'


@dataclass
class Message:
    """One catalogue entry: the quoted text and where it was found, newest first."""

    msg: str
    option: Optional[str] = None
    files: List[Tuple[str, int]] = field(default_factory=list)


class MessageCatalog:
    """Messages keyed by their quoted text, listed newest first."""

    def __init__(self) -> None:
        self._messages: List[Message] = []
        self._index: Dict[str, Message] = {}

    def add(self, msg: str, option: Optional[str], file: str, lineno: int) -> Message:
        """Record an occurrence of msg at file:lineno."""
        escaped = escape(msg)
        message = self._index.get(escaped)
        if message is None:
            message = Message(escaped, option, [(file, lineno)])
            self._index[escaped] = message
            self._messages.insert(0, message)
        else:
            message.files.insert(0, (file, lineno))
        return message

    def find(self, msg: str) -> Optional[Message]:
        """The entry for the unquoted text msg, if recorded."""
        return self._index.get(escape(msg))

    def render(self) -> str:
        """The catalogue as .pot text; empty messages are left out."""
        out: List[str] = []
        for message in self._messages:
            if len(message.msg) <= len('""') + 1:
                continue
            out.append("\n")
            if message.option is not None:
                out.append(f"# {message.option}:00000\n")
            refs = ", ".join(f"{name}:{line}" for name, line in message.files)
            out.append(f"#: {refs}\n")
            out.append(f'msgid {message.msg}\nmsgstr ""\n')
        return "".join(out)