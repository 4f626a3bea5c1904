"""Recursive-descent parser for ICU Message Format strings.

Supported grammar::

    message   := (text | '#' | argument)*
    argument  := '{' name '}'
               | '{' name ',' ('number' | 'date' | 'time') [',' style] '}'
               | '{' name ',' ('plural' | 'selectordinal') ',' ['offset:' n] option+ '}'
               | '{' name ',' 'select' ',' option+ '}'
    option    := selector '{' message '}'

``#`` is a pound element only directly inside plural and selectordinal
branches. Apostrophes quote syntax characters the ICU way: ``''`` is a
literal quote and ``'{...}'`` is literal text. Tags are not part of the
grammar, ``<`` and ``>`` are plain text.
"""

from __future__ import annotations

import logging
import re
import threading
from collections import OrderedDict

from inline_i18n.message_ast import (
    ArgumentElement,
    DateElement,
    LiteralElement,
    MessageElement,
    NumberElement,
    NumberOptions,
    PluralElement,
    PoundElement,
    SelectElement,
    TimeElement,
)

_NAME = re.compile(r"[^\s{}#,'|]+")
_TYPE = re.compile(r"[A-Za-z]+")
_SELECTOR = re.compile(r"=-?\d+(?:\.\d+)?|[^\s{}]+")
_OFFSET = re.compile(r"offset:\s*(-?\d+)")
_FRACTION = re.compile(r"^\.(0*)(#*)$")
_WHITESPACE = " \t\r\n"

Message = tuple[MessageElement, ...]


class MessageSyntaxError(ValueError):
    """Raised when a template is not valid ICU Message Format."""

    def __init__(self, message: str, template: str, position: int):
        super().__init__(f"{message} at position {position} in {template!r}")
        self.template = template
        self.position = position


class MessageParser:
    """
    Parses one template into a tuple of message elements.

    Args:
        template: ICU message string
    """

    __slots__ = ("_text", "_pos")

    def __init__(self, template: str):
        self._text = template
        self._pos = 0

    def parse(self) -> Message:
        elements = self._parse_message(in_plural=False, nested=False)
        return tuple(elements)

    def _error(self, message: str) -> MessageSyntaxError:
        return MessageSyntaxError(message, self._text, self._pos)

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _skip_whitespace(self):
        while self._pos < len(self._text) and self._text[self._pos] in _WHITESPACE:
            self._pos += 1

    def _expect(self, char: str):
        self._skip_whitespace()
        if self._peek() != char:
            found = self._peek() or "end of message"
            raise self._error(f"expected {char!r} but found {found!r}")
        self._pos += 1

    def _match(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        match = pattern.match(self._text, self._pos)
        if match:
            self._pos = match.end()
        return match

    def _parse_message(self, in_plural: bool, nested: bool) -> list[MessageElement]:
        elements: list[MessageElement] = []
        buffer: list[str] = []

        def flush():
            if buffer:
                elements.append(LiteralElement("".join(buffer)))
                buffer.clear()

        while self._pos < len(self._text):
            char = self._text[self._pos]
            if char == "{":
                flush()
                elements.append(self._parse_argument())
            elif char == "}":
                if nested:
                    break
                raise self._error("unmatched closing brace")
            elif char == "#" and in_plural:
                flush()
                elements.append(PoundElement())
                self._pos += 1
            elif char == "'":
                buffer.append(self._parse_quoted(in_plural))
            else:
                buffer.append(char)
                self._pos += 1

        flush()
        return elements

    def _parse_quoted(self, in_plural: bool) -> str:
        following = self._text[self._pos + 1:self._pos + 2]
        if following == "'":
            self._pos += 2
            return "'"
        if not (following in ("{", "}") or (following == "#" and in_plural)):
            self._pos += 1
            return "'"

        # Quoted run lasts until the next lone apostrophe or the end of the message
        self._pos += 1
        chars = []
        while self._pos < len(self._text):
            char = self._text[self._pos]
            if char == "'":
                if self._text[self._pos + 1:self._pos + 2] == "'":
                    chars.append("'")
                    self._pos += 2
                    continue
                self._pos += 1
                break
            chars.append(char)
            self._pos += 1
        return "".join(chars)

    def _parse_argument(self) -> MessageElement:
        self._pos += 1
        self._skip_whitespace()

        name_match = self._match(_NAME)
        if not name_match:
            raise self._error("expected argument name")
        name = name_match.group()

        self._skip_whitespace()
        if self._peek() == "}":
            self._pos += 1
            return ArgumentElement(name)

        self._expect(",")
        self._skip_whitespace()
        type_match = self._match(_TYPE)
        if not type_match:
            raise self._error("expected argument type")
        arg_type = type_match.group()

        if arg_type in ("number", "date", "time"):
            return self._parse_formatted(name, arg_type)
        if arg_type in ("plural", "selectordinal"):
            return self._parse_plural(name, "ordinal" if arg_type == "selectordinal" else "cardinal")
        if arg_type == "select":
            self._expect(",")
            options = self._parse_options(plural=False)
            self._expect("}")
            return SelectElement(name, options)

        self._pos = type_match.start()
        raise self._error(f"invalid argument type {arg_type!r}")

    def _parse_formatted(self, name: str, arg_type: str) -> MessageElement:
        self._skip_whitespace()
        style = None
        if self._peek() == ",":
            self._pos += 1
            end = self._text.find("}", self._pos)
            if end < 0:
                self._pos = len(self._text)
                raise self._error("unterminated argument")
            style = self._text[self._pos:end].strip()
            if "{" in style:
                raise self._error("unexpected '{' in argument style")
            if not style:
                raise self._error("expected argument style")
            self._pos = end
        self._expect("}")

        skeleton = style[2:].strip() if style and style.startswith("::") else None
        if arg_type == "number":
            if skeleton is not None:
                return NumberElement(name, options=parse_number_skeleton(skeleton))
            return NumberElement(name, style)
        if arg_type == "date":
            return DateElement(name, None if skeleton is not None else style, skeleton)
        return TimeElement(name, None if skeleton is not None else style, skeleton)

    def _parse_plural(self, name: str, plural_type: str) -> PluralElement:
        self._expect(",")
        self._skip_whitespace()
        offset = 0
        if self._text.startswith("offset", self._pos):
            offset_match = self._match(_OFFSET)
            if not offset_match:
                raise self._error("invalid plural offset")
            offset = int(offset_match.group(1))
        options = self._parse_options(plural=True)
        self._expect("}")
        return PluralElement(name, options, offset, plural_type)

    def _parse_options(self, plural: bool) -> dict[str, Message]:
        options: dict[str, Message] = {}
        while True:
            self._skip_whitespace()
            if self._peek() in ("}", ""):
                break
            selector_match = self._match(_SELECTOR)
            if not selector_match:
                raise self._error("expected option selector")
            selector = selector_match.group()
            if selector in options:
                raise self._error(f"duplicate option selector {selector!r}")
            self._expect("{")
            branch = self._parse_message(in_plural=plural, nested=True)
            self._expect("}")
            options[selector] = tuple(branch)

        if not options:
            raise self._error("expected at least one option")
        return options


def parse_number_skeleton(skeleton: str) -> NumberOptions:
    """
    Translate an ICU number skeleton into :class:`NumberOptions`.

    >>> parse_number_skeleton("currency/EUR .00").currency
    'EUR'
    """
    style = "decimal"
    currency = None
    compact_display = None
    minimum_fraction_digits = None
    maximum_fraction_digits = None
    use_grouping = True

    for token in skeleton.split():
        if token in ("percent", "%"):
            style = "percent"
        elif token.startswith("currency/"):
            style = "currency"
            currency = token.split("/", 1)[1].upper()
        elif token in ("compact-short", "K"):
            style, compact_display = "compact", "short"
        elif token in ("compact-long", "KK"):
            style, compact_display = "compact", "long"
        elif token in ("precision-integer", "integer"):
            minimum_fraction_digits = maximum_fraction_digits = 0
        elif token in ("group-off", ",_"):
            use_grouping = False
        elif fraction := _FRACTION.match(token):
            minimum_fraction_digits = len(fraction.group(1))
            maximum_fraction_digits = minimum_fraction_digits + len(fraction.group(2))
        else:
            logging.debug("Ignoring unsupported number skeleton token '%s'", token)

    return NumberOptions(
        style=style,
        currency=currency,
        compact_display=compact_display,
        minimum_fraction_digits=minimum_fraction_digits,
        maximum_fraction_digits=maximum_fraction_digits,
        use_grouping=use_grouping,
    )


def parse_message(template: str) -> Message:
    """
    Parse an ICU message.

    Raises:
        MessageSyntaxError: If the template is not valid ICU Message Format
    """
    return MessageParser(template).parse()


class ParseCache:
    """Bounded template -> parsed message cache with FIFO eviction."""

    __slots__ = ("_entries", "_max_size", "_lock")

    def __init__(self, max_size: int = 500):
        if max_size < 0:
            raise ValueError("max_size must be zero or a positive integer")
        self._entries: OrderedDict[str, Message] = OrderedDict()
        self._max_size = max_size
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, template: object) -> bool:
        return template in self._entries

    def resize(self, max_size: int):
        if max_size < 0:
            raise ValueError("max_size must be zero or a positive integer")
        with self._lock:
            self._max_size = max_size
            while len(self._entries) > max_size:
                self._entries.popitem(last=False)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def get_or_parse(self, template: str) -> Message:
        if self._max_size == 0:
            return parse_message(template)

        with self._lock:
            cached = self._entries.get(template)
        if cached is not None:
            return cached

        parsed = parse_message(template)
        with self._lock:
            if self._max_size and template not in self._entries:
                while len(self._entries) >= self._max_size:
                    self._entries.popitem(last=False)
                self._entries[template] = parsed
        return parsed


__all__ = [
    "Message",
    "MessageParser",
    "MessageSyntaxError",
    "ParseCache",
    "parse_message",
    "parse_number_skeleton",
]
