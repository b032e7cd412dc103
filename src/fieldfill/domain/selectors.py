"""Environment selector mini-language.

A selector picks one of several values depending on a looked-up key::

    envs|[key|]match1,value1[,b64]|match2,value2|...

- Without an explicit key (first part contains a comma) the implicit key
  ``EnvType`` is used and the first part is the first definition.
- The first definition's value is the fallback when nothing matches; when
  the key resolves to an empty string the first definition is selected.
- ``match,,<base64>`` returns the decoded payload on match.
- ``|,`` escapes a comma that follows a pipe, ``||`` escapes a pipe.

Malformed selectors return the input unchanged, so the annotation is used
as a literal default. Substitution is all-or-nothing.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Callable

SELECTOR_PREFIX = "envs|"
IMPLICIT_KEY = "EnvType"

_PIPE_COMMA_SENTINEL = "__orcomma__"
_PIPE_PIPE_SENTINEL = "__oror__"

Lookup = Callable[[str], str]


def _restore(text: str) -> str:
    text = text.replace(_PIPE_PIPE_SENTINEL, "|")
    return text.replace(_PIPE_COMMA_SENTINEL, ",")


def _decode_b64(payload: str) -> str | None:
    try:
        return base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None


def is_selector(text: str) -> bool:
    return text.startswith(SELECTOR_PREFIX)


def resolve_selector(text: str, lookup: Lookup, implicit_key: str = IMPLICIT_KEY) -> str:
    """Resolve selector *text* against *lookup*.

    Args:
        text: Annotation string. Anything without the ``envs|`` prefix is
            returned unchanged.
        lookup: Key lookup returning ``""`` for absent keys.
        implicit_key: Key used when the selector names none.
    """
    if not is_selector(text):
        return text
    body = text[len(SELECTOR_PREFIX) :]
    escaped = body.replace("|,", _PIPE_COMMA_SENTINEL).replace("||", _PIPE_PIPE_SENTINEL)
    result = _select(text, escaped.split("|"), lookup, implicit_key)
    if escaped != body:
        result = _restore(result)
    return result


def _select(original: str, parts: list[str], lookup: Lookup, implicit_key: str) -> str:
    if len(parts) < 2:
        return original

    key = parts[0]
    if "," in key:
        key = implicit_key
    else:
        parts = parts[1:]

    value = lookup(key)
    fallback = ""
    for index, part in enumerate(parts):
        fields = part.split(",")
        if len(fields) not in (2, 3):
            return original
        if index == 0:
            fallback = fields[1]
            if value == "":
                value = fields[0]
        if fields[0] != value:
            continue
        if len(fields) == 3:
            if fields[1] == "":
                decoded = _decode_b64(fields[2])
                if decoded is not None:
                    return decoded
            return original
        return fields[1]
    return fallback
