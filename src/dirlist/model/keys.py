"""Composite model keys built from an authority and a document id.

Document ids are only unique within the provider (authority) that issued them,
so a listing merged from several providers needs a key that folds both in.

Each field is escaped (``\\`` becomes ``\\\\`` and ``|`` becomes ``\\|``) and the
two escaped fields are joined by a single unescaped ``|``. An escaped field can
never contain an unescaped separator, so every key splits back into exactly
one ``(authority, document_id)`` pair and distinct pairs never share a key.
"""

from __future__ import annotations

KEY_SEPARATOR = "|"
ESCAPE_CHAR = "\\"


def _escape(value: str) -> str:
    return value.replace(ESCAPE_CHAR, ESCAPE_CHAR * 2).replace(
        KEY_SEPARATOR, ESCAPE_CHAR + KEY_SEPARATOR
    )


def encode_key(authority: str, document_id: str) -> str:
    """Build the model key for a document.

    Args:
        authority: Identifier of the provider the row came from.
        document_id: Provider-local document identifier.

    Returns:
        A key that is unique across providers.
    """
    return f"{_escape(authority)}{KEY_SEPARATOR}{_escape(document_id)}"


def decode_key(key: str) -> tuple[str, str]:
    """Split a model key back into ``(authority, document_id)``.

    Args:
        key: A key produced by :func:`encode_key`.

    Returns:
        The original ``(authority, document_id)`` pair.

    Raises:
        ValueError: If the key has a dangling escape, an unknown escape
            sequence, or not exactly one unescaped separator.
    """
    fields: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(key):
        ch = key[i]
        if ch == ESCAPE_CHAR:
            if i + 1 >= len(key):
                raise ValueError(f"Dangling escape in model key: {key!r}")
            nxt = key[i + 1]
            if nxt not in (ESCAPE_CHAR, KEY_SEPARATOR):
                raise ValueError(f"Unknown escape sequence in model key: {key!r}")
            current.append(nxt)
            i += 2
            continue
        if ch == KEY_SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current))

    if len(fields) != 2:
        raise ValueError(f"Model key must contain exactly one separator: {key!r}")
    return fields[0], fields[1]
