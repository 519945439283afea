"""SQL identifier helpers: validity checks, table aliases, join alias scanning."""

from rowfields.config.constants import TABLE_ALIAS_PREFIX


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_ident_char(ch: str) -> bool:
    return ch == "_" or ch.isalnum()


def is_valid_identifier(token: str | None) -> bool:
    """True for a bare SQL identifier: letter or underscore, then letters, digits, underscores."""
    if not token or not _is_ident_start(token[0]):
        return False
    return all(_is_ident_char(ch) for ch in token[1:])


def table_alias(index: int) -> str:
    """Positional table alias: 0 -> "T0", 1 -> "T1"."""
    if index < 0:
        raise ValueError(f"Table alias index must be non-negative, got {index}")
    return f"{TABLE_ALIAS_PREFIX}{index}"


def _read_identifier(text: str, pos: int) -> tuple[str | None, int]:
    """Read a bare or [bracketed] identifier starting at ``pos``.

    Returns the identifier (None if there is none at ``pos``) and the end position.
    """
    length = len(text)
    if pos >= length:
        return None, pos
    if text[pos] == "[":
        end = text.find("]", pos + 1)
        if end < 0:
            return None, length
        name = text[pos + 1 : end]
        return (name or None), end + 1
    if not _is_ident_start(text[pos]):
        return None, pos
    end = pos + 1
    while end < length and _is_ident_char(text[end]):
        end += 1
    return text[pos:end], end


def locate_join_aliases(expression: str) -> set[str]:
    """Find join aliases referenced as ``alias.column`` in an SQL expression.

    Quoted literals are skipped. For chains like ``a.b.c`` only the first
    segment is an alias. Numeric literals such as ``1.5`` are not identifiers
    and never match.
    """
    aliases: set[str] = set()
    length = len(expression)
    pos = 0
    while pos < length:
        ch = expression[pos]

        if ch in ("'", '"'):
            # SQL doubles the quote char to escape it, which this loop handles
            # as two adjacent literals.
            end = expression.find(ch, pos + 1)
            pos = length if end < 0 else end + 1
            continue

        if ch == "[" or _is_ident_start(ch):
            name, end = _read_identifier(expression, pos)
            if name is None:
                pos = end if end > pos else pos + 1
                continue
            if end < length and expression[end] == ".":
                target, after = _read_identifier(expression, end + 1)
                if target is not None:
                    aliases.add(name)
                    # skip the rest of the dotted chain
                    end = after
                    while end < length and expression[end] == ".":
                        target, after = _read_identifier(expression, end + 1)
                        if target is None:
                            break
                        end = after
            pos = end
            continue

        if ch.isdigit():
            # numeric literal, including decimals and exponents
            end = pos + 1
            while end < length and (expression[end].isalnum() or expression[end] in "._"):
                end += 1
            pos = end
            continue

        pos += 1
    return aliases
