"""
Quote-aware splitting of a single delimited line.
"""

from __future__ import annotations

from typing import List

from .rules import DEFAULT_DELIMITER, QUOTE_CHAR


def parse_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """
    Split one line into trimmed fields.

    Rules:
    - Quote characters toggle the quoted state and are never kept.
    - Inside quotes, a doubled quote yields one literal quote.
    - The delimiter only separates fields outside quotes.
    - The trailing field is always emitted, so a line yields at least one field.
    - An unterminated quote is tolerated: the partial field is emitted as-is.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False

    i = 0
    n = len(line)
    while i < n:
        char = line[i]

        if char == QUOTE_CHAR:
            if in_quotes and i + 1 < n and line[i + 1] == QUOTE_CHAR:
                # escaped quote pair
                current.append(QUOTE_CHAR)
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

        i += 1

    fields.append("".join(current).strip())
    return fields
