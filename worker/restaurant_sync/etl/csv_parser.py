"""Minimal CSV lexer for published Google Sheets exports.

Handles quoted fields, embedded commas/newlines and doubled quotes. It never
raises: an unterminated quote simply runs to the end of the input.
"""

from typing import List


def parse_csv(text: str) -> List[List[str]]:
    rows: List[List[str]] = []
    row: List[str] = []
    field: List[str] = []
    in_quotes = False

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if in_quotes:
            if char == '"' and i + 1 < length and text[i + 1] == '"':
                field.append('"')
                i += 1
            elif char == '"':
                in_quotes = False
            else:
                field.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ",":
            row.append("".join(field))
            field = []
        elif char == "\n":
            row.append("".join(field))
            rows.append(row)
            row = []
            field = []
        elif char == "\r":
            pass
        else:
            field.append(char)

        i += 1

    # Flush a final row that has no trailing newline.
    if field or row:
        row.append("".join(field))
        rows.append(row)

    return rows
