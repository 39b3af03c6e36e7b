# core/json_extract.py
from typing import Optional


def extract_last_json_object(text: str) -> Optional[str]:
    """
    Return the last complete top-level {...} span in `text`, or None.
    Tolerates code fences and prose around the object, and a truncated
    trailing object (it is skipped). Braces inside JSON strings are ignored.
    """
    last: Optional[str] = None
    depth = 0
    start = -1
    in_str = False
    escaped = False

    for i, ch in enumerate(text):
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue

        if ch == '"':
            # quotes outside any object are prose, not JSON strings
            if depth > 0:
                in_str = True
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                last = text[start : i + 1]

    return last
