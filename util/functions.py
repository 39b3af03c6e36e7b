# util/functions.py
def count_words(text: str) -> int:
    """Whitespace-delimited token count."""
    return len(text.split())


def clip_chars(text: str, max_chars: int = 300) -> str:
    """
    - Trim 'text' to at most `max_chars` characters.
    - No ellipsis: the excerpt is a verbatim prefix of the chunk.
    """
    return text if len(text) <= max_chars else text[:max_chars]
