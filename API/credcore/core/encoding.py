def to_utf8(text: str) -> bytes:
    """UTF-8 bytes for ``text`` with lone surrogates replaced by U+FFFD.

    Request bodies can carry unpaired surrogates (``json.loads('"\\ud800"')``).
    Surrogate pairs split across two code points are joined first.
    """
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace").encode("utf-8")
