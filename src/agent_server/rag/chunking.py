"""Character-based text chunking with sentence-aware cut points."""

DEFAULT_CHUNK_SIZE = 500
SENTENCE_TERMINATORS = frozenset("。！？.!?\n")


def split_text(text: str, chunk_size: int, chunk_overlap: int) -> list[str]:
    """Split text into overlapping chunks of at most ``chunk_size`` characters.

    Positions count characters (code points), not bytes. A window that does
    not reach the end of the text is cut right after the last sentence
    terminator found in its final 20%, or at its hard boundary when there is
    none. The next window starts ``chunk_overlap`` characters before the end
    of the previous one. Chunks are stripped and empty chunks dropped.

    Args:
        text: The text to split
        chunk_size: Maximum chunk length; values <= 0 fall back to 500
        chunk_overlap: Overlap between consecutive windows; values >= chunk_size
                       are clamped to chunk_size // 10

    Returns:
        list[str]: The chunks in text order
    """
    if chunk_size <= 0:
        chunk_size = DEFAULT_CHUNK_SIZE
    if chunk_overlap >= chunk_size:
        chunk_overlap = chunk_size // 10
    chunk_overlap = max(chunk_overlap, 0)

    length = len(text)
    if length <= chunk_size:
        chunk = text.strip()
        return [chunk] if chunk else []

    chunks: list[str] = []
    start = 0
    while start < length:
        end = min(start + chunk_size, length)

        if end < length:
            search_start = start + chunk_size * 4 // 5
            for i in range(end - 1, search_start, -1):
                if text[i] in SENTENCE_TERMINATORS:
                    end = i + 1
                    break

        chunk = text[start:end].strip()
        if chunk:
            chunks.append(chunk)

        if end >= length:
            break

        start = max(end - chunk_overlap, start + 1)

    return chunks
