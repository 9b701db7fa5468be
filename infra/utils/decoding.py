def safe_decode(file_bytes: bytes) -> str:
    """Decode an uploaded source file, falling back through common encodings."""
    if file_bytes.startswith((b"\xff\xfe", b"\xfe\xff")):
        return file_bytes.decode("utf-16")
    for enc in ("utf-8-sig", "utf-8"):
        try:
            return file_bytes.decode(enc)
        except UnicodeDecodeError:
            continue
    return file_bytes.decode("latin-1")
