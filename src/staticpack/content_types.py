"""Content-type lookup for embedded assets.

A single ordered suffix table shared by the generator, the development
resolver and every generated artifact.
"""

CONTENT_TYPES: tuple[tuple[tuple[str, ...], str], ...] = (
    ((".png",), "image/png"),
    ((".svg",), "image/svg"),
    ((".jpg",), "image/jpg"),
    ((".css",), "text/css"),
    ((".js",), "application/js"),
    ((".eot",), "font/eot"),
    ((".ttf",), "font/ttf"),
    ((".woff", ".woff2"), "application/font-woff"),
    ((".html",), "text/html"),
)


def content_type(filename: str) -> str:
    """Return the MIME type for a file name, or an empty string.

    The first matching suffix wins.

    Args:
        filename: File name or path (e.g., "/css/app.css")

    Returns:
        MIME type string, empty when the suffix is unknown
    """
    for suffixes, mime_type in CONTENT_TYPES:
        if filename.endswith(suffixes):
            return mime_type
    return ""
