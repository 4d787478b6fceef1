"""Request builders shared by the HTTP tests."""

import io

# A valid 1x1 PNG.
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06"
    b"\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\xff\xff?\x00\x05\xfe"
    b"\x02\xfe\xa7\x35\x81\x84\x00\x00\x00\x00IEND\xaeB`\x82"
)


def image_file(name: str = "poster.png", content: bytes = PNG_BYTES) -> dict:
    """Build the ``files`` argument of a multipart request."""
    return {"image": (name, io.BytesIO(content), "image/png")}


def show_form(
    title: str = "Alpha",
    description: str = "d",
    category: str = "movie",
) -> dict[str, str]:
    """Build the ``data`` argument of a form request."""
    return {"title": title, "description": description, "category": category}
