"""Provenance records for embedded images and text chunks."""
from __future__ import annotations

import os
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .chunking import split_lines
from .errors import InputReadError
from .models import ImageMetadata, TextChunk, TextChunkMetadata

PREVIEW_CHARS = 100
PREVIEW_SUFFIX = "..."
UNKNOWN = "Unknown"

# Modes are labelled by the 8-bit layout they decode to: bilevel widens to
# grayscale, palettes and CMYK/YCbCr expand to RGB. Deeper modes stay Unknown.
_COLOR_SPACES = {
    "1": "Grayscale",
    "L": "Grayscale",
    "LA": "GrayscaleAlpha",
    "La": "GrayscaleAlpha",
    "P": "RGB",
    "PA": "RGBA",
    "RGB": "RGB",
    "CMYK": "RGB",
    "YCbCr": "RGB",
    "RGBA": "RGBA",
    "RGBa": "RGBA",
}

_FORMAT_NAMES = {
    "PNG": "Png",
    "JPEG": "Jpeg",
    "GIF": "Gif",
    "WEBP": "WebP",
    "PPM": "Pnm",
    "TIFF": "Tiff",
    "TGA": "Tga",
    "DDS": "Dds",
    "BMP": "Bmp",
    "ICO": "Ico",
    "HDR": "Hdr",
    "QOI": "Qoi",
    "AVIF": "Avif",
}


def color_space_for_mode(mode: str, has_transparency: bool = False) -> str:
    """Map a Pillow image mode to the label used in the output metadata."""

    if mode == "P" and has_transparency:
        return "RGBA"
    return _COLOR_SPACES.get(mode, UNKNOWN)


def format_name(pillow_format: str | None) -> str:
    """Spell a Pillow format identifier the way the output records it (``Png``, ``Jpeg``)."""

    if not pillow_format:
        return UNKNOWN
    return _FORMAT_NAMES.get(pillow_format, pillow_format.capitalize())


def get_image_metadata(path: str) -> ImageMetadata:
    """Read size, dimensions, colour space and container format for an image.

    The format is the one Pillow identifies from the file's leading bytes, not
    from its extension.
    """

    file_name = Path(path).name
    try:
        file_size = os.stat(path).st_size
        with Image.open(path) as image:
            dimensions = (int(image.width), int(image.height))
            color_space = color_space_for_mode(image.mode, "transparency" in image.info)
            image_format = format_name(image.format)
    except UnidentifiedImageError as error:
        raise InputReadError(f"Failed to decode image: {path}", cause=error) from error
    except OSError as error:
        raise InputReadError(f"Failed to read image: {path}", cause=error) from error

    return ImageMetadata(
        label=file_name,
        file_path=path,
        file_name=file_name,
        file_size=file_size,
        image_format=image_format,
        dimensions=dimensions,
        color_space=color_space,
    )


def reconstruct_chunk_text(content: str, start_line: int, end_line: int) -> str:
    """Return source lines ``[start_line, end_line)``, clipped to the content."""

    return "\n".join(split_lines(content)[start_line:end_line])


def make_preview(text: str) -> str:
    return text[:PREVIEW_CHARS] + PREVIEW_SUFFIX


def get_file_metadata(path: str, content: str, chunk: TextChunk) -> TextChunkMetadata:
    file_name = Path(path).name
    preview = make_preview(reconstruct_chunk_text(content, chunk.start_line, chunk.end_line))
    return TextChunkMetadata(
        label=f"{file_name}_part{chunk.index}",
        file_path=path,
        file_name=file_name,
        chunk_index=chunk.index,
        start_line=chunk.start_line,
        end_line=chunk.end_line,
        content_preview=preview,
    )
