"""Read writing samples from disk."""

from dataclasses import dataclass
from pathlib import Path
from zipfile import BadZipFile

from bs4 import BeautifulSoup

from storyverse.errors import ValidationError

TEXT_SUFFIXES = (".txt", ".md")

# utf-8-sig also reads plain utf-8 and drops a leading BOM
ENCODINGS = ("utf-8-sig", "cp1252")
FALLBACK_ENCODING = "latin-1"  # decodes any byte sequence


@dataclass
class LoadedSample:
    """Plain text of a sample file and the title it suggests."""
    title: str
    text: str


def title_from_path(path: Path) -> str:
    """Turn a file name like `chapter_one-draft.txt` into `Chapter One Draft`."""
    return path.stem.replace("_", " ").replace("-", " ").title()


def load_sample(path: Path) -> LoadedSample:
    """
    Load a writing sample from file.

    Supports:
    - .txt and .md files, titled after the file name
    - .epub files, titled from the book metadata when present

    Raises:
        ValidationError: unsupported suffix or unreadable EPUB
    """
    suffix = path.suffix.lower()

    if suffix in TEXT_SUFFIXES:
        return LoadedSample(title=title_from_path(path), text=decode_text(path.read_bytes()))
    if suffix == ".epub":
        return _load_epub(path)
    raise ValidationError(f"Unsupported file format: {suffix or path.name}")


def decode_text(raw: bytes) -> str:
    """Decode file bytes, trying common encodings before the latin-1 fallback."""
    for encoding in ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    return raw.decode(FALLBACK_ENCODING)


def html_to_text(html: bytes | str) -> str:
    """Visible text of an HTML document, one non-blank line per paragraph."""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup(["script", "style"]):
        element.decompose()

    lines = (line.strip() for line in soup.get_text(separator="\n").splitlines())
    return "\n".join(line for line in lines if line)


def _load_epub(path: Path) -> LoadedSample:
    import ebooklib
    from ebooklib import epub

    try:
        book = epub.read_epub(str(path))
    except (epub.EpubException, BadZipFile, KeyError) as e:
        raise ValidationError(f"Could not read EPUB {path.name}: {e}") from e

    chapters = [html_to_text(item.get_content()) for item in book.get_items_of_type(ebooklib.ITEM_DOCUMENT)]

    titles = book.get_metadata("DC", "title")
    title = titles[0][0] if titles and titles[0][0] else title_from_path(path)

    return LoadedSample(title=title, text="\n\n".join(c for c in chapters if c))
