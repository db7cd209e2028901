# topmark:header:start
#
#   project      : KubeHello
#   file         : documents.py
#   file_relpath : src/kubehello/resource/documents.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load JSON/YAML documents from files, directories, URLs, stdin and overlays.

`DocumentLoader.load` yields one `RawDocument` per parsed document and a
`ResolutionError` for every input that could not be read or parsed. It never
raises for a bad input: the caller decides what an error means for the batch.

Parsing rules:
    - ``-`` reads the injected stdin stream; it can only be consumed once.
    - ``http://`` and ``https://`` names are fetched with `httpx`.
    - A regular file is parsed whatever its extension.
    - A directory holding a kustomization file is rendered as an overlay;
      otherwise its ``.json``/``.yaml``/``.yml`` files are read in sorted order,
      descending into subdirectories only when ``recursive`` is set.
    - Empty YAML documents are skipped.
    - ``*List`` documents with an ``items`` array are flattened, recursively.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

import httpx
import yaml

from kubehello.config.logging import get_logger
from kubehello.constants import DEFAULT_TIMEOUT, MANIFEST_EXTENSIONS, STDIN_SOURCE
from kubehello.core.errors import ResolutionError
from kubehello.resource.kustomize import OverlayRenderer, find_kustomization
from kubehello.resource.model import RawDocument, SpecifierKind

if TYPE_CHECKING:
    from collections.abc import Iterator

    from kubehello.config.logging import KubehelloLogger
    from kubehello.resource.model import ResourceSpecifier

logger: KubehelloLogger = get_logger(__name__)

_WHITESPACE: re.Pattern[str] = re.compile(r"\s*")


def is_url(name: str) -> bool:
    """Return True if ``name`` is an http(s) URL."""
    return name.startswith(("http://", "https://"))


def _looks_like_json(text: str) -> bool:
    return text.lstrip().startswith(("{", "["))


def flatten(data: Any, source: str) -> Iterator[RawDocument]:
    """Expand ``*List`` documents into their items, preserving order."""
    if isinstance(data, dict):
        kind: Any = data.get("kind")
        items: Any = data.get("items")
        if isinstance(kind, str) and kind.endswith("List") and isinstance(items, list):
            for item in items:
                yield from flatten(item, source)
            return
    yield RawDocument(data=data, source=source)


def _skip_whitespace(text: str, pos: int) -> int:
    match: re.Match[str] | None = _WHITESPACE.match(text, pos)
    return match.end() if match else pos


def _decode_json_stream(text: str, source: str) -> list[RawDocument | ResolutionError] | None:
    """Decode JSON values written back to back; None if the first one is not JSON."""
    decoder = json.JSONDecoder()
    docs: list[RawDocument | ResolutionError] = []
    decoded: int = 0
    pos: int = _skip_whitespace(text, 0)
    while pos < len(text):
        try:
            data, end = decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            if not decoded:
                logger.debug("Not JSON (%s), trying YAML: %s", source, e)
                return None
            docs.append(ResolutionError(source, f"error parsing: {e}"))
            break
        decoded += 1
        docs.extend(flatten(data, source))
        pos = _skip_whitespace(text, end)
    return docs


def parse_text(text: str, source: str) -> Iterator[RawDocument | ResolutionError]:
    """Parse a JSON or YAML stream holding one or more documents.

    JSON input may hold several values back to back (``{...}\\n{...}``). Text
    whose first value does not decode as JSON is read as multi-document YAML.

    Args:
        text (str): Raw stream content.
        source (str): Label used for errors and resulting documents.

    Yields:
        RawDocument | ResolutionError: Documents in stream order; a parse error ends the stream.
    """
    if _looks_like_json(text):
        json_docs: list[RawDocument | ResolutionError] | None = _decode_json_stream(text, source)
        if json_docs is not None:
            yield from json_docs
            return

    try:
        for doc in yaml.safe_load_all(text):
            if doc is None:
                logger.trace("Skipping empty document in %s", source)
                continue
            yield from flatten(doc, source)
    except yaml.YAMLError as e:
        yield ResolutionError(source, f"error parsing: {e}")


class DocumentLoader:
    """Read documents for a FILES or KUSTOMIZE specifier.

    Args:
        stdin (TextIO | None): Stream read for the ``-`` filename.
        http_client (httpx.Client | None): Client for URL filenames; a short-lived
            client is created per request when omitted.
        timeout (float): Timeout in seconds for URL fetches.
    """

    def __init__(
        self,
        *,
        stdin: TextIO | None = None,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._stdin = stdin
        self._http_client = http_client
        self._timeout = timeout
        self._stdin_consumed = False
        self._overlays = OverlayRenderer(self.load_file)

    def load(self, specifier: ResourceSpecifier) -> Iterator[RawDocument | ResolutionError]:
        """Yield the documents described by ``specifier``, in input order."""
        if specifier.kind is SpecifierKind.KUSTOMIZE:
            assert specifier.kustomize is not None
            directory = Path(specifier.kustomize)
            if not directory.is_dir():
                yield ResolutionError(specifier.kustomize, "must be a directory")
                return
            yield from self._overlays.render(directory)
            return

        for filename in specifier.filenames:
            yield from self.load_source(filename, recursive=specifier.recursive)

    def load_source(
        self, filename: str, *, recursive: bool = False
    ) -> Iterator[RawDocument | ResolutionError]:
        """Yield the documents of one ``-f`` value."""
        if filename == "-":
            yield from self._load_stdin()
            return
        if is_url(filename):
            yield from self._load_url(filename)
            return

        path = Path(filename)
        if not path.exists():
            yield ResolutionError(filename, f'the path "{filename}" does not exist')
        elif path.is_dir():
            if find_kustomization(path) is not None:
                yield from self._overlays.render(path)
            else:
                yield from self._load_directory(path, recursive=recursive)
        else:
            yield from self.load_file(path)

    def load_file(self, path: Path) -> Iterator[RawDocument | ResolutionError]:
        """Parse a single manifest file."""
        logger.debug("Reading %s", path)
        try:
            text: str = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            yield ResolutionError(str(path), f"error reading file: {e}")
            return
        yield from parse_text(text, str(path))

    def _load_directory(
        self, directory: Path, *, recursive: bool, seen: set[Path] | None = None
    ) -> Iterator[RawDocument | ResolutionError]:
        # Symlinked directories are followed; `seen` stops cycles
        seen = set() if seen is None else seen
        real: Path = directory.resolve()
        if real in seen:
            yield ResolutionError(str(directory), f"directory loop: {real} already visited")
            return
        seen.add(real)
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                if recursive:
                    yield from self._load_directory(entry, recursive=True, seen=seen)
                continue
            if entry.suffix.lower() in MANIFEST_EXTENSIONS:
                yield from self.load_file(entry)
            else:
                logger.trace("Skipping non-manifest file %s", entry)

    def _load_stdin(self) -> Iterator[RawDocument | ResolutionError]:
        if self._stdin_consumed:
            yield ResolutionError(STDIN_SOURCE, "standard input can only be read once")
            return
        self._stdin_consumed = True
        if self._stdin is None:
            yield ResolutionError(STDIN_SOURCE, "no standard input available")
            return
        logger.debug("Reading documents from stdin")
        yield from parse_text(self._stdin.read(), STDIN_SOURCE)

    def _load_url(self, url: str) -> Iterator[RawDocument | ResolutionError]:
        logger.debug("Fetching %s", url)
        try:
            if self._http_client is not None:
                response: httpx.Response = self._http_client.get(url)
            else:
                with httpx.Client(timeout=self._timeout, follow_redirects=True) as client:
                    response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            yield ResolutionError(url, f"error fetching: {e}")
            return
        yield from parse_text(response.text, url)
