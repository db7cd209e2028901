# topmark:header:start
#
#   project      : KubeHello
#   file         : kustomize.py
#   file_relpath : src/kubehello/resource/kustomize.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render a directory-based overlay (kustomization) into documents.

Supported overlay fields:

```yaml
resources:          # files or nested overlay directories, relative to the overlay
  - deployment.yaml
  - ../base
namespace: staging  # set on every namespaced resource
namePrefix: dev-    # prepended to metadata.name
nameSuffix: -v2     # appended to metadata.name
commonLabels:       # merged into metadata.labels
  app: hello
commonAnnotations:  # merged into metadata.annotations
  owner: team-a
```

Nested overlays are rendered first, then the outer overlay's transformations
are applied on top, so an outer ``namePrefix`` wraps an inner one.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from kubehello.config.logging import get_logger
from kubehello.constants import KUSTOMIZATION_FILE_NAMES
from kubehello.core.errors import ResolutionError
from kubehello.resource.kinds import DEFAULT_REGISTRY
from kubehello.resource.model import RawDocument

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from kubehello.config.logging import KubehelloLogger
    from kubehello.resource.kinds import KindRegistry, ResourceKind

    FileLoader = Callable[[Path], Iterator["RawDocument | ResolutionError"]]

logger: KubehelloLogger = get_logger(__name__)


def find_kustomization(directory: Path) -> Path | None:
    """Return the overlay file in ``directory``, or None if there is none."""
    for name in KUSTOMIZATION_FILE_NAMES:
        candidate: Path = directory / name
        if candidate.is_file():
            return candidate
    return None


class OverlayRenderer:
    """Render overlays using a caller-supplied file loader.

    Args:
        load_file (FileLoader): Parses one manifest file into documents.
        registry (KindRegistry): Used to leave cluster-scoped kinds without a namespace.
    """

    def __init__(self, load_file: FileLoader, registry: KindRegistry = DEFAULT_REGISTRY) -> None:
        self._load_file = load_file
        self._registry = registry

    def render(self, directory: Path) -> Iterator[RawDocument | ResolutionError]:
        """Render the overlay rooted at ``directory``, in ``resources`` order."""
        logger.info("Rendering overlay: %s", directory)
        yield from self._render(directory.resolve(), ())

    def _render(
        self, directory: Path, stack: tuple[Path, ...]
    ) -> Iterator[RawDocument | ResolutionError]:
        if directory in stack:
            chain: str = " -> ".join(str(p) for p in (*stack, directory))
            yield ResolutionError(str(directory), f"cycle detected in overlay resources: {chain}")
            return

        kfile: Path | None = find_kustomization(directory)
        if kfile is None:
            names: str = ", ".join(f"'{n}'" for n in KUSTOMIZATION_FILE_NAMES)
            yield ResolutionError(
                str(directory), f"unable to find one of {names} in directory"
            )
            return

        try:
            overlay: Any = yaml.safe_load(kfile.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            yield ResolutionError(str(kfile), f"error reading overlay: {e}")
            return
        if overlay is None:
            overlay = {}
        if not isinstance(overlay, dict):
            yield ResolutionError(str(kfile), "overlay must be a mapping")
            return

        resources: Any = overlay.get("resources") or []
        if not isinstance(resources, list):
            yield ResolutionError(str(kfile), "'resources' must be a list")
            return

        for entry in resources:
            if not isinstance(entry, str) or not entry:
                yield ResolutionError(str(kfile), f"invalid resources entry: {entry!r}")
                continue
            if entry.startswith(("http://", "https://")):
                yield ResolutionError(str(kfile), f"remote overlay resources are not supported: {entry}")
                continue
            target: Path = directory / entry
            docs: Iterator[RawDocument | ResolutionError]
            if target.is_dir():
                docs = self._render(target.resolve(), (*stack, directory))
            elif target.is_file():
                docs = self._load_file(target)
            else:
                yield ResolutionError(str(kfile), f'the path "{target}" does not exist')
                continue
            for doc in docs:
                if isinstance(doc, ResolutionError):
                    yield doc
                else:
                    yield self._transform(doc, overlay)

    def _transform(self, doc: RawDocument, overlay: dict[str, Any]) -> RawDocument:
        """Apply the overlay's transformations to a copy of ``doc``."""
        if not isinstance(doc.data, dict):
            return doc
        data: dict[str, Any] = copy.deepcopy(doc.data)
        metadata: Any = data.setdefault("metadata", {})
        if not isinstance(metadata, dict):
            # Left for the resolver to reject
            return doc

        namespace: Any = overlay.get("namespace")
        if isinstance(namespace, str) and namespace and self._is_namespaced(data.get("kind")):
            metadata["namespace"] = namespace

        name: Any = metadata.get("name")
        if isinstance(name, str) and name:
            prefix: Any = overlay.get("namePrefix") or ""
            suffix: Any = overlay.get("nameSuffix") or ""
            metadata["name"] = f"{prefix}{name}{suffix}"

        for overlay_key, meta_key in (
            ("commonLabels", "labels"),
            ("commonAnnotations", "annotations"),
        ):
            extra: Any = overlay.get(overlay_key)
            if isinstance(extra, dict) and extra:
                current: Any = metadata.get(meta_key)
                merged: dict[str, Any] = dict(current) if isinstance(current, dict) else {}
                merged.update({str(k): str(v) for k, v in extra.items()})
                metadata[meta_key] = merged

        return RawDocument(data=data, source=doc.source)

    def _is_namespaced(self, kind: Any) -> bool:
        if not isinstance(kind, str):
            return True
        known: ResourceKind | None = self._registry.lookup(kind)
        return known is None or known.namespaced
