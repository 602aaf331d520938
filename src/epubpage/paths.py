"""Package-relative locations inside the EPUB container.

Every page and stylesheet owns exactly one `InternalPath`. Locations are POSIX
strings relative to the container root; a trailing ``/`` marks a folder.
References written into markup are always relative, computed by
`relative_reference` from an anchor location to a target location.
"""

from __future__ import annotations

from dataclasses import dataclass
import posixpath


__all__ = [
    "DefaultInternalPaths",
    "InternalPath",
    "relative_reference",
]


@dataclass(frozen=True, slots=True)
class InternalPath:
    """Location of an item relative to the container root."""

    path: str = ""

    def __post_init__(self) -> None:
        normalised = self.path.replace("\\", "/").lstrip("/")
        object.__setattr__(self, "path", normalised)

    @classmethod
    def folder(cls, path: str) -> InternalPath:
        """Return a folder location, appending the trailing separator when missing."""
        if path and not path.endswith("/"):
            path = f"{path}/"
        return cls(path)

    @property
    def is_folder(self) -> bool:
        return not self.path or self.path.endswith("/")

    @property
    def name(self) -> str:
        """Last segment of the location."""
        return posixpath.basename(self.path.rstrip("/"))

    @property
    def directory(self) -> str:
        """Folder holding the location, or the location itself for folders."""
        if self.is_folder:
            return self.path.rstrip("/")
        return posixpath.dirname(self.path)

    def join(self, name: str) -> InternalPath:
        """Return the location of ``name`` inside this folder."""
        base = self.directory
        return InternalPath(posixpath.join(base, name) if base else name)

    def relative_to(self, anchor: InternalPath, flat: bool = False) -> str:
        """Return the reference to this location as seen from ``anchor``."""
        return relative_reference(self, anchor, flat)

    def __str__(self) -> str:
        return self.path


def relative_reference(target: InternalPath, anchor: InternalPath, flat: bool = False) -> str:
    """Compute the relative reference from ``anchor`` to ``target``.

    In a flat layout every file shares one folder, so only the file name is kept.
    """
    if flat:
        return target.name
    start = f"/{anchor.directory}"
    relative = posixpath.relpath(f"/{target.path.rstrip('/')}", start)
    if target.is_folder and relative != ".":
        relative = f"{relative}/"
    return relative


class DefaultInternalPaths:
    """Conventional locations used by the container layout."""

    CONTENT_FOLDER = InternalPath.folder("OEBPS")
    CONTENT_FILE = InternalPath("OEBPS/content.opf")
    TEXT_FOLDER = InternalPath.folder("OEBPS/text")
    STYLES_FOLDER = InternalPath.folder("OEBPS/css")
