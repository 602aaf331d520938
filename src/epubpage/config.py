"""Configuration model for generated pages.

DocumentConfig

`compatibility` (`Compatibility`)
: Markup dialect the page targets. The EPUB 3 dialects (`html5`, `xhtml5`)
  declare the OPS namespace on the root element.

`page_title` (`str | None`)
: Text of the `<title>` element. Reading systems rarely show it, browsers do.

`embed_styles` (`bool`)
: Copy stylesheet contents into `<style>` elements instead of linking to the
  stylesheet files.

`file_name` (`str | None`)
: Name of the page inside its folder. Required before the page location or
  `href` can be computed.

`folder` (`str`)
: Package-relative folder holding the page. Normalised to end with `/`.

`flat_structure` (`bool`)
: All container files share one folder; references reduce to file names.

`guide_role` (`GuideRole`)
: Guide reference type advertised for the page, `ignore` when none.

`not_part_of_navigation` (`bool`)
: Keep the page out of the navigation document.

`id` (`str | None`)
: Manifest identifier. Derived from the file name when omitted.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .document import GuideRole
from .markup import Compatibility
from .paths import DefaultInternalPaths, InternalPath


class DocumentConfig(BaseModel):
    """Settings applied to an `XHTMLDocument` at construction."""

    model_config = ConfigDict(extra="forbid")

    compatibility: Compatibility = Compatibility.XHTML11
    page_title: str | None = None
    embed_styles: bool = False
    file_name: str | None = None
    folder: str = Field(default=DefaultInternalPaths.TEXT_FOLDER.path)
    flat_structure: bool = False
    guide_role: GuideRole = GuideRole.IGNORE
    not_part_of_navigation: bool = False
    id: str | None = None

    @field_validator("file_name")
    @classmethod
    def check_file_name(cls, value: str | None) -> str | None:
        """Reject names that would escape the configured folder."""
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("file_name must not be empty")
        if "/" in value or "\\" in value:
            raise ValueError("file_name must not contain path separators")
        return value

    @field_validator("folder")
    @classmethod
    def normalise_folder(cls, value: str) -> str:
        return InternalPath.folder(value.strip()).path

    def internal_folder(self) -> InternalPath:
        return InternalPath.folder(self.folder)


__all__ = ["DocumentConfig"]
