"""Content and site models validated from assembled documents and config files"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Metadata(BaseModel):
    """Publishing metadata for a post or page; only author and publish date are required."""
    content_name: str = ""          # output file stem
    directory:    str = ""          # output directory relative to the site root
    author_name:  str
    published_date: str
    updated_date: Optional[str] = None
    version:      int = Field(default=1, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _default_updated_date(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("updated_date") is None:
            data = {**data, "updated_date": data.get("published_date")}
        return data


class _Content(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    metadata: Metadata
    title: str
    html: str = Field(alias="content")


class Post(_Content):
    """A dated article rendered with post.tmpl."""


class Page(_Content):
    """A standalone page, e.g. the index page of a site section."""


class SiteSection(BaseModel):
    name: str
    site_path: str
    index_content: str              # content name of the page rendered as this section's index


class SiteContext(BaseModel):
    """Site-wide values exposed to every template as 'site'."""
    site_title: str
    language_code: str
    sections: list[SiteSection] = []
