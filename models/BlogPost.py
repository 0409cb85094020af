from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, HttpUrl

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class ParagraphBlock(BaseModel):
    type: Literal["paragraph"]
    text: str = Field(min_length=1)

    class Config:
        extra = "forbid"


class ImageBlock(BaseModel):
    type: Literal["image"]
    src: HttpUrl
    alt: str = ""
    caption: Optional[str] = None

    class Config:
        extra = "forbid"


# unknown block types fail validation here instead of at render time
ContentBlock = Annotated[Union[ParagraphBlock, ImageBlock], Field(discriminator="type")]


class BlogPost(BaseModel):
    slug: str = Field(min_length=1, max_length=200, pattern=SLUG_PATTERN)
    title: str = Field(min_length=1, max_length=200)
    excerpt: str = Field(min_length=1, max_length=500)
    content: list[ContentBlock] = Field(min_length=1)
    featured_image_url: Optional[HttpUrl] = None
    reading_time: int = Field(default=5, ge=1, le=60)
    tags: list[Annotated[str, Field(max_length=50)]] = Field(default_factory=list, max_length=10)
    is_published: bool = False
    published_at: Optional[datetime] = None
    seo_title: Optional[str] = Field(default=None, max_length=70)
    seo_description: Optional[str] = Field(default=None, max_length=160)

    def content_json(self) -> list[dict]:
        return [block.model_dump(mode="json", exclude_none=True) for block in self.content]
