from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class ContentType(str, Enum):
    BLOG = "blog"
    PROJECT = "project"

    @property
    def directory(self) -> str:
        return "blog" if self is ContentType.BLOG else "projects"


class ContentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class ContentItem(BaseModel):
    slug: str
    title: str = ""
    excerpt: str = ""
    author: str = "Unknown"
    tags: List[str] = Field(default_factory=list)
    datePublished: Optional[str] = None
    dateModified: Optional[str] = None
    status: ContentStatus = ContentStatus.DRAFT
    featuredImage: str = ""
    readingTime: Optional[str] = None
    content: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value):
        if isinstance(value, ContentStatus):
            return value
        if isinstance(value, str) and value.strip().lower() == "published":
            return ContentStatus.PUBLISHED
        return ContentStatus.DRAFT

    @property
    def is_published(self) -> bool:
        return self.status is ContentStatus.PUBLISHED


class BlogPost(ContentItem):
    kind: Literal["blog"] = "blog"


class Project(ContentItem):
    kind: Literal["project"] = "project"
    projectType: str = ""
    projectStatus: str = ""
    githubUrl: str = ""
    liveUrl: str = ""
    techStack: List[str] = Field(default_factory=list)
    thumbnailImage: str = ""
    featured: bool = False


AnyContent = Union[BlogPost, Project]


class ContentListing(BaseModel):
    items: List[AnyContent] = Field(default_factory=list)
    notice: Optional[str] = None


class RecentPost(BaseModel):
    slug: str
    title: str
    publishDate: str = ""


class RecentPostsSummary(BaseModel):
    recentPosts: List[RecentPost] = Field(default_factory=list)
    categories: dict[str, int] = Field(default_factory=dict)
    notice: Optional[str] = None
