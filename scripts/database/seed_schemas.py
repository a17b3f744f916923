"""Pydantic schemas for the sample rows inserted by the database reset."""

import time

from pydantic import BaseModel, Field, field_validator

from utils.passwords import hash_password

SAMPLE_ARTICLE_TITLE = "Sample Article"
SAMPLE_ARTICLE_BODY = "This is a test article body."
SAMPLE_MEDIA_PATH = "/uploads/sample_image.jpg"
SAMPLE_COMMENT = "This is a sample comment."


def current_epoch_seconds() -> int:
    """Current wall-clock time as integer seconds since the Unix epoch."""
    return int(time.time())


class ArticleSeed(BaseModel):
    """Schema for the sample article row.

    ``bump_time`` defaults to the moment the model is built, matching the
    column's epoch-seconds convention.
    """

    title: str = Field(..., min_length=1, description="Article title")
    body: str = Field(..., min_length=1, description="Article body text")
    bump_time: int = Field(
        default_factory=current_epoch_seconds,
        ge=0,
        description="Last activity time in epoch seconds",
    )

    @field_validator("title", "body")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject values made only of whitespace.

        Raises:
            ValueError: If the value is blank
        """
        if not v.strip():
            raise ValueError("Value must not be blank")
        return v


class ArticleMediaSeed(BaseModel):
    """Schema for the sample media row attached to the sample article."""

    media_path: str = Field(..., min_length=1, description="Path of the uploaded file")


class CommentSeed(BaseModel):
    """Schema for the sample comment row attached to the sample article."""

    comment: str = Field(..., min_length=1, description="Comment text")


class AdminSeed(BaseModel):
    """Schema for the seeded admin account.

    The plaintext password only lives on this model; the database receives
    the salted hash from ``password_hash()``.
    """

    username: str = Field(..., min_length=1, description="Admin username")
    password: str = Field(..., min_length=1, repr=False, description="Plaintext password")

    def password_hash(self) -> str:
        return hash_password(self.password)


class SampleData(BaseModel):
    """The complete set of rows written after the tables are recreated."""

    admin: AdminSeed
    article: ArticleSeed
    media: ArticleMediaSeed
    comment: CommentSeed


def build_sample_data(admin_username: str, admin_password: str) -> SampleData:
    """
    Build the fixed sample rows.

    Args:
        admin_username (str): Username for the seeded admin account
        admin_password (str): Plaintext password, hashed before insertion

    Returns:
        SampleData: Validated sample rows with bump_time set to now

    Raises:
        pydantic.ValidationError: If the admin credentials are empty
    """
    return SampleData(
        admin=AdminSeed(username=admin_username, password=admin_password),
        article=ArticleSeed(title=SAMPLE_ARTICLE_TITLE, body=SAMPLE_ARTICLE_BODY),
        media=ArticleMediaSeed(media_path=SAMPLE_MEDIA_PATH),
        comment=CommentSeed(comment=SAMPLE_COMMENT),
    )
