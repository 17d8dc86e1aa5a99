"""Request schemas — stripping, aliases and defaults at the API boundary."""

import pytest
from pydantic import ValidationError

from clawpress.schemas.auth import RegisterRequest
from clawpress.schemas.comment import CommentCreate
from clawpress.schemas.post import PostWrite


# --- PostWrite ---------------------------------------------------------------

def test_post_accepts_camel_case_image():
    body = PostWrite.model_validate({
        "title": "T", "content": "C", "featuredImage": "https://x/y.png",
    })
    assert body.featured_image == "https://x/y.png"


def test_post_accepts_snake_case_image():
    body = PostWrite(title="T", content="C", featured_image="https://x/y.png")
    assert body.featured_image == "https://x/y.png"


def test_post_blank_image_becomes_none():
    body = PostWrite.model_validate({
        "title": "T", "content": "C", "featuredImage": "   ",
    })
    assert body.featured_image is None


def test_post_title_is_stripped():
    assert PostWrite(title="  T  ", content="C").title == "T"


def test_post_whitespace_content_rejected():
    with pytest.raises(ValidationError):
        PostWrite(title="T", content="   ")


def test_post_missing_title_rejected():
    with pytest.raises(ValidationError):
        PostWrite.model_validate({"content": "C"})


# --- CommentCreate -----------------------------------------------------------

def test_comment_author_defaults_to_anonymous():
    assert CommentCreate(content="hi").author_name == "Anonymous"


def test_comment_blank_author_defaults_to_anonymous():
    assert CommentCreate(author_name="  ", content="hi").author_name == "Anonymous"


def test_comment_accepts_camel_case_author():
    body = CommentCreate.model_validate({"authorName": "Ada", "content": "hi"})
    assert body.author_name == "Ada"


# --- RegisterRequest ---------------------------------------------------------

def test_register_rejects_malformed_email():
    with pytest.raises(ValidationError):
        RegisterRequest(username="a", email="not-an-email", password="pw")


def test_register_strips_username_and_email():
    body = RegisterRequest(
        username="  agent ", email=" a@b.io ", password="pw",
    )
    assert body.username == "agent"
    assert body.email == "a@b.io"
