"""
Typed client definitions for the public JSONPlaceholder API.

Shows the recommended way to describe an API: one endpoint class whose
variants are built through classmethods and which computes path, method,
query and body from the variant.

Usage:
    service = NetworkService(auth_service=AuthService(InMemoryCredentialStore()))
    posts = await service.fetch_many(Post, JsonPlaceholderEndpoint.posts(), JSONPLACEHOLDER_ENVIRONMENT)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .models.endpoint import Body, HttpMethod, QueryItems
from .models.environment import ApiEnvironment

JSONPLACEHOLDER_ENVIRONMENT = ApiEnvironment(base_url="https://jsonplaceholder.typicode.com")


class _ApiModel(BaseModel):
    model_config = {"populate_by_name": True}


class Post(_ApiModel):
    id: int
    user_id: int = Field(alias="userId")
    title: str
    body: str


class User(_ApiModel):
    id: int
    name: str
    username: str
    email: str
    phone: str
    website: str


class Comment(_ApiModel):
    id: int
    post_id: int = Field(alias="postId")
    name: str
    email: str
    body: str


class Todo(_ApiModel):
    id: int
    user_id: int = Field(alias="userId")
    title: str
    completed: bool


class Route(str, Enum):
    """JSONPlaceholder endpoint variants."""

    POSTS = "posts"
    POST = "post"
    CREATE_POST = "create_post"
    UPDATE_POST = "update_post"
    DELETE_POST = "delete_post"
    USERS = "users"
    USER = "user"
    COMMENTS = "comments"
    COMMENTS_FOR_POST = "comments_for_post"
    TODOS = "todos"
    TODOS_FOR_USER = "todos_for_user"


_METHODS = {
    Route.CREATE_POST: HttpMethod.POST,
    Route.UPDATE_POST: HttpMethod.PUT,
    Route.DELETE_POST: HttpMethod.DELETE,
}


@dataclass(frozen=True)
class JsonPlaceholderEndpoint:
    """
    One JSONPlaceholder call.

    Build instances with the classmethods rather than the constructor.
    """

    route: Route
    resource_id: Optional[int] = None
    title: Optional[str] = None
    text: Optional[str] = None
    user_id: Optional[int] = None
    post_id: Optional[int] = None

    # Posts

    @classmethod
    def posts(cls) -> JsonPlaceholderEndpoint:
        return cls(Route.POSTS)

    @classmethod
    def post(cls, post_id: int) -> JsonPlaceholderEndpoint:
        return cls(Route.POST, resource_id=post_id)

    @classmethod
    def create_post(cls, title: str, body: str, user_id: int) -> JsonPlaceholderEndpoint:
        return cls(Route.CREATE_POST, title=title, text=body, user_id=user_id)

    @classmethod
    def update_post(cls, post_id: int, title: str, body: str, user_id: int) -> JsonPlaceholderEndpoint:
        return cls(Route.UPDATE_POST, resource_id=post_id, title=title, text=body, user_id=user_id)

    @classmethod
    def delete_post(cls, post_id: int) -> JsonPlaceholderEndpoint:
        return cls(Route.DELETE_POST, resource_id=post_id)

    # Users

    @classmethod
    def users(cls) -> JsonPlaceholderEndpoint:
        return cls(Route.USERS)

    @classmethod
    def user(cls, user_id: int) -> JsonPlaceholderEndpoint:
        return cls(Route.USER, resource_id=user_id)

    # Comments

    @classmethod
    def comments(cls) -> JsonPlaceholderEndpoint:
        return cls(Route.COMMENTS)

    @classmethod
    def comments_for_post(cls, post_id: int) -> JsonPlaceholderEndpoint:
        return cls(Route.COMMENTS_FOR_POST, post_id=post_id)

    # Todos

    @classmethod
    def todos(cls) -> JsonPlaceholderEndpoint:
        return cls(Route.TODOS)

    @classmethod
    def todos_for_user(cls, user_id: int) -> JsonPlaceholderEndpoint:
        return cls(Route.TODOS_FOR_USER, user_id=user_id)

    # EndpointLike

    @property
    def path(self) -> str:
        if self.route in (Route.POSTS, Route.CREATE_POST):
            return "/posts"
        if self.route in (Route.POST, Route.UPDATE_POST, Route.DELETE_POST):
            return f"/posts/{self.resource_id}"
        if self.route == Route.USER:
            return f"/users/{self.resource_id}"
        if self.route == Route.COMMENTS_FOR_POST:
            return "/comments"
        if self.route == Route.TODOS_FOR_USER:
            return "/todos"
        return f"/{self.route.value}"

    @property
    def method(self) -> HttpMethod:
        return _METHODS.get(self.route, HttpMethod.GET)

    @property
    def query(self) -> Optional[QueryItems]:
        if self.route == Route.COMMENTS_FOR_POST:
            return [("postId", str(self.post_id))]
        if self.route == Route.TODOS_FOR_USER:
            return [("userId", str(self.user_id))]
        return None

    @property
    def body(self) -> Optional[Body]:
        if self.route in (Route.CREATE_POST, Route.UPDATE_POST):
            return {"title": self.title, "body": self.text, "userId": self.user_id}
        return None

    @property
    def requires_auth(self) -> bool:
        # JSONPlaceholder is public
        return False
