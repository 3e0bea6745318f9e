"""
Endpoint
========
Per-resource façade. Concrete endpoints call the shared Request and wrap
the results in models:

    class Posts(Endpoint):
        model = Post

        def all(self, page=1):
            return self.collection(self.request.get("/posts", {"page": page}))

        def find(self, post_id):
            return self.item(self.request.get(f"/posts/{post_id}"))
"""

from typing import ClassVar, Type

from .models import Collection, Model
from .request import Request
from .response import Response


class Endpoint:
    """Base class for API endpoints."""

    model: ClassVar[Type[Model]] = Model

    def __init__(self, request: Request):
        self.request = request

    def item(self, response: Response) -> Model:
        """Single model from a {data: {...}} response."""
        return self.model(response)

    def collection(self, response: Response) -> Collection:
        """Collection from a {data: [...], meta: {...}} response."""
        return Collection(response, self.model)
