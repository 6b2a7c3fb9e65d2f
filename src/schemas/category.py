"""Category schemas."""

from src.schemas.base import CamelModel


class CategoryResponse(CamelModel):
    """Category response."""

    category_id: int
    name: str
