# src/events/filters.py

from django.db.models import Q
from ninja import Field, FilterSchema


class EventFilterSchema(FilterSchema):
    category: str | None = None
    tags: str | None = Field(None, q="tags__icontains")  # type: ignore[call-overload]
    featured: bool | None = None

    def filter_featured(self, featured: bool | None) -> Q:
        """Only featured events when requested; `false` does not exclude them."""
        if featured:
            return Q(featured=True)
        return Q()

