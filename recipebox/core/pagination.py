"""Page metadata for paginated listings."""

from dataclasses import dataclass

from ..services.errors import InvalidPageError


@dataclass(frozen=True)
class PageInfo:
    total_count: int
    page_number: int
    page_size: int

    def __post_init__(self):
        if self.page_size <= 0:
            raise InvalidPageError("page_size must be greater than 0")
        if self.page_number < 1:
            raise InvalidPageError("page_number must be at least 1")
        if self.total_count < 0:
            raise InvalidPageError("total_count cannot be negative")

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def total_pages(self) -> int:
        # ceil without floats
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    def as_dict(self) -> dict:
        return {
            "total_count": self.total_count,
            "page_number": self.page_number,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
            "has_previous_page": self.has_previous_page,
            "has_next_page": self.has_next_page,
        }
