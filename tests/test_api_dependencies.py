"""Tests for shared request dependencies."""

import pytest
from fastapi import HTTPException

from accounting_service.api.dependencies import get_page_window
from accounting_service.config import settings


class TestPageWindow:
    def test_defaults(self) -> None:
        """Paging starts at 1 with the configured page size."""
        window = get_page_window()

        assert window.start == 1
        assert window.size == settings.default_page_size
        assert window.offset == 0

    def test_explicit(self) -> None:
        """Explicit values are kept."""
        window = get_page_window(start=21, page_size=10)

        assert window.offset == 20
        assert window.size == 10

    def test_maximum_page_size_allowed(self) -> None:
        """The maximum page size itself is allowed."""
        assert get_page_window(page_size=settings.max_page_size).size == settings.max_page_size

    @pytest.mark.parametrize(
        ("start", "page_size"),
        [(0, 10), (-1, 10), (1, 0), (1, -5), (1, settings.max_page_size + 1)],
    )
    def test_rejected(self, start: int, page_size: int) -> None:
        """Windows outside the allowed range are a 400."""
        with pytest.raises(HTTPException) as exc_info:
            get_page_window(start=start, page_size=page_size)

        assert exc_info.value.status_code == 400
