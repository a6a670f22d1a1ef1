"""Paging configuration.

Factories and the parallel runtime accept either explicit keyword arguments
or a ``PagingConfig`` instance. Validation errors are reported as
``ConfigurationError`` so callers only need to catch library exceptions.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .core.exceptions import ConfigurationError

DEFAULT_PAGE_SIZE = 100


class PagingConfig(BaseModel):
    """Settings for one paged traversal.

    Attributes:
        page_size: Items requested per fetch
        start_page: Zero-based page index traversal starts from
        max_workers: Worker threads for parallel traversal (None = executor default)
        ordered: Whether parallel collection reassembles units in page order
    """

    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    start_page: int = Field(default=0, ge=0)
    max_workers: int | None = Field(default=None, gt=0)
    ordered: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def build(cls, **values: Any) -> PagingConfig:
        """Construct a config, translating pydantic errors.

        Raises:
            ConfigurationError: If any value is out of range
        """
        try:
            return cls(**values)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid paging configuration: {e}") from e
