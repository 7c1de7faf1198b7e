"""
Record types produced by the scraper
"""
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

U64_MAX = 2 ** 64 - 1
U32_MAX = 2 ** 32 - 1


class Paper(BaseModel):
    """A paper as listed by Google Scholar.

    ``citation_count`` is filled in when the paper comes from a result list
    (search results or citers); ``citers`` only on the target of a citation page.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    id: int
    citation_count: Optional[int] = None
    citers: Optional[Tuple["Paper", ...]] = None

    @field_validator('id')
    @classmethod
    def _check_id_range(cls, value: int) -> int:
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"id must be an unsigned 64-bit integer, got {value}")
        return value

    @field_validator('citation_count')
    @classmethod
    def _check_count_range(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and not 0 <= value <= U32_MAX:
            raise ValueError(f"citation_count must be an unsigned 32-bit integer, got {value}")
        return value

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation; ``citers`` is omitted when unset"""
        data: Dict[str, Any] = {
            'title': self.title,
            'id': self.id,
            'citation_count': self.citation_count,
        }
        if self.citers is not None:
            data['citers'] = [citer.to_dict() for citer in self.citers]
        return data
