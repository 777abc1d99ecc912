"""
Shared request-validation pieces used by the resource schemas.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, ClassVar
from urllib.parse import urlsplit

from pydantic import AfterValidator, BaseModel, ConfigDict, model_validator

_URL_SCHEMES = {"http", "https"}


class ListSort(str, Enum):
    DATE_NEWEST = "date_newest"
    DATE_OLDEST = "date_oldest"
    ALPHA_ASC = "alpha_asc"
    ALPHA_DESC = "alpha_desc"
    MODIFIED = "modified"


def is_http_url(value: str) -> bool:
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return parts.scheme.lower() in _URL_SCHEMES and bool(parts.hostname)


def _check_http_url(value: str) -> str:
    if not is_http_url(value):
        raise ValueError("must be a valid http(s) URL")
    return value


# Kept as the submitted string; only the shape is checked.
HttpUrlStr = Annotated[str, AfterValidator(_check_http_url)]


class PartialUpdate(BaseModel):
    """
    Base for PUT bodies: only fields present in the JSON are applied.

    `null` is accepted only for columns listed in `NULLABLE`; sending null
    for any other field is a validation error rather than a silent wipe.
    """

    model_config = ConfigDict(extra="ignore")

    NULLABLE: ClassVar[frozenset[str]] = frozenset()
    # Fields carried in the body that are not column writes.
    CONTROL: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self) -> "PartialUpdate":
        for name in self.model_fields_set:
            if name in self.CONTROL or name in self.NULLABLE:
                continue
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        present = self.model_fields_set - self.CONTROL
        dumped = self.model_dump()
        return {name: dumped[name] for name in type(self).model_fields if name in present}
