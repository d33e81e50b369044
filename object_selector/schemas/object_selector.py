"""Object selector API schemas (response envelopes)."""

from typing import Any

from pydantic import BaseModel, Field

from object_selector.application.dtos.result import (
    FlatQueryResult,
    ResultRecord,
    TreeQueryResult,
)


class ResultRecordResponse(BaseModel):
    """One selectable option."""

    id: int
    text: str = Field(..., description="Display text: status prefix, title, optional type label")
    title: str
    post_title: str
    post_type: str
    post_status: str
    post_date_gmt: str = Field(..., description="UTC date as YYYY-MM-DD HH:MM:SS")
    post_author: int
    featured_image: dict[str, Any] | None = None

    @classmethod
    def from_record(cls, record: ResultRecord) -> "ResultRecordResponse":
        return cls(
            id=record.id,
            text=record.text,
            title=record.title,
            post_title=record.post_title,
            post_type=record.post_type,
            post_status=record.post_status,
            post_date_gmt=record.post_date_gmt,
            post_author=record.post_author,
            featured_image=record.featured_image,
        )


class TreeResultRecordResponse(BaseModel):
    """One option of a hierarchical listing (no featured image)."""

    id: int
    text: str
    title: str
    post_title: str
    post_type: str
    post_status: str
    post_date_gmt: str
    post_author: int
    depth: int = Field(..., ge=0, description="0 for roots, parent depth + 1 otherwise")

    @classmethod
    def from_record(cls, record: ResultRecord) -> "TreeResultRecordResponse":
        return cls(
            id=record.id,
            text=record.text,
            title=record.title,
            post_title=record.post_title,
            post_type=record.post_type,
            post_status=record.post_status,
            post_date_gmt=record.post_date_gmt,
            post_author=record.post_author,
            depth=record.depth or 0,
        )


class Pagination(BaseModel):
    more: bool


class FlatQueryResponse(BaseModel):
    """Flat mode payload: one page of results."""

    results: list[ResultRecordResponse]
    pagination: Pagination

    @classmethod
    def from_result(cls, result: FlatQueryResult) -> "FlatQueryResponse":
        return cls(
            results=[ResultRecordResponse.from_record(r) for r in result.results],
            pagination=Pagination(more=result.more),
        )


class TreeQueryResponse(BaseModel):
    """Tree mode payload: the whole hierarchy in pre-order."""

    results: list[TreeResultRecordResponse]

    @classmethod
    def from_result(cls, result: TreeQueryResult) -> "TreeQueryResponse":
        return cls(results=[TreeResultRecordResponse.from_record(r) for r in result.results])


class ObjectSelectorQueryResponse(BaseModel):
    """Success envelope for POST /object-selector/query."""

    success: bool = True
    data: FlatQueryResponse | TreeQueryResponse


class SelectorError(BaseModel):
    code: str
    message: str
    data: Any = None


class ObjectSelectorErrorResponse(BaseModel):
    """Rejection envelope (HTTP 400)."""

    success: bool = False
    data: SelectorError


class NonceResponse(BaseModel):
    """Fresh nonce for the query action, keyed by action name."""

    customize_object_selector_query: str
