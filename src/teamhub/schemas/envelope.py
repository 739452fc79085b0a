"""Uniform success envelope returned by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T | None = None
    message: str | None = None


def ok(data: T | None = None, message: str | None = None) -> Envelope[T]:
    return Envelope(data=data, message=message)
