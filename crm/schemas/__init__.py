"""Pydantic schemas for request/response validation."""

from .common import BaseResponse, ErrorResponse, PaginationMeta, SuccessResponse

__all__ = ["BaseResponse", "ErrorResponse", "PaginationMeta", "SuccessResponse"]
