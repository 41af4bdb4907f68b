"""Pydantic schemas for request/response validation in the URL shortener.

This module defines Pydantic models for the JSON API input validation and output
serialization, ensuring type safety and automatic OpenAPI documentation generation.

Schema Hierarchy
=================
::
    URLCreate (Input)
    └─ url: str (validated URL)

    URLResponse (Output)
    ├─ short_code: str
    ├─ original_url: str
    └─ short_url: str (computed)

    URLResolution (Output)
    ├─ short_code: str
    └─ original_url: str

    HealthResponse (Output)
    ├─ status: HealthStatus
    ├─ keystore: HealthStatus
    └─ entries: int

Key Behaviours
===============
- URL validation uses the validators library for RFC compliance.
- The HTML form endpoints do not use these models; they only check presence.
"""

import validators
from pydantic import BaseModel, Field, field_validator

from shortener.enums import HealthStatus

__all__ = [
    "URLCreate",
    "URLResponse",
    "URLResolution",
    "HealthResponse",
]


class URLCreate(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not validators.url(v):
            raise ValueError("Invalid URL provided")
        return v


class URLResponse(BaseModel):
    short_code: str
    original_url: str
    short_url: str


class URLResolution(BaseModel):
    short_code: str
    original_url: str


class HealthResponse(BaseModel):
    status: HealthStatus
    keystore: HealthStatus
    entries: int = Field(..., ge=0, description="Number of live short keys")
