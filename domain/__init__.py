"""Domain layer exports."""

from domain.exceptions import (
    BucketAlreadyExistsError,
    DomainError,
    InfrastructureError,
    MalformedRequestError,
    ObjectNotFoundError,
    PathTraversalError,
    ValidationError,
)
from domain.value_objects import ContentDigests, MimeType

__all__ = [
    "BucketAlreadyExistsError",
    "ContentDigests",
    "DomainError",
    "InfrastructureError",
    "MalformedRequestError",
    "MimeType",
    "ObjectNotFoundError",
    "PathTraversalError",
    "ValidationError",
]
