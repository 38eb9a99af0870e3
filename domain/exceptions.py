"""Domain exceptions for storage rule violations."""


class DomainError(Exception):
    """Base exception for domain layer."""


class ValidationError(DomainError):
    """Raised when a request is missing a required parameter or is otherwise invalid."""


class PathTraversalError(DomainError):
    """Raised when a bucket name or object key resolves outside its base directory."""


class MalformedRequestError(DomainError):
    """Raised when a multipart upload body cannot be decoded."""


class BucketAlreadyExistsError(DomainError):
    """Raised when creating a bucket whose directory already exists."""


class ObjectNotFoundError(DomainError):
    """Raised when an object's backing file does not exist."""


class InfrastructureError(DomainError):
    """Raised when infrastructure operations fail (disk, permissions, etc.)."""
