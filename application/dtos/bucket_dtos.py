from pydantic import BaseModel, Field


class CreateBucketRequest(BaseModel):
    """Request DTO for creating a bucket. Other bucket fields clients send are ignored."""

    name: str | None = Field(None, description="Name of the bucket to create")


class BucketResponse(BaseModel):
    """Minimal bucket resource."""

    name: str = Field(..., description="Name of the bucket")
    kind: str = Field("storage#bucket", description="Resource kind")
