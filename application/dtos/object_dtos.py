from collections.abc import Iterator
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ObjectResource(BaseModel):
    """JSON resource describing an object, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    kind: str = Field("storage#object", description="Resource kind")
    id: str = Field(..., description="Resource identifier, '{bucket}/{name}'")
    bucket: str = Field(..., description="Name of the containing bucket")
    name: str = Field(..., description="Object key")
    size: str = Field(..., description="Content length in bytes, as a string")
    content_type: str = Field(..., description="Declared or inferred content type")
    storage_class: str = Field("STANDARD", description="Storage class")
    md5_hash: str = Field(..., description="Base64 MD5 digest of the content")
    # explicit alias, the generator would camel-case the trailing "c"
    crc32c: str = Field(
        ...,
        alias="crc32c",
        description="Base64 big-endian CRC32C checksum of the content",
    )
    etag: str = Field(..., description="Entity tag (the MD5 digest)")
    self_link: str = Field(..., description="Link to this metadata resource")
    media_link: str = Field(..., description="Link to download the content")
    time_created: str = Field(..., description="ISO-8601 modification time")
    updated: str = Field(..., description="ISO-8601 modification time")
    metageneration: str = Field("1", description="Metadata generation, always 1")
    generation: str = Field(..., description="Modification time in milliseconds")

    def to_json(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class ObjectMetadata:
    """Resource representation of an object plus its matching transport headers."""

    resource: ObjectResource
    headers: dict[str, str]


@dataclass(frozen=True)
class ObjectMedia:
    """Transport headers plus a lazily-read stream over an object's content."""

    headers: dict[str, str]
    chunks: Iterator[bytes]
