from typing import Annotated

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

_http_url = TypeAdapter(AnyHttpUrl)


def _check_http_url(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http(s) URL")
    # Keep the client's spelling; AnyHttpUrl would normalize it
    return value


HttpUrlStr = Annotated[str, AfterValidator(_check_http_url)]


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    """Request bodies reject fields they do not declare."""
    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict:
        """Fields the client actually sent, keyed by their camelCase names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
