import logging
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

log = logging.getLogger(__name__)


class QueryParams(BaseModel):
    """
    Table API request parameters carrying an encoded query.

    Field aliases are the ``sysparm_*`` names the service expects, and
    ``to_request_params`` serializes everything to strings so the mapping can
    be handed to any HTTP client as query parameters.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    query: str = Field(alias="sysparm_query", min_length=1)
    display_value: Union[bool, Literal["all"]] = Field(
        default=True, alias="sysparm_display_value"
    )
    exclude_reference_link: bool = Field(
        default=True, alias="sysparm_exclude_reference_link"
    )
    limit: Optional[int] = Field(default=None, alias="sysparm_limit", gt=0)
    offset: Optional[int] = Field(default=None, alias="sysparm_offset", ge=0)
    fields: Optional[List[str]] = Field(default=None, alias="sysparm_fields")

    @field_serializer("display_value", "exclude_reference_link")
    def _serialize_flag(self, value: Union[bool, str]) -> str:
        if isinstance(value, bool):
            return str(value).lower()
        return value

    @field_serializer("limit", "offset")
    def _serialize_int(self, value: Optional[int]) -> Optional[str]:
        return None if value is None else str(value)

    @field_serializer("fields")
    def _serialize_fields(self, value: Optional[List[str]]) -> Optional[str]:
        return None if value is None else ",".join(value)

    def to_request_params(self) -> Dict[str, str]:
        """Serialize to the ``sysparm_*`` mapping, omitting unset options."""
        params = self.model_dump(by_alias=True, exclude_none=True)
        log.debug(f"Serialized request params: {params}")
        return params
