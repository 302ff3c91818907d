"""
Pydantic integration for uuid_utils.UUID

Product and order ids are UUID7 values generated with ``uuid_utils.uuid7()``.
uuid_utils.UUID carries no pydantic schema, so FastAPI can neither validate it
in path params / bodies nor document it in OpenAPI. ``UtilsUUID7`` adds both:

    class OrderResponse(BaseModel):
        id: UtilsUUID7          # '0193...' in JSON, uuid_utils.UUID in Python

See:
https://docs.pydantic.dev/latest/concepts/types/#customizing-validation-with-__get_pydantic_core_schema__
"""

from typing import Any
import uuid

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


def _to_uuid(value: Any) -> UUID:
    try:
        return UUID(str(value))
    except Exception as e:
        raise ValueError(f'Invalid UUID: {value}') from e


def _validate_python(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    return _to_uuid(value)


class UtilsUUID7(UUID):
    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # JSON only carries strings; Python callers may pass uuid_utils / stdlib UUIDs too.
        # The plain validator is chained behind str_schema so OpenAPI generation still works.
        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(),
                    core_schema.no_info_plain_validator_function(_to_uuid),
                ]
            ),
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(UUID),
                    core_schema.chain_schema(
                        [
                            core_schema.union_schema(
                                [core_schema.str_schema(), core_schema.is_instance_schema(uuid.UUID)]
                            ),
                            core_schema.no_info_plain_validator_function(_validate_python),
                        ]
                    ),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used='always',
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        # Expanding the core schema would leak validator internals into OpenAPI
        return {'type': 'string', 'format': 'uuid'}
