"""
Per-event form schema: which catalog fields an event asks for
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.models import Event, FieldDefinition
from app.services.field_catalog import FieldCatalog
from app.utils.serialization import dump_document, parse_or_default

FormSchema = Dict[str, Dict[str, bool]]


@dataclass(frozen=True)
class ActiveField:
    """A catalog field as used by one event"""

    definition: FieldDefinition
    required: bool

    @property
    def key(self) -> str:
        return self.definition.field_key

    def to_dict(self) -> Dict[str, Any]:
        d = self.definition
        return {
            "key": d.field_key,
            "label": d.label,
            "type": d.field_type,
            "options": d.options,
            "placeholder": d.placeholder,
            "description": d.description,
            "sort_order": d.sort_order,
            "required": self.required,
        }


def normalize_form_schema(raw: Any) -> FormSchema:
    """Coerce a loaded schema document into ``{key: {"required": bool}}``.

    Non-mapping documents become empty; entries that are not mappings keep
    their key with ``required=False``.
    """
    if not isinstance(raw, Mapping):
        return {}
    schema: FormSchema = {}
    for key, entry in raw.items():
        required = entry.get("required", False) if isinstance(entry, Mapping) else False
        schema[str(key)] = {"required": required is True or required == 1}
    return schema


def parse_form_schema(raw: Optional[str]) -> FormSchema:
    """Parse the stored schema text; malformed documents yield an empty schema"""
    return normalize_form_schema(parse_or_default(raw, {}))


def dump_form_schema(schema: Mapping[str, Any]) -> Optional[str]:
    normalized = normalize_form_schema(schema)
    return dump_document(normalized) if normalized else None


def required_keys(schema: FormSchema) -> List[str]:
    return [key for key, entry in schema.items() if entry.get("required")]


def fields_for_event(db: Session, event: Event) -> List[ActiveField]:
    """Catalog fields referenced by the event's schema, in catalog order.

    Schema keys with no catalog entry are dropped; catalogs can change
    after an event is created.
    """
    schema = parse_form_schema(event.form_fields)
    if not schema:
        return []
    return [
        ActiveField(definition=field, required=schema[field.field_key]["required"])
        for field in FieldCatalog.list_fields(db)
        if field.field_key in schema
    ]
