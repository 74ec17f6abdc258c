"""
Form field catalog: the shared pool of fields events pick from
"""

import logging
from collections import Counter
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import FieldCatalogError, FieldKeyConflictError
from app.models import FieldDefinition, FIELD_TYPES
from app.services.repositories import FieldRepo
from app.utils.serialization import dump_document

logger = logging.getLogger(__name__)

DEFAULT_FIELDS: List[Dict] = [
    {
        "field_key": "participant_name",
        "label": "Participant name",
        "field_type": "text",
        "placeholder": "Jane Doe",
        "description": "Full name of the person attending",
        "sort_order": 1,
    },
    {
        "field_key": "company_name",
        "label": "Company",
        "field_type": "text",
        "placeholder": "Example Inc.",
        "description": "Company name if attending on behalf of an organization",
        "sort_order": 2,
    },
    {
        "field_key": "position",
        "label": "Position",
        "field_type": "text",
        "placeholder": "Sales Manager",
        "description": "Job title if attending on behalf of an organization",
        "sort_order": 3,
    },
    {
        "field_key": "contact_info",
        "label": "Contact",
        "field_type": "text",
        "placeholder": "555-0100 or name@example.com",
        "description": "Phone number or email address",
        "sort_order": 4,
    },
    {
        "field_key": "email",
        "label": "Email",
        "field_type": "email",
        "placeholder": "name@example.com",
        "description": "Email address",
        "sort_order": 5,
    },
    {
        "field_key": "phone",
        "label": "Phone",
        "field_type": "tel",
        "placeholder": "555-0100",
        "description": "Phone number",
        "sort_order": 6,
    },
    {
        "field_key": "age",
        "label": "Age",
        "field_type": "number",
        "placeholder": "30",
        "description": "Age in years",
        "sort_order": 7,
    },
    {
        "field_key": "gender",
        "label": "Gender",
        "field_type": "select",
        "field_options": ["Male", "Female", "Other"],
        "description": "Select a gender",
        "sort_order": 8,
    },
    {
        "field_key": "occupation",
        "label": "Occupation",
        "field_type": "text",
        "placeholder": "Software engineer",
        "description": "Occupation",
        "sort_order": 9,
    },
    {
        "field_key": "address",
        "label": "Address",
        "field_type": "textarea",
        "placeholder": "123 Main St, Springfield",
        "description": "Postal address",
        "sort_order": 10,
    },
    {
        "field_key": "dietary_restrictions",
        "label": "Dietary restrictions",
        "field_type": "textarea",
        "placeholder": "Allergies, vegetarian, ...",
        "description": "Allergies or dietary restrictions, if any",
        "sort_order": 11,
    },
    {
        "field_key": "emergency_contact",
        "label": "Emergency contact",
        "field_type": "text",
        "placeholder": "555-0199 (family)",
        "description": "Who to call in an emergency",
        "sort_order": 12,
    },
]


class FieldCatalog:
    """Read-mostly access to the field catalog"""

    @staticmethod
    def list_fields(db: Session) -> List[FieldDefinition]:
        """All definitions in display order"""
        return FieldRepo.list_ordered(db)

    @staticmethod
    def seed_default_fields(db: Session, fields: Optional[List[Dict]] = None) -> int:
        """Insert the default catalog when it is empty; returns rows inserted"""
        fields = DEFAULT_FIELDS if fields is None else fields

        duplicates = [key for key, n in Counter(f["field_key"] for f in fields).items() if n > 1]
        if duplicates:
            raise FieldCatalogError(f"Duplicate field keys in catalog seed: {', '.join(sorted(duplicates))}")

        if FieldRepo.count(db) > 0:
            return 0

        for entry in fields:
            FieldRepo.add(db, FieldCatalog._build(**entry))
        db.commit()
        logger.info(f"Seeded {len(fields)} form field definitions")
        return len(fields)

    @staticmethod
    def add_field(
        db: Session,
        field_key: str,
        label: str,
        field_type: str = "text",
        field_options: Optional[List[str]] = None,
        placeholder: Optional[str] = None,
        description: Optional[str] = None,
        sort_order: Optional[int] = None,
    ) -> FieldDefinition:
        """Add a definition to the catalog; keys are unique"""
        if FieldRepo.get_by_key(db, field_key):
            raise FieldKeyConflictError(field_key)

        if sort_order is None:
            existing = FieldRepo.list_ordered(db)
            sort_order = (existing[-1].sort_order + 1) if existing else 1

        definition = FieldRepo.add(db, FieldCatalog._build(
            field_key=field_key,
            label=label,
            field_type=field_type,
            field_options=field_options,
            placeholder=placeholder,
            description=description,
            sort_order=sort_order,
        ))
        db.commit()
        db.refresh(definition)
        logger.info(f"Added form field '{field_key}' ({field_type})")
        return definition

    @staticmethod
    def _build(field_key, label, field_type="text", field_options=None, placeholder=None, description=None, sort_order=0):
        if field_type not in FIELD_TYPES:
            raise FieldCatalogError(f"Unknown field type '{field_type}' for field '{field_key}'")
        return FieldDefinition(
            field_key=field_key,
            label=label,
            field_type=field_type,
            field_options=dump_document(field_options) if field_type == "select" and field_options else None,
            placeholder=placeholder,
            description=description,
            sort_order=sort_order,
        )
