from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from flask_documented.openapi_parts.schemas import prop, schema


@schema(description='pet status in the store')
class PetStatus(Enum):
    AVAILABLE = 'available'
    PENDING = 'pending'
    SOLD = 'sold'


@dataclass
class Category:
    id: int = 0
    name: Optional[str] = None


@dataclass
class Tag:
    id: int = 0
    name: Optional[str] = None


@dataclass
class Pet:
    id: int = 0
    category: Optional[Category] = None
    name: str = prop(required=True, default='')
    photoUrls: List[str] = prop(required=True, default_factory=list)
    tags: List[Tag] = field(default_factory=list)
    status: PetStatus = PetStatus.AVAILABLE

    @classmethod
    def from_json(cls, data: dict) -> 'Pet':
        cat = data.get('category')
        return cls(
            id=int(data.get('id') or 0),
            category=Category(int(cat.get('id') or 0), cat.get('name')) if isinstance(cat, dict) else None,
            name=data.get('name') or '',
            photoUrls=list(data.get('photoUrls') or []),
            tags=[Tag(int(t.get('id') or 0), t.get('name')) for t in data.get('tags') or [] if isinstance(t, dict)],
            status=PetStatus(data.get('status') or PetStatus.AVAILABLE.value),
        )


EXAMPLE_PET = Pet(0, Category(0, 'string'), 'doggie', ['string'], [Tag(0, 'string')], PetStatus.AVAILABLE)

__all__ = ['PetStatus', 'Category', 'Tag', 'Pet', 'EXAMPLE_PET']
