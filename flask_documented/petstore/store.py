"""In-memory pet storage backing the demo routes."""
from __future__ import annotations
import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from .models import Pet, PetStatus


class PetStore:
    def __init__(self):
        self._pets: Dict[int, Pet] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def add(self, pet: Pet) -> Pet:
        with self._lock:
            pet_id = pet.id if pet.id and pet.id not in self._pets else self._next_id
            self._next_id = max(self._next_id, pet_id) + 1
            stored = replace(pet, id=pet_id)
            self._pets[pet_id] = stored
            return stored

    def update(self, pet: Pet) -> Optional[Pet]:
        with self._lock:
            if pet.id not in self._pets:
                return None
            self._pets[pet.id] = pet
            return pet

    def get(self, pet_id: int) -> Optional[Pet]:
        return self._pets.get(pet_id)

    def find_by_status(self, statuses: Iterable[PetStatus]) -> List[Pet]:
        wanted = set(statuses)
        return [p for p in list(self._pets.values()) if p.status in wanted]

    def find_by_tags(self, names: Iterable[str]) -> List[Pet]:
        wanted = set(names)
        return [p for p in list(self._pets.values()) if any(t.name in wanted for t in p.tags)]


__all__ = ['PetStore']
