"""Representative blank value for a model attribute."""
from __future__ import annotations

from typing import Any, Optional

from model_matchers.db.reflection import Association, ModelReflector


class BlankValue:
    """Compute what "blank" means for ``attribute`` on ``record``.

    Collection associations blank to an empty collection, list/set serialized
    attributes to an empty list/set, dict serialized attributes to ``{}`` and
    everything else to ``None``.
    """

    def __init__(self, record: Any, attribute: str, reflector: Optional[ModelReflector] = None):
        self.record = record
        self.attribute = attribute
        self.reflector = reflector or ModelReflector(type(record))

    @property
    def value(self):
        association = self.reflection
        if association is not None and association.is_collection:
            return association.empty_collection()
        serialization_class = self.reflector.serialization_class(self.attribute)
        if serialization_class is list:
            return []
        if serialization_class is set:
            return set()
        if serialization_class is dict:
            return {}
        return None

    @property
    def reflection(self) -> Optional[Association]:
        return self.reflector.reflect_on_association(self.attribute)

    @property
    def is_collection(self) -> bool:
        association = self.reflection
        return association is not None and association.is_collection
