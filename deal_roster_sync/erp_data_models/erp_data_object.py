from abc import ABC, abstractmethod
from dataclasses import asdict
from typing import List

from .. import exceptions


class ErpDataObject(ABC):

    """
    The base class from which :class:`DealNote`,
    :class:`TrainingSession` and :class:`SessionStudent` inherit.
    Subclasses are dataclasses built from the JSON objects returned by
    the backend; the base class holds the parsing helpers they share.
    """

    @classmethod
    @abstractmethod
    def from_json(cls, json_obj: dict) -> 'ErpDataObject':
        """
        Builds an instance from a backend JSON object, tolerating the
        camelCase aliases the backend sometimes uses.
        """
        pass

    @classmethod
    def from_json_list(cls, json_objs) -> List['ErpDataObject']:
        if json_objs is None:
            return []
        if not isinstance(json_objs, list):
            raise exceptions.ErpMalformedJsonException(json_objs)
        return [cls.from_json(obj) for obj in json_objs
                if isinstance(obj, dict)]

    def to_json(self) -> dict:
        return asdict(self)
