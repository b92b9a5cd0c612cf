from enum import Enum
from typing import Optional

from ..erp_session import ErpSession
from ..exceptions import ErpValidationError
from ..utils import to_string_value


class SessionEstado(Enum):
    BORRADOR = 'BORRADOR'
    PLANIFICADA = 'PLANIFICADA'
    SUSPENDIDA = 'SUSPENDIDA'
    CANCELADA = 'CANCELADA'
    FINALIZADA = 'FINALIZADA'

    @classmethod
    def parse(cls, value) -> 'SessionEstado':
        """Unknown or missing states are read as drafts."""
        text = to_string_value(value)
        if text is None:
            return cls.BORRADOR
        try:
            return cls(text.upper())
        except ValueError:
            return cls.BORRADOR


def check_session(session: Optional[ErpSession]) -> ErpSession:
    """Returns `session`, opening a new one from the environment if None."""
    return session if session is not None else ErpSession()


def require(value, name: str) -> str:
    """Trims `value` and raises if nothing is left."""
    text = to_string_value(value)
    if text is None:
        raise ErpValidationError(f'{name} es obligatorio')
    return text


def first_of(json_obj: dict, *keys):
    """Value of the first key present in `json_obj` and not None."""
    for key in keys:
        value = json_obj.get(key)
        if value is not None:
            return value
    return None
