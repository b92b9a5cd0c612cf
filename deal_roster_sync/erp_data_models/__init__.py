"""
The :mod:`erp_data_models` package defines the objects read from and
written to the ERP backend functions. Their job is to build the GET,
POST and PATCH requests and to validate the responses thereto.

The base :class:`ErpDataObject` class holds the JSON parsing helpers
shared by its three subclasses:

    - :class:`DealNote`, read from the deal detail (`/deals`)
    - :class:`TrainingSession`, read from `/sessions`
    - :class:`SessionStudent`, read and written through `/alumnos`

Each module also exposes plain functions (`fetch_deal_notes`,
`fetch_deal_sessions`, `fetch_session_students`, `create_student`,
`update_student`) that make up the interface the roster sync uses.
"""

from .deal_note import DealNote, fetch_deal_notes
from .erp_data_object import ErpDataObject
from .session_student import (SessionStudent, create_student,
                              fetch_session_students, update_student)
from .training_session import TrainingSession, fetch_deal_sessions
from .utils import SessionEstado
