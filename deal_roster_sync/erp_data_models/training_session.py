from dataclasses import dataclass
from typing import List, Optional
import logging

from .erp_data_object import ErpDataObject
from .utils import SessionEstado, check_session, first_of, require
from .. import exceptions
from ..erp_session import ErpSession
from ..utils import to_string_value


@dataclass
class TrainingSession(ErpDataObject):

    """
    One scheduled occurrence of a training belonging to a deal.

    :param str id: the session's UUID
    :param str deal_id: the deal the session belongs to
    :param str estado: lifecycle state, one of :class:`SessionEstado`
    :param str fecha_inicio_utc: ISO start date, None if unscheduled
    :param str fecha_fin_utc: ISO end date, None if unscheduled
    :param str nombre_cache: display name of the session
    """

    id: str
    deal_id: str = ''
    estado: str = SessionEstado.BORRADOR.value
    fecha_inicio_utc: Optional[str] = None
    fecha_fin_utc: Optional[str] = None
    nombre_cache: str = ''

    path = 'sessions'

    @classmethod
    def from_json(cls, json_obj: dict) -> 'TrainingSession':
        return cls(
            id=to_string_value(json_obj.get('id')) or '',
            deal_id=to_string_value(first_of(json_obj, 'deal_id',
                                             'dealId')) or '',
            estado=SessionEstado.parse(json_obj.get('estado')).value,
            fecha_inicio_utc=to_string_value(
                first_of(json_obj, 'fecha_inicio_utc', 'fechaInicioUtc')),
            fecha_fin_utc=to_string_value(
                first_of(json_obj, 'fecha_fin_utc', 'fechaFinUtc')),
            nombre_cache=to_string_value(
                first_of(json_obj, 'nombre_cache', 'nombre')) or ''
        )

    @classmethod
    def get_for_deal(cls, deal_id: str,
                     session: ErpSession = None) -> List['TrainingSession']:
        """
        Fetches every session of a deal. The backend groups sessions by
        product; the groups are flattened in the order returned.

        :param deal_id: the CRM deal id
        :param session: an existing ERP session
        :return: all the deal's sessions
        """
        deal_id = require(deal_id, 'dealId')
        agent = check_session(session)
        logger = logging.getLogger(__name__)
        logger.debug(f'Fetching sessions for deal {deal_id}.')
        body = agent.request_json('GET', cls.path, params={'dealId': deal_id})
        groups = body.get('groups') or []
        if not isinstance(groups, list):
            raise exceptions.ErpMalformedJsonException(body)

        ret_val = []
        for group in groups:
            if not isinstance(group, dict):
                continue
            ret_val.extend(cls.from_json_list(
                first_of(group, 'sessions', 'sesiones')))
        return ret_val


def fetch_deal_sessions(deal_id: str,
                        session: ErpSession = None) -> List[TrainingSession]:
    return TrainingSession.get_for_deal(deal_id, session=session)
