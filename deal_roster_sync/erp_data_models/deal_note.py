from dataclasses import dataclass
from typing import List, Optional
import logging

from .erp_data_object import ErpDataObject
from .utils import check_session, first_of, require
from .. import exceptions
from ..erp_session import ErpSession
from ..utils import to_string_value


@dataclass
class DealNote(ErpDataObject):

    """
    A free-text note attached to a deal in the CRM. Notes are returned
    as part of the deal detail and are never written by this package.
    """

    id: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    created_at: Optional[str] = None

    path = 'deals'

    @classmethod
    def from_json(cls, json_obj: dict) -> 'DealNote':
        content = first_of(json_obj, 'content', 'note')
        return cls(
            id=to_string_value(json_obj.get('id')),
            content=content if isinstance(content, str) else None,
            author=to_string_value(json_obj.get('author')),
            created_at=to_string_value(json_obj.get('created_at'))
        )

    @classmethod
    def get_for_deal(cls, deal_id: str,
                     session: ErpSession = None) -> List['DealNote']:
        """
        Fetches the notes of a deal, in the order the backend returns
        them.

        :param deal_id: the CRM deal id
        :param session: an existing ERP session
        :return: the deal's notes
        """
        deal_id = require(deal_id, 'dealId')
        agent = check_session(session)
        logger = logging.getLogger(__name__)
        logger.debug(f'Fetching notes for deal {deal_id}.')
        body = agent.request_json('GET', cls.path, params={'dealId': deal_id})
        deal = body.get('deal') or {}
        if not isinstance(deal, dict):
            raise exceptions.ErpMalformedJsonException(body)
        notes = first_of(deal, 'notes', 'deal_notes')
        return cls.from_json_list(notes)


def fetch_deal_notes(deal_id: str,
                     session: ErpSession = None) -> List[DealNote]:
    return DealNote.get_for_deal(deal_id, session=session)
