from typing import IO, List, Union
import json


class SyncSchedule(object):

    """
    Which deals a :class:`RosterSynchronizer` run should process and
    how chatty it should be. Pass a :class:`SyncSchedule` object to
    :meth:`RosterSynchronizer.run_schedule`.

    Use the :meth:`from_json` method to build an object from a JSON
    file on the disk and the :meth:`default` method to build the object
    specified by the `_DEFAULT_SCHEDULE` class attribute.

    :param deal_ids: the CRM deals whose notes are synchronized
    :param notify_on_no_changes: report runs that found nothing to do
    :param notify_on_missing_note: report deals without a roster note
    :param session_id: when set, students go to this session instead
        of the automatically selected one
    """

    _DEFAULT_SCHEDULE = {
        'deal_ids': [],
        'notify_on_no_changes': False,
        'notify_on_missing_note': False,
        'session_id': None
    }

    def __init__(self, deal_ids: List[str] = None,
                 notify_on_no_changes: bool = False,
                 notify_on_missing_note: bool = False,
                 session_id: str = None):
        self.deal_ids = [str(d).strip() for d in (deal_ids or [])
                         if str(d).strip()]
        self.notify_on_no_changes = bool(notify_on_no_changes)
        self.notify_on_missing_note = bool(notify_on_missing_note)
        self.session_id = session_id

    def __str__(self):
        return f'{self.__class__.__name__}({str(self.to_dict())})'

    __repr__ = __str__

    @classmethod
    def default(cls) -> 'SyncSchedule':
        return cls(**cls._DEFAULT_SCHEDULE)

    @classmethod
    def from_json(cls, json_path: Union[str, IO]) -> 'SyncSchedule':
        """Creates a schedule from a JSON file."""
        if isinstance(json_path, str):
            with open(json_path, 'r') as f:
                return cls(**json.load(f))
        with json_path:
            return cls(**json.load(json_path))

    def to_dict(self) -> dict:
        return dict(self.__dict__)
