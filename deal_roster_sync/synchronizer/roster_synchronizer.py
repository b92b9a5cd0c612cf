from datetime import datetime
from os import environ
from typing import Dict, Optional
import json
import logging
import time

import requests

from . import delegates
from .signature_store import ProcessedSignatureStore
from .. import exceptions
from ..erp_data_models import (fetch_deal_notes, fetch_deal_sessions,
                               fetch_session_students)
from ..erp_session import ErpSession
from ..notifications import INFO, LoggingNotifier, NotificationSink, notify
from ..roster import extract_note_students, pick_default_session_id
from ..sync_schedule import SyncSchedule

MISSING_NOTE_MESSAGE = 'No se encontraron alumnos en las notas para sincronizar.'
PENDING_SESSION_MESSAGE = ('Se ha detectado un alumno en notas, en unos '
                           'segundos se añadirá al deal')


class RosterSynchronizer(object):

    """
    A driver class that brings the students of a deal's training
    session in line with the roster written in the deal's notes. The
    note is treated as the "master" copy the stored students should
    match; students are never removed.
    """

    def __init__(self, session: ErpSession = None,
                 notifier: Optional[NotificationSink] = None,
                 status_path: str = 'last_sync_info.json'):
        """
        Opens a session with the ERP API and initializes a logger.

        :param session: an existing ERP session
        :param notifier: where user-facing notifications go; defaults
            to a :class:`LoggingNotifier`
        :param status_path: file receiving the status of the last
            :meth:`run_schedule` call
        """
        self.session = session if session is not None else ErpSession()
        self.logger = logging.getLogger(__name__)
        self.notifier = (notifier if notifier is not None
                         else LoggingNotifier(self.logger))
        self.status_path = status_path
        self.dry_run = bool(int(environ.get('ROSTER_DRY_RUN', False)))
        """True indicates operations should only be logged, not carried out."""
        self.operations = {}
        """A log of all the operations that were/should be executed."""
        self.processed = ProcessedSignatureStore()
        self._warned: Dict[str, str] = {}

        self.sync_note_roster = delegates.NoteRosterDelegate(self)

    def sync_deal(self, deal_id: str, session_id: str = None,
                  notify_on_no_changes: bool = False,
                  notify_on_missing_note: bool = False) \
            -> Optional[delegates.SyncOutcome]:
        """
        Reads a deal's notes and, if one of them holds a roster, applies
        it to the students of the deal's default session.

        :param deal_id: the CRM deal id
        :param session_id: a session chosen by hand; bypasses the
            automatic selection and the already-processed check
        :param notify_on_no_changes: report runs with nothing to do
        :param notify_on_missing_note: report deals without a roster
        :raises ErpError: when the deal data cannot be fetched
        :return: the outcome of the run, or None if no run happened
        """
        deal_id = (deal_id or '').strip()
        if not deal_id:
            return None

        roster = extract_note_students(fetch_deal_notes(deal_id,
                                                        session=self.session))
        if not roster:
            self.logger.info(f'Deal {deal_id}: no roster found in notes.')
            if notify_on_missing_note:
                notify(self.notifier, INFO, MISSING_NOTE_MESSAGE,
                       logger=self.logger)
            return None
        self.logger.info(f'Deal {deal_id}: found {len(roster.students)} '
                         f'students in note {roster.note_id}.')

        manual = bool(session_id and session_id.strip())
        if manual:
            target = session_id.strip()
        else:
            sessions = fetch_deal_sessions(deal_id, session=self.session)
            target = pick_default_session_id(sessions)
        if target is None:
            self._warn_pending_session(deal_id, roster.signature)
            return None

        students = fetch_session_students(deal_id, target,
                                          session=self.session)
        return self.sync_note_roster(deal_id, roster, target, students,
                                     force=manual,
                                     notify_on_no_changes=notify_on_no_changes)

    def _warn_pending_session(self, deal_id: str, signature: str):
        """Warns once per roster that no session can receive it yet."""
        self.logger.info(f'Deal {deal_id}: no session to receive the roster.')
        if self._warned.get(deal_id) == signature:
            return
        self._warned[deal_id] = signature
        notify(self.notifier, INFO, PENDING_SESSION_MESSAGE, logger=self.logger)

    def run_schedule(self, s: SyncSchedule) -> dict:
        """
        Synchronize every deal listed in the :class:`SyncSchedule`
        object.

        :param s: a SyncSchedule object
        :return: the status of each deal
        """
        as_dict = s.to_dict()
        pretty_string = json.dumps(as_dict, indent=2)
        self.logger.info('Received the following SyncSchedule\n'
                         + pretty_string)
        output = {
            'time': time.strftime('%Y-%m-%d %H:%M:%S %Z'),
            'schedule': as_dict
        }

        deal_status = {}
        n_deals = len(s.deal_ids)
        for i, deal_id in enumerate(s.deal_ids):
            self.logger.info(f'{i + 1}/{n_deals}:Synchronizing deal {deal_id}')
            deal_status[deal_id] = 'started'
            try:
                outcome = self.sync_deal(
                    deal_id, session_id=s.session_id,
                    notify_on_no_changes=s.notify_on_no_changes,
                    notify_on_missing_note=s.notify_on_missing_note
                )
            except (exceptions.ErpError,
                    requests.exceptions.RequestException):
                self.logger.exception(f'Could not synchronize deal {deal_id}.')
                deal_status[deal_id] = 'failed'
                continue

            if outcome is None:
                deal_status[deal_id] = 'skipped'
            elif outcome.error is not None:
                deal_status[deal_id] = 'failed'
            elif outcome.changed:
                deal_status[deal_id] = 'success'
            else:
                deal_status[deal_id] = 'noop'

        output['status'] = deal_status
        with open(self.status_path, 'w+') as f:
            json.dump(output, f)
        if self.dry_run:
            self.save()
        return deal_status

    def save(self, path: str = 'dry_run_info.json'):
        """
        Writes the operations that were (or, in a dry run, would have
        been) executed to a JSON file.
        """
        with open(path, 'w+') as f:
            self.operations['dry_run'] = self.dry_run
            self.operations['runtime'] = (datetime.now()
                                          .strftime('%Y-%m-%d %H:%M:%S %Z'))
            json.dump(self.operations, f)
