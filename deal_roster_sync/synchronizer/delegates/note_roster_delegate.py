from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Iterable, List, Optional

from . import SyncDelegate
from ... import exceptions
from ...erp_data_models import SessionStudent, create_student, update_student
from ...notifications import DANGER, INFO, SUCCESS, notify
from ...roster import (NoteRoster, NoteStudentEntry, RosterDiff,
                       StudentUpdate, diff_note_students)

NO_CHANGES_MESSAGE = 'Los alumnos de la nota ya están sincronizados.'
FAILURE_MESSAGE = 'No se pudieron sincronizar los alumnos de la nota.'


@dataclass
class SyncOutcome(object):
    """
    What one run of the note roster sync achieved. Filled in as each
    remote call returns, so it is partial when the run aborted.
    """
    created: List[SessionStudent] = field(default_factory=list)
    updated: List[SessionStudent] = field(default_factory=list)
    skipped: int = 0
    error: Optional[Exception] = None

    @property
    def changed(self) -> bool:
        return len(self.created) > 0 or len(self.updated) > 0


def _count(n: int, singular: str, plural: str) -> str:
    return f'{n} {singular if n == 1 else plural}'


def success_message(outcome: SyncOutcome) -> str:
    parts = []
    if outcome.created:
        parts.append(_count(len(outcome.created), 'alumno creado',
                            'alumnos creados'))
    if outcome.updated:
        parts.append(_count(len(outcome.updated), 'alumno actualizado',
                            'alumnos actualizados'))
    return f'Alumnos sincronizados desde la nota ({" y ".join(parts)})'


def failure_message(error: Exception) -> str:
    if isinstance(error, exceptions.ErpError):
        return f'{FAILURE_MESSAGE} [{error.code}] {error.message or error}'
    return f'{FAILURE_MESSAGE} {error}'


class NoteRosterDelegate(SyncDelegate):

    """
    Applies the roster found in a deal note to the students of one
    training session. The roster is matched against the session's
    students by DNI; mismatching names are updated first, then missing
    students are created, one request at a time.

    A run for a given deal and roster signature happens at most once:
    the signature is marked as processed before the first request goes
    out and only cleared again when the run fails. Failures are not
    rolled back; a retry re-diffs and skips what is already in place.

    The two expected conflicts are skipped silently: a student deleted
    since the diff was computed (``NOT_FOUND`` on update) and a student
    created by someone else in the meantime (``DUPLICATE_DNI`` on
    create). Any other error aborts the rest of the run.
    """

    def execute(self, deal_id: str, roster: NoteRoster, session_id: str,
                students: Iterable[SessionStudent], force: bool = False,
                notify_on_no_changes: bool = False) -> Optional[SyncOutcome]:
        """
        :param deal_id: the deal whose note the roster comes from
        :param roster: the roster extracted from the deal's notes
        :param session_id: the session receiving new students
        :param students: the students currently in that session
        :param force: run even if this roster was already processed,
            used when a session is chosen by hand
        :param notify_on_no_changes: report runs with nothing to do
        :return: the outcome, or None when the run was not started
        """
        deal_id = (deal_id or '').strip()
        session_id = (session_id or '').strip()
        if not deal_id or not session_id or not roster:
            return None

        processed = self.sync.processed
        if self.sync.dry_run:
            if processed.is_processed(deal_id, roster.signature):
                return None
            self.log_operations(deal_id, session_id,
                                diff_note_students(roster.students, students))
            return SyncOutcome()

        if not processed.claim(deal_id, roster.signature, force=force):
            self.logger.debug(f'Roster {roster.signature} for deal {deal_id} '
                              'already processed or in flight.')
            return None

        try:
            diff = diff_note_students(roster.students, students)
            if diff.empty():
                self.logger.info(f'Deal {deal_id}: note roster already in '
                                 'sync with session ' + session_id)
                if notify_on_no_changes:
                    self.notify(INFO, NO_CHANGES_MESSAGE)
                return SyncOutcome()

            self.log_operations(deal_id, session_id, diff)
            return self.apply(deal_id, session_id, diff)
        finally:
            processed.release(deal_id)

    def apply(self, deal_id: str, session_id: str,
              diff: RosterDiff) -> SyncOutcome:
        """Runs updates, then creates, and reports the outcome."""
        outcome = SyncOutcome()
        try:
            self.update_students(diff.to_update, outcome)
            self.create_students(deal_id, session_id, diff.to_create, outcome)
        except Exception as e:
            # Anything past the tolerated conflicts ends the run
            return self.abort(deal_id, outcome, e)

        self.logger.info(f'Deal {deal_id}: created {len(outcome.created)}, '
                         f'updated {len(outcome.updated)}, '
                         f'skipped {outcome.skipped} students.')
        if outcome.changed:
            self.notify(SUCCESS, success_message(outcome))
        return outcome

    def abort(self, deal_id: str, outcome: SyncOutcome,
              error: Exception) -> SyncOutcome:
        """Ends a failed run; the deal's roster may be retried later."""
        outcome.error = error
        self.sync.processed.reset(deal_id)
        self.logger.exception(f'Deal {deal_id}: roster sync aborted after '
                              f'{len(outcome.updated)} updates and '
                              f'{len(outcome.created)} creates.')
        self.notify(DANGER, failure_message(error))
        return outcome

    def update_students(self, to_update: List[StudentUpdate],
                        outcome: SyncOutcome):
        n_updates = len(to_update)
        for i, update in enumerate(to_update):
            progress = f'{i + 1}/{n_updates}:'
            self.logger.info(f'{progress}Updating student {update.id}.')
            try:
                student = update_student(update.id, nombre=update.nombre,
                                         apellido=update.apellido,
                                         session=self.sync.session)
            except exceptions.StudentNotFoundError:
                self.logger.info(f'{progress}Student {update.id} no longer '
                                 'exists. Skipping..')
                outcome.skipped += 1
                continue
            outcome.updated.append(student)

    def create_students(self, deal_id: str, session_id: str,
                        to_create: List[NoteStudentEntry],
                        outcome: SyncOutcome):
        n_creates = len(to_create)
        for i, entry in enumerate(to_create):
            progress = f'{i + 1}/{n_creates}:'
            self.logger.info(f'{progress}Creating student {entry.dni}.')
            try:
                student = create_student(deal_id, session_id,
                                         nombre=entry.nombre,
                                         apellido=entry.apellido,
                                         dni=entry.dni,
                                         session=self.sync.session)
            except exceptions.DuplicateDniError:
                self.logger.info(f'{progress}Student {entry.dni} already '
                                 'exists. Skipping..')
                outcome.skipped += 1
                continue
            outcome.created.append(student)

    def log_operations(self, deal_id: str, session_id: str, diff: RosterDiff):
        ops = {'session_id': session_id}
        if diff.to_update:
            ops['to_update'] = [asdict(u) for u in diff.to_update]
        if diff.to_create:
            ops['to_create'] = [asdict(e) for e in diff.to_create]
        self.sync.operations[deal_id] = ops

    def notify(self, variant: str, message: str):
        notify(self.sync.notifier, variant, message, logger=self.logger)
