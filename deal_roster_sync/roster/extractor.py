from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from .parser import NoteStudentEntry, parse_note_students
from .signature import build_roster_signature
from ..utils import to_string_value


@dataclass
class NoteRoster(object):
    """The roster found in a deal's notes, if any."""
    note_id: Optional[str] = None
    signature: Optional[str] = None
    students: List[NoteStudentEntry] = field(default_factory=list)

    def __bool__(self):
        return self.signature is not None and len(self.students) > 0


def _note_fields(note: Union[dict, object]):
    if isinstance(note, dict):
        content = note.get('content')
        if not isinstance(content, str):
            content = note.get('note')
        return note.get('id'), content
    return getattr(note, 'id', None), getattr(note, 'content', None)


def extract_note_students(notes: Optional[Iterable]) -> NoteRoster:
    """
    Walks a deal's notes in the order given and returns the roster of
    the first note that contains one. Later roster notes are ignored.

    :param notes: `DealNote` objects or note JSON objects
    :return: the roster with its note id and signature, or an empty
        :class:`NoteRoster` when no note holds a roster
    """
    if notes is None:
        return NoteRoster()

    for note in notes:
        if note is None:
            continue
        raw_id, content = _note_fields(note)
        if not isinstance(content, str) or not content.strip():
            continue
        students = parse_note_students(content)
        if not students:
            continue
        note_id = to_string_value(raw_id)
        return NoteRoster(note_id=note_id,
                          signature=build_roster_signature(note_id, students),
                          students=students)

    return NoteRoster()
