from typing import Iterable, Optional

from .parser import NoteStudentEntry
from ..utils import normalize_whitespace, spanish_sort_key

UNKNOWN_NOTE = 'unknown'


def build_roster_signature(note_id: Optional[str],
                           students: Iterable[NoteStudentEntry]) -> str:
    """
    Builds a fingerprint of a parsed roster that does not depend on the
    order the students were written in. Two signatures are equal only
    when they come from the same note and hold the same students.

    :param note_id: identifier of the note the roster was read from
    :param students: the parsed roster
    :return: an opaque string meant only for equality checks
    """
    normalized = [
        NoteStudentEntry(nombre=normalize_whitespace(s.nombre),
                         apellido=normalize_whitespace(s.apellido),
                         dni=s.dni.strip().upper())
        for s in students
    ]
    normalized.sort(key=lambda s: (s.dni,
                                   spanish_sort_key(s.apellido),
                                   spanish_sort_key(s.nombre),
                                   s.apellido, s.nombre))
    serialized = ';'.join(f'{s.dni}|{s.nombre}|{s.apellido}'
                          for s in normalized)
    prefix = note_id if note_id is not None else UNKNOWN_NOTE
    return f'{prefix}|{serialized}'
