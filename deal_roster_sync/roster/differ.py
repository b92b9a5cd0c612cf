from dataclasses import dataclass, field
from typing import Iterable, List

from .parser import NoteStudentEntry
from ..utils import fold_accents, normalize_whitespace


@dataclass(frozen=True)
class StudentUpdate(object):
    id: str
    nombre: str
    apellido: str


@dataclass
class RosterDiff(object):
    to_create: List[NoteStudentEntry] = field(default_factory=list)
    to_update: List[StudentUpdate] = field(default_factory=list)

    def empty(self) -> bool:
        return not self.to_create and not self.to_update


def _get(record, key):
    if isinstance(record, dict):
        return record.get(key)
    return getattr(record, key, None)


def _compare_name(value) -> str:
    if not isinstance(value, str):
        return ''
    return fold_accents(normalize_whitespace(value)).upper()


def _compare_dni(value) -> str:
    if not isinstance(value, str):
        return ''
    return value.strip().upper()


def diff_note_students(note_students: Iterable[NoteStudentEntry],
                       existing_students: Iterable) -> RosterDiff:
    """
    Compares the roster parsed from a note with the students a session
    already has, matching them by DNI.

    Students whose DNI is unknown to the session are to be created.
    Students whose name or surname differ (ignoring case, accents and
    spacing) are to be updated. When the session holds several records
    with the same DNI only the first is considered.

    :param note_students: the parsed roster
    :param existing_students: `SessionStudent` objects or JSON objects
    :return: the creates and updates, both in roster order
    """
    existing_by_dni = {}
    for student in existing_students:
        dni = _compare_dni(_get(student, 'dni'))
        if dni and dni not in existing_by_dni:
            existing_by_dni[dni] = student

    diff = RosterDiff()
    for student in note_students:
        dni = _compare_dni(student.dni)
        if not dni:
            continue
        match = existing_by_dni.get(dni)
        if match is None:
            diff.to_create.append(student)
            continue

        same_name = (_compare_name(student.nombre)
                     == _compare_name(_get(match, 'nombre')))
        same_surname = (_compare_name(student.apellido)
                        == _compare_name(_get(match, 'apellido')))
        if not (same_name and same_surname) and _get(match, 'id'):
            diff.to_update.append(StudentUpdate(id=_get(match, 'id'),
                                                nombre=student.nombre,
                                                apellido=student.apellido))

    return diff
