"""
Parsing of the student list that sales staff paste into a deal note.
A roster note looks like::

    Alumnos del deal: Ana|García López|12345678A; Luis|Pérez|87654321B

Records are separated by ``;`` and the fields of a record by ``|``. The
first field is the given name, the last one the DNI and anything in
between is the surname.
"""

from dataclasses import dataclass
from typing import Iterable, List
import re

from .sanitizer import QUOTE_CHARS, sanitize_note_content, strip_quotes
from ..utils import normalize_whitespace

NOTE_HEADER = 'alumnos del deal'
HEADER_REG = re.compile(re.escape(NOTE_HEADER), re.IGNORECASE)
LEADING_SEPARATOR_REG = re.compile(fr'^[:\-\s{QUOTE_CHARS}]+')
NEWLINES_REG = re.compile(r'\n+')
RECORD_SEPARATOR_REG = re.compile(r'\s*;\s*')
FIELD_SEPARATOR_REG = re.compile(r'\s*\|\s*')
NON_DNI_CHARS_REG = re.compile(r'[^A-Z0-9]')
MIN_FIELDS = 3


@dataclass(frozen=True)
class NoteStudentEntry(object):
    """A student read from a note, not yet stored anywhere."""
    nombre: str
    apellido: str
    dni: str


def normalize_dni(value: str) -> str:
    return re.sub(NON_DNI_CHARS_REG, '', value.upper())


def parse_note_students(content: str) -> List[NoteStudentEntry]:
    """
    Finds the "alumnos del deal" marker in a note and parses the
    records that follow it. Records with fewer than three fields or an
    empty name, surname or DNI are skipped, as is any record repeating
    a DNI already seen in the same note.

    :param content: raw or sanitized note content
    :return: the students in the order they appear in the note; empty
        when the note is not a roster note
    """
    if not content or not content.strip():
        return []

    cleaned = sanitize_note_content(content)
    header = re.search(HEADER_REG, cleaned)
    if header is None:
        return []

    body = re.sub(LEADING_SEPARATOR_REG, '', cleaned[header.end():])
    if not body.strip():
        return []

    body = re.sub(NEWLINES_REG, ' ', body)
    body = re.sub(RECORD_SEPARATOR_REG, ';', body)
    body = re.sub(FIELD_SEPARATOR_REG, '|', body).strip()

    seen = set()
    students = []
    for record in body.split(';'):
        record = record.strip()
        if not record:
            continue
        entry = _parse_record(record)
        if entry is None or entry.dni in seen:
            continue
        seen.add(entry.dni)
        students.append(entry)

    return students


def _parse_record(record: str):
    fields = [normalize_whitespace(strip_quotes(f)) for f in record.split('|')]
    fields = [f for f in fields if f]
    if len(fields) < MIN_FIELDS:
        return None

    nombre = fields[0]
    # Surnames split by a stray "|" are glued back together
    apellido = ' '.join(fields[1:-1]).strip()
    dni = normalize_dni(fields[-1])
    if not (nombre and apellido and dni):
        return None
    return NoteStudentEntry(nombre=nombre, apellido=apellido, dni=dni)


def format_note_students(students: Iterable[NoteStudentEntry]) -> str:
    """Renders students back into the note format read by the parser."""
    records = '; '.join(f'{s.nombre}|{s.apellido}|{s.dni}' for s in students)
    return f'Alumnos del deal: {records}'
