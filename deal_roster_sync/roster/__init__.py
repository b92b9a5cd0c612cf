"""
The :mod:`roster` package holds the pure, network-free part of the note
roster sync. Each submodule is one step of the pipeline:

    - `sanitizer` turns HTML-ish CRM note content into plain text.
    - `parser` finds the "alumnos del deal" marker and reads the
        student records that follow it.
    - `signature` fingerprints a parsed roster so that the same note
        content is never processed twice.
    - `extractor` picks the first roster note among a deal's notes.
    - `session_selector` picks the session that receives the students.
    - `differ` matches the roster against a session's students by DNI
        and works out what has to be created or updated.
"""

from .differ import RosterDiff, StudentUpdate, diff_note_students
from .extractor import NoteRoster, extract_note_students
from .parser import (NoteStudentEntry, format_note_students,
                     parse_note_students)
from .sanitizer import sanitize_note_content
from .session_selector import pick_default_session_id
from .signature import build_roster_signature
