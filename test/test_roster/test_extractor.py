import unittest

from deal_roster_sync.erp_data_models import DealNote
from deal_roster_sync.roster import (NoteRoster, NoteStudentEntry,
                                     extract_note_students)


class TestExtractNoteStudents(unittest.TestCase):

    def test_no_roster(self):
        notes = [
            {'id': '1', 'content': 'Cliente interesado. ' * 200},
            {'id': '2', 'content': '<p>Presupuesto enviado</p>'},
            {'id': '3', 'content': None},
            None
        ]
        roster = extract_note_students(notes)
        self.assertEqual(roster, NoteRoster())
        self.assertFalse(roster)
        self.assertEqual(extract_note_students(None), NoteRoster())
        self.assertEqual(extract_note_students([]), NoteRoster())

    def test_first_roster_note_wins(self):
        notes = [
            {'id': '1', 'content': 'Sin alumnos'},
            {'id': ' 2 ', 'content': 'Alumnos del deal: Ana|Ruiz|1A'},
            {'id': '3', 'content': 'Alumnos del deal: Eva|Soler|2B'}
        ]
        roster = extract_note_students(notes)
        self.assertTrue(roster)
        self.assertEqual(roster.note_id, '2')
        self.assertEqual(roster.signature, '2|1A|Ana|Ruiz')
        self.assertListEqual(roster.students,
                             [NoteStudentEntry('Ana', 'Ruiz', '1A')])

    def test_marker_without_records_is_skipped(self):
        notes = [
            {'id': '1', 'content': 'Alumnos del deal: pendiente'},
            {'id': '2', 'content': 'Alumnos del deal: Eva|Soler|2B'}
        ]
        self.assertEqual(extract_note_students(notes).note_id, '2')

    def test_note_key_fallback(self):
        notes = [{'id': 9, 'note': 'Alumnos del deal: Ana|Ruiz|1A'}]
        roster = extract_note_students(notes)
        self.assertEqual(roster.note_id, '9')

    def test_missing_note_id(self):
        notes = [{'id': '  ', 'content': 'Alumnos del deal: Ana|Ruiz|1A'}]
        roster = extract_note_students(notes)
        self.assertIsNone(roster.note_id)
        self.assertEqual(roster.signature, 'unknown|1A|Ana|Ruiz')

    def test_deal_note_objects(self):
        notes = [DealNote(id='5', content='Alumnos del deal: Ana|Ruiz|1A')]
        self.assertEqual(extract_note_students(notes).note_id, '5')


if __name__ == '__main__':
    unittest.main()
