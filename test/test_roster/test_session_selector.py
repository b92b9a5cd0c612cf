import random
import unittest

from deal_roster_sync.erp_data_models import TrainingSession
from deal_roster_sync.roster import pick_default_session_id
from deal_roster_sync.utils import to_timestamp


class TestPickDefaultSessionId(unittest.TestCase):

    def test_prefers_active_sessions(self):
        sessions = [
            {'id': 'A', 'estado': 'CANCELADA',
             'fecha_inicio_utc': '2024-01-01T00:00:00Z',
             'nombre_cache': 'Alpha'},
            {'id': 'B', 'estado': 'PLANIFICADA',
             'fecha_inicio_utc': '2024-02-01T00:00:00Z',
             'nombre_cache': 'Beta'}
        ]
        self.assertEqual(pick_default_session_id(sessions), 'B')

        sessions = [
            {'id': 's1', 'estado': 'CANCELADA',
             'fecha_inicio_utc': '2024-01-10'},
            {'id': 's2', 'estado': 'BORRADOR',
             'fecha_inicio_utc': '2024-02-01'}
        ]
        self.assertEqual(pick_default_session_id(sessions), 's2')

    def test_all_cancelled(self):
        sessions = [
            {'id': 'A', 'estado': 'cancelada ',
             'fecha_inicio_utc': '2024-03-01T00:00:00Z'},
            {'id': 'B', 'estado': 'CANCELADA',
             'fecha_inicio_utc': '2024-02-01T00:00:00Z'}
        ]
        self.assertEqual(pick_default_session_id(sessions), 'B')

    def test_earliest_first(self):
        sessions = [
            {'id': 'offset', 'fecha_inicio_utc': '2024-05-01T08:30:00+02:00'},
            {'id': 'utc', 'fecha_inicio_utc': '2024-05-01T07:00:00Z'},
            {'id': 'undated', 'fecha_inicio_utc': None},
            {'id': 'garbage', 'fecha_inicio_utc': 'pronto'}
        ]
        self.assertEqual(pick_default_session_id(sessions), 'offset')
        self.assertEqual(pick_default_session_id(sessions[2:]), 'garbage')

    def test_undated_sessions_last(self):
        sessions = [
            {'id': 'A', 'nombre_cache': 'Alpha'},
            {'id': 'B', 'nombre_cache': 'Zeta',
             'fecha_inicio_utc': '2030-01-01T00:00:00Z'}
        ]
        self.assertEqual(pick_default_session_id(sessions), 'B')

    def test_name_tie_break(self):
        date = '2024-01-01T00:00:00Z'
        sessions = [
            {'id': '1', 'fecha_inicio_utc': date, 'nombre_cache': 'Ñandú'},
            {'id': '2', 'fecha_inicio_utc': date, 'nombre_cache': 'nube'},
            {'id': '3', 'fecha_inicio_utc': date, 'nombre_cache': 'Oso'}
        ]
        self.assertEqual(pick_default_session_id(sessions), '2')
        self.assertEqual(pick_default_session_id([sessions[0], sessions[2]]),
                         '1')

    def test_id_tie_break(self):
        sessions = [{'id': 'b'}, {'id': ' a '}, {'id': 'c'}]
        self.assertEqual(pick_default_session_id(sessions), 'a')

    def test_invalid_ids(self):
        sessions = [None, {'id': None}, {'id': '  '}, {'id': 7}]
        self.assertIsNone(pick_default_session_id(sessions))
        self.assertIsNone(pick_default_session_id([]))
        self.assertIsNone(pick_default_session_id(None))

    def test_deterministic(self):
        sessions = [
            {'id': f's{i}', 'estado': random.choice(['CANCELADA', None]),
             'fecha_inicio_utc': random.choice([None, '2024-01-01',
                                                '2024-01-02T08:00:00Z']),
             'nombre_cache': random.choice(['', 'a', 'B', 'ñ'])}
            for i in range(30)
        ]
        expected = pick_default_session_id(sessions)
        for _ in range(10):
            shuffled = list(sessions)
            random.shuffle(shuffled)
            self.assertEqual(pick_default_session_id(shuffled), expected)

    def test_training_session_objects(self):
        sessions = [
            TrainingSession(id='A', estado='CANCELADA',
                            fecha_inicio_utc='2024-01-01T00:00:00Z'),
            TrainingSession(id='B', estado='PLANIFICADA')
        ]
        self.assertEqual(pick_default_session_id(sessions), 'B')

    def test_fractional_seconds(self):
        sessions = [
            {'id': 'later', 'fecha_inicio_utc': '2024-01-01T09:00:00Z'},
            {'id': 'earlier', 'fecha_inicio_utc': '2024-01-01T08:00:00.5Z'}
        ]
        self.assertEqual(pick_default_session_id(sessions), 'earlier')


class TestToTimestamp(unittest.TestCase):

    def test_iso_variants(self):
        base = to_timestamp('2024-01-01T08:00:00Z')
        self.assertEqual(to_timestamp('2024-01-01T08:00:00.5Z'), base + 0.5)
        self.assertEqual(to_timestamp('2024-01-01T08:00:00.25+00:00'),
                         base + 0.25)
        self.assertAlmostEqual(to_timestamp('2024-01-01T08:00:00.1234567Z'),
                               base + 0.123456, places=5)
        self.assertEqual(to_timestamp('2024-01-01T10:00:00+02:00'), base)
        self.assertEqual(to_timestamp('2024-01-01T08:00:00'), base)

    def test_fallbacks(self):
        self.assertEqual(to_timestamp('01/01/2024'),
                         to_timestamp('2024-01-01'))
        self.assertIsNone(to_timestamp('pronto'))
        self.assertIsNone(to_timestamp('31/02/2024'))
        self.assertIsNone(to_timestamp(None))
        self.assertIsNone(to_timestamp('  '))


if __name__ == '__main__':
    unittest.main()
