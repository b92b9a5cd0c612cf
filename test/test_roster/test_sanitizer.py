import unittest

from deal_roster_sync.roster import sanitize_note_content
from deal_roster_sync.roster.sanitizer import strip_quotes


class TestSanitizeNoteContent(unittest.TestCase):

    def test_empty(self):
        self.assertEqual(sanitize_note_content(None), '')
        self.assertEqual(sanitize_note_content(''), '')
        self.assertEqual(sanitize_note_content('  <p></p> '), '')

    def test_block_tags(self):
        content = '<p>Alumnos del deal:</p><div>Ana|Pérez|1</div>'
        self.assertEqual(sanitize_note_content(content),
                         'Alumnos del deal:\n Ana|Pérez|1')

    def test_line_breaks(self):
        content = 'uno<br>dos<br/>tres<BR />cuatro'
        self.assertEqual(sanitize_note_content(content),
                         'uno\ndos\ntres\ncuatro')

    def test_other_tags_become_spaces(self):
        self.assertEqual(sanitize_note_content('<b>Ana</b><i>Ruiz</i>'),
                         'Ana  Ruiz')

    def test_nbsp(self):
        self.assertEqual(sanitize_note_content('Ana&nbsp;Ruiz&NBSP;Gil'),
                         'Ana Ruiz Gil')

    def test_carriage_returns(self):
        self.assertEqual(sanitize_note_content('a\r\nb\rc'), 'a\nb\nc')

    def test_quotes(self):
        self.assertEqual(sanitize_note_content('Dijo “hola” ya'),
                         'Dijo "hola" ya')
        self.assertEqual(sanitize_note_content('"texto"'), 'texto')
        self.assertEqual(sanitize_note_content('‘texto’'), 'texto')
        self.assertEqual(sanitize_note_content('“texto”'), 'texto')

    def test_strip_quotes_keeps_inner_quotes(self):
        self.assertEqual(strip_quotes('"O\'Neill"'), 'O\'Neill')


if __name__ == '__main__':
    unittest.main()
