import re

QUOTE_CHARS = '"\'‘’'

NBSP_REG = re.compile(r'&nbsp;', re.IGNORECASE)
LINE_BREAK_TAG_REG = re.compile(r'<br\s*/?>|</p>|</div>', re.IGNORECASE)
TAG_REG = re.compile(r'<[^>]+>')
CARRIAGE_RETURN_REG = re.compile(r'\r\n?')
CURLY_DOUBLE_QUOTE_REG = re.compile(r'[“”]')
LEADING_QUOTES_REG = re.compile(f'^[{QUOTE_CHARS}]+')
TRAILING_QUOTES_REG = re.compile(f'[{QUOTE_CHARS}]+$')


def strip_quotes(value: str) -> str:
    """Removes one run of quote characters from each end of `value`."""
    value = re.sub(LEADING_QUOTES_REG, '', value)
    return re.sub(TRAILING_QUOTES_REG, '', value)


def sanitize_note_content(content: str) -> str:
    """
    Turns the HTML-ish body of a CRM note into plain text. Line-breaking
    tags become newlines, every other tag becomes a space, curly double
    quotes are straightened and the quotes wrapping the whole note are
    dropped.

    :param content: the raw note content as stored by the CRM
    :return: the sanitized text, possibly empty
    """
    if not content:
        return ''
    text = re.sub(NBSP_REG, ' ', content)
    text = re.sub(LINE_BREAK_TAG_REG, '\n', text)
    text = re.sub(TAG_REG, ' ', text)
    text = re.sub(CARRIAGE_RETURN_REG, '\n', text)
    text = re.sub(CURLY_DOUBLE_QUOTE_REG, '"', text)
    return strip_quotes(text).strip()
