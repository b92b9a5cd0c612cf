from datetime import datetime, timezone
from typing import Optional
import os
import re
import unicodedata

from .exceptions import ErpConfigurationError


WHITESPACE_REG = re.compile(r'\s+')
DMY_DATE_REG = re.compile(r'^(\d{1,2})[/\-](\d{1,2})[/\-](\d{2,4})$')
FRACTION_REG = re.compile(r'\.(\d+)')
_TILDE = '\u0303'  # combining tilde


def get_base_url() -> str:
    """Reads the ERP backend root from the `ERP_API_URL` variable."""
    try:
        url = os.environ['ERP_API_URL']
    except KeyError:
        raise ErpConfigurationError('ERP_API_URL')
    return url.rstrip('/') + '/'


def get_header(token: str = None, custom_args: dict = None) -> dict:
    header = {
        'Accept': 'application/json',
        'Content-Type': 'application/json'
    }
    if token:
        header['Authorization'] = f'Bearer {token}'

    if custom_args is not None:
        header.update(custom_args)
    return header


def normalize_whitespace(value: str) -> str:
    """Collapses every whitespace run to a single space and trims."""
    return re.sub(WHITESPACE_REG, ' ', value).strip()


def to_string_value(value) -> Optional[str]:
    """Stringifies and trims `value`; blank or missing becomes None."""
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def fold_accents(value: str) -> str:
    """Strips diacritics, e.g. "García Núñez" becomes "Garcia Nunez"."""
    decomposed = unicodedata.normalize('NFD', value)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def spanish_sort_key(value: str) -> tuple:
    """
    A sort key approximating Spanish collation as browsers implement
    `localeCompare(..., 'es')`.

    Comparison happens in three levels:

        - primary: base letters, accent and case insensitive, with "ñ"
            treated as its own letter sorting right after "n"
        - secondary: accents
        - tertiary: case, lowercase first

    :param value: the string to build a key for
    :return: a tuple usable as a `sorted` key
    """
    primary, secondary, tertiary = [], [], []
    for ch in value:
        decomposed = unicodedata.normalize('NFD', ch)
        base, marks = decomposed[0], decomposed[1:]
        lower = base.lower()
        is_enye = lower == 'n' and _TILDE in marks
        if is_enye:
            marks = marks.replace(_TILDE, '')
        primary.append((lower, is_enye))
        secondary.append(marks)
        tertiary.append(base != lower)
    return tuple(primary), tuple(secondary), tuple(tertiary)


def _to_python_iso(text: str) -> str:
    # fromisoformat only takes 3 or 6 fraction digits and no 'Z' before 3.11
    text = re.sub(FRACTION_REG,
                  lambda m: '.' + m.group(1).ljust(6, '0')[:6], text, count=1)
    return text.replace('Z', '+00:00')


def to_timestamp(value) -> Optional[float]:
    """
    Converts an ISO-8601 string (or a `datetime`) into a POSIX
    timestamp. Day-first dates such as ``10/01/2024`` are accepted as
    a fallback. Anything else yields None. Naive values are read as
    UTC.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            dt = datetime.fromisoformat(_to_python_iso(text))
        except ValueError:
            match = re.match(DMY_DATE_REG, text)
            if not match:
                return None
            day, month, year = (int(g) for g in match.groups())
            try:
                dt = datetime(year, month, day)
            except ValueError:
                return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()
