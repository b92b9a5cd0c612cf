from typing import Iterable, Optional

from ..utils import spanish_sort_key, to_timestamp

CANCELLED = 'CANCELADA'


def _get(session, key):
    if isinstance(session, dict):
        return session.get(key)
    return getattr(session, key, None)


def _sort_key(session: dict) -> tuple:
    start = session['start']
    name = session['name']
    return (
        start is None, start or 0.0,
        spanish_sort_key(name),
        spanish_sort_key(session['id'])
    )


def pick_default_session_id(sessions: Optional[Iterable]) -> Optional[str]:
    """
    Chooses the session of a deal that receives students imported from
    the deal notes: the earliest non-cancelled session, breaking ties by
    name and then by id. Cancelled sessions are only considered when
    nothing else is left.

    :param sessions: `TrainingSession` objects or session JSON objects
    :return: the chosen session's id, or None if there is none
    """
    if not sessions:
        return None

    candidates = []
    for session in sessions:
        if session is None:
            continue
        id_ = _get(session, 'id')
        if not isinstance(id_, str) or not id_.strip():
            continue
        estado = _get(session, 'estado')
        name = _get(session, 'nombre_cache')
        candidates.append({
            'id': id_.strip(),
            'cancelled': (isinstance(estado, str)
                          and estado.strip().upper() == CANCELLED),
            'start': to_timestamp(_get(session, 'fecha_inicio_utc')),
            'name': name.strip().lower() if isinstance(name, str) else '',
        })

    if not candidates:
        return None

    preferred = [c for c in candidates if not c['cancelled']]
    if preferred:
        candidates = preferred

    return min(candidates, key=_sort_key)['id']
