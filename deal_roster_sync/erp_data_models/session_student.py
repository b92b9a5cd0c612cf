from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import quote
import logging

from .erp_data_object import ErpDataObject
from .utils import check_session, first_of, require
from .. import exceptions
from ..erp_session import ErpSession
from ..utils import to_string_value


@dataclass
class SessionStudent(ErpDataObject):

    """
    Represents a student enrolled in a training session, as stored by
    the `/alumnos` backend function. Within one session a DNI belongs
    to at most one student.

    :param str id: the student's record id
    :param str deal_id: the deal the student belongs to
    :param str sesion_id: the session the student is enrolled in
    :param str nombre: given name
    :param str apellido: surname(s)
    :param str dni: national identity document number
    """

    id: str
    deal_id: str = ''
    sesion_id: str = ''
    nombre: str = ''
    apellido: str = ''
    dni: str = ''
    asistencia: bool = False
    apto: bool = False
    certificado: bool = False
    drive_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    path = 'alumnos'

    @classmethod
    def from_json(cls, json_obj: dict) -> 'SessionStudent':
        return cls(
            id=to_string_value(json_obj.get('id')) or '',
            deal_id=to_string_value(first_of(json_obj, 'deal_id',
                                             'dealId')) or '',
            sesion_id=to_string_value(first_of(json_obj, 'sesion_id',
                                               'session_id',
                                               'sessionId')) or '',
            nombre=to_string_value(first_of(json_obj, 'nombre',
                                            'name')) or '',
            apellido=to_string_value(first_of(json_obj, 'apellido',
                                              'last_name', 'lastName')) or '',
            dni=to_string_value(json_obj.get('dni')) or '',
            asistencia=bool(json_obj.get('asistencia')),
            apto=bool(json_obj.get('apto')),
            certificado=bool(json_obj.get('certificado')),
            drive_url=to_string_value(first_of(json_obj, 'drive_url',
                                               'driveUrl')),
            created_at=to_string_value(json_obj.get('created_at')),
            updated_at=to_string_value(json_obj.get('updated_at'))
        )

    @classmethod
    def _from_body(cls, body: dict) -> 'SessionStudent':
        student = body.get('student')
        if not isinstance(student, dict):
            raise exceptions.ErpMalformedJsonException(body)
        return cls.from_json(student)

    @classmethod
    def get_for_session(cls, deal_id: str, session_id: str,
                        session: ErpSession = None) -> List['SessionStudent']:
        """
        Gets all students enrolled in one session of a deal.

        :param deal_id: the CRM deal id
        :param session_id: the training session's id
        :param session: an existing ERP session
        :return: the session's students, in backend order
        """
        params = {'deal_id': require(deal_id, 'dealId'),
                  'sesion_id': require(session_id, 'sessionId')}
        agent = check_session(session)
        body = agent.request_json('GET', cls.path, params=params)
        return cls.from_json_list(body.get('students'))

    @classmethod
    def create(cls, deal_id: str, session_id: str, nombre: str,
               apellido: str, dni: str,
               session: ErpSession = None) -> 'SessionStudent':
        """
        Enrolls a new student in a session.

        :raises DuplicateDniError: when the session already has a
            student with this DNI
        :return: the stored student
        """
        payload = {
            'deal_id': require(deal_id, 'dealId'),
            'sesion_id': require(session_id, 'sessionId'),
            'nombre': require(nombre, 'nombre'),
            'apellido': require(apellido, 'apellido'),
            'dni': require(dni, 'dni'),
            'asistencia': False,
            'apto': False,
            'certificado': False
        }
        agent = check_session(session)
        logger = logging.getLogger(__name__)
        logger.debug(f'Creating student {payload["dni"]} in session '
                     f'{payload["sesion_id"]}.')
        try:
            body = agent.request_json('POST', cls.path, json=payload)
        except exceptions.DuplicateDniError as e:
            e.dni = payload['dni']
            raise e
        return cls._from_body(body)

    @classmethod
    def update(cls, student_id: str, nombre: str = None,
               apellido: str = None,
               session: ErpSession = None) -> 'SessionStudent':
        """
        Changes the name and/or surname of an existing student. Fields
        left as None are not sent.

        :raises StudentNotFoundError: when the student no longer exists
        :return: the updated student
        """
        student_id = require(student_id, 'studentId')
        payload = {}
        if nombre is not None:
            payload['nombre'] = nombre.strip()
        if apellido is not None:
            payload['apellido'] = apellido.strip()

        agent = check_session(session)
        path = f'{cls.path}/{quote(student_id, safe="")}'
        try:
            body = agent.request_json('PATCH', path, json=payload)
        except exceptions.ErpObjectNotFoundException as e:
            raise exceptions.StudentNotFoundError(student_id,
                                                  message=e.message) from e
        return cls._from_body(body)


def fetch_session_students(deal_id: str, session_id: str,
                           session: ErpSession = None) -> List[SessionStudent]:
    return SessionStudent.get_for_session(deal_id, session_id, session=session)


def create_student(deal_id: str, session_id: str, nombre: str, apellido: str,
                   dni: str, session: ErpSession = None) -> SessionStudent:
    return SessionStudent.create(deal_id, session_id, nombre, apellido, dni,
                                 session=session)


def update_student(student_id: str, nombre: str = None, apellido: str = None,
                   session: ErpSession = None) -> SessionStudent:
    return SessionStudent.update(student_id, nombre=nombre, apellido=apellido,
                                 session=session)
