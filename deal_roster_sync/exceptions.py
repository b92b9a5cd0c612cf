class ErpError(Exception):

    """
    Base class for every error raised when talking to the ERP backend.
    Mirrors the error body returned by the backend functions: a
    machine-readable ``code``, a human-readable ``message`` and the
    HTTP ``status`` when there was one.
    """

    default_code = 'UNKNOWN_ERROR'

    def __init__(self, message: str = None, code: str = None,
                 status: int = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status = status

    def __str__(self):
        out = 'There was an error when interfacing with the ERP API'
        if self.message is None:
            return out + '.'
        return f'{out}: [{self.code}] {self.message}'


class ErpConnectionException(ErpError):

    default_code = 'NETWORK_ERROR'

    def __str__(self):
        return 'The ERP API endpoint could not be reached.'


class ErpConfigurationError(ErpError):

    default_code = 'CONFIGURATION_ERROR'

    def __init__(self, variable: str):
        super().__init__(f'{variable} is not set in the environment.')
        self.variable = variable

    def __str__(self):
        return self.message


class ErpMalformedJsonException(ErpError):

    default_code = 'INVALID_RESPONSE'

    def __init__(self, body, status: int = None):
        super().__init__('Respuesta JSON inválida del servidor.',
                         status=status)
        self.body = body

    def __str__(self):
        return 'Received bad JSON response: ' + str(self.body)


class ErpValidationError(ErpError):
    """Raised before a request is sent when its input is unusable."""

    default_code = 'VALIDATION_ERROR'

    def __str__(self):
        return f'Invalid request: {self.message}'


class ErpAuthenticationError(ErpError):

    default_code = 'UNAUTHORIZED'

    def __str__(self):
        if self.message is None:
            return 'There was a problem with ERP API authentication.'
        return self.message


class ErpNotAuthorizedError(ErpAuthenticationError):

    default_code = 'FORBIDDEN'

    def __str__(self):
        return 'ERP token was rejected by the API.'


class ErpObjectNotFoundException(ErpError):

    default_code = 'NOT_FOUND'

    def __init__(self, object_id=None, message: str = None,
                 status: int = 404):
        super().__init__(message, status=status)
        self.object_id = object_id

    def __str__(self):
        if self.object_id is None:
            return self.message or 'Object could not be retrieved.'
        return f'Object bearing id {self.object_id} could not be retrieved.'


class StudentNotFoundError(ErpObjectNotFoundException):
    """The student was deleted (or never existed) on the backend."""

    def __str__(self):
        return f'Student bearing id {self.object_id} no longer exists.'


class DuplicateDniError(ErpError):

    """
    Raised when the backend refuses to create a student because the
    session already has a student with the same DNI.
    """

    default_code = 'DUPLICATE_DNI'

    def __init__(self, dni: str = None, message: str = None,
                 status: int = 409):
        super().__init__(message, status=status)
        self.dni = dni

    def __str__(self):
        return f'Student with DNI {self.dni} already exists in the session.'


def error_for_code(code: str, message: str = None,
                   status: int = None) -> ErpError:
    """
    Builds the exception matching an ``error_code`` reported by the
    backend, falling back to a plain :class:`ErpError`.
    """
    if code == 'DUPLICATE_DNI':
        return DuplicateDniError(message=message, status=status)
    if code == 'NOT_FOUND':
        return ErpObjectNotFoundException(message=message, status=status)
    if code == 'VALIDATION_ERROR':
        return ErpValidationError(message, status=status)
    if status == 401:
        return ErpAuthenticationError(message, code=code, status=status)
    if status == 403:
        return ErpNotAuthorizedError(message, code=code, status=status)
    return ErpError(message, code=code, status=status)
