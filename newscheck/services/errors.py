class NewsCheckError(Exception):
    """Erro base das operações de domínio."""
    status_code = 400


class NotAuthenticatedError(NewsCheckError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotAuthorizedError(NewsCheckError):
    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class NotFoundError(NewsCheckError):
    status_code = 404


class ConflictError(NewsCheckError):
    status_code = 409
