"""Erreurs métier du board, converties en réponses JSON dans app.main"""


class ContentBoardError(Exception):
    status_code = 500

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(ContentBoardError):
    """Champ obligatoire manquant (type, title, content)"""
    status_code = 400


class NotFoundError(ContentBoardError):
    """Aucune ligne touchée, ou contenu absent"""
    status_code = 404


class StorageError(ContentBoardError):
    """Échec de la base ou du stockage des blobs"""
    status_code = 500


class NotifyError(Exception):
    # jamais exposée au client : attrapée dans telegram_service
    pass
