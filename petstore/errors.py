"""
Errores del repositorio de la tienda.

La capa HTTP (main.py) traduce cada tipo a un código de estado; aquí no se
sabe nada de HTTP.
"""


class PetstoreError(Exception):
    """Base de todos los errores del repositorio"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ---------- No encontrado ----------

class NotFoundError(PetstoreError):
    pass

class MissingPet(NotFoundError):
    pass

class OrderNotFound(NotFoundError):
    pass

class MissingUser(NotFoundError):
    pass

class MissingPhoto(NotFoundError):
    pass

class MissingTag(NotFoundError):
    pass

class MissingCategory(NotFoundError):
    pass


# ---------- Entrada inválida ----------

class InvalidInput(PetstoreError):
    """Alta de una entidad que ya trae id (los ids los genera el servidor)"""

class MissingIdentifier(InvalidInput):
    """Actualización de una entidad que no trae id"""


class RedundantUsername(PetstoreError):
    """El username ya está en uso"""
