"""
Repositorio en memoria de la tienda.

Seis mapas independientes (mascotas, tags, categorías, pedidos, fotos y
usuarios), cada uno con su propio lock. No hay transacciones entre mapas:
al crear una mascota, sus tags y su categoría se guardan después y por
separado, así que un lector concurrente puede ver la mascota antes que
ellos, y si su alta falla la mascota se queda creada igualmente.

Los ids se generan como 0 si el mapa está vacío o max + 1 en otro caso;
borrar el id mayor y volver a crear reutiliza ese id.
"""
from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Optional, TypeVar
import logging

from pydantic import BaseModel, ValidationError

from .errors import (
    InvalidInput, MissingCategory, MissingIdentifier, MissingPet, MissingPhoto,
    MissingTag, MissingUser, OrderNotFound, PetstoreError, RedundantUsername,
)
from .schemas.order import Order
from .schemas.pet import Category, Inventory, Pet, Status, Tag
from .schemas.user import User
from .store import LockedStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

PHOTO_URL = "/photos/{}"


@dataclass
class BestEffort(Generic[T]):
    """Resultado de un efecto secundario cuyo fallo no se propaga"""
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _status_code(s: Any) -> str:
    return s.value if isinstance(s, Status) else str(s)


def _snapshot(record: M) -> M:
    # los modelos son mutables: nunca se entrega el objeto guardado
    return record.model_copy(deep=True)


class PetstoreDb:
    def __init__(
        self,
        pets: Optional[LockedStore[Pet]] = None,
        tags: Optional[LockedStore[Tag]] = None,
        categories: Optional[LockedStore[Category]] = None,
        orders: Optional[LockedStore[Order]] = None,
        photos: Optional[LockedStore[bytes]] = None,
        users: Optional[LockedStore[User]] = None,
    ) -> None:
        self.pets = pets if pets is not None else LockedStore("pets")
        self.tags = tags if tags is not None else LockedStore("tags")
        self.categories = categories if categories is not None else LockedStore("categories")
        self.orders = orders if orders is not None else LockedStore("orders")
        self.photos = photos if photos is not None else LockedStore("photos")
        self.users = users if users is not None else LockedStore("users")

    # ==================== Mascotas ====================

    async def get_pet(self, pet_id: int) -> Pet:
        pet = self.pets.get(pet_id)
        if pet is None:
            raise MissingPet(f"La mascota {pet_id} no existe")
        return _snapshot(pet)

    async def add_pet(self, pet: Pet) -> int:
        """
        Da de alta una mascota (sin id) y devuelve el id generado.

        Después guarda, como efectos secundarios sin garantía, cada tag
        embebido y la categoría embebida. Sus fallos no afectan a la mascota.
        """
        if pet.id is not None:
            raise InvalidInput("Una mascota nueva no debe traer id")
        pet_id, _ = self.pets.allocate(
            lambda new_id: pet.model_copy(update={"id": new_id}, deep=True)
        )
        logger.info("Mascota %s creada", pet_id)

        for result in await self._persist_embedded(pet):
            if not result.ok:
                logger.debug("Alta embebida de la mascota %s descartada: %s", pet_id, result.error)
        return pet_id

    async def _persist_embedded(self, pet: Pet) -> List[BestEffort]:
        results: List[BestEffort] = []
        for tag in pet.tags or []:
            results.append(await self._best_effort(self.add_tag(tag)))
        if pet.category is not None:
            results.append(await self._best_effort(self.add_category(pet.category)))
        return results

    @staticmethod
    async def _best_effort(coro) -> BestEffort:
        try:
            return BestEffort(value=await coro)
        except PetstoreError as e:
            return BestEffort(error=e)

    async def update_pet(self, pet: Pet) -> Pet:
        """Reemplazo completo (no merge) de una mascota existente"""
        if pet.id is None:
            raise MissingIdentifier(f"Falta el id de la mascota: {pet.name}")
        stored = pet.model_copy(deep=True)
        if not self.pets.replace(pet.id, stored):
            raise MissingPet(f"Id inválido: la mascota {pet.id} no existe")
        return _snapshot(stored)

    async def list_all_pets(self) -> List[Pet]:
        return [_snapshot(p) for p in self.pets.values()]

    async def get_pets_by_status(self, statuses: Iterable[Any]) -> List[Pet]:
        codes = {_status_code(s) for s in statuses}
        return [
            p for p in await self.list_all_pets()
            if p.status is not None and p.status.value in codes
        ]

    async def find_pets_by_tag(self, tag_names: Iterable[str]) -> List[Pet]:
        """Mascotas que tienen todos los tags pedidos (por nombre)"""
        wanted = set(tag_names)
        return [
            p for p in await self.list_all_pets()
            if p.tags is not None and wanted <= {t.name for t in p.tags}
        ]

    async def delete_pet(self, pet_id: int) -> None:
        if not self.pets.remove(pet_id):
            raise MissingPet(f"La mascota {pet_id} no existe y no se puede borrar")
        logger.info("Mascota %s borrada", pet_id)

    async def update_pet_via_form(
        self,
        pet_id: int,
        name: Optional[str] = None,
        status: Optional[Status] = None,
    ) -> Pet:
        changes: dict = {}
        if name is not None:
            changes["name"] = name
        if status is not None:
            changes["status"] = Status(status)

        def apply(p: Pet) -> Pet:
            try:
                return Pet.model_validate({**p.model_dump(), **changes})
            except ValidationError as e:
                raise InvalidInput(f"Datos inválidos para la mascota {pet_id}: {e}") from e

        updated = self.pets.modify(pet_id, apply)
        if updated is None:
            raise MissingPet(f"Id inválido: la mascota {pet_id} no existe")
        return _snapshot(updated)

    # ==================== Fotos ====================

    async def add_image(self, pet_id: int, data: bytes) -> str:
        """Guarda la foto y añade su url a la mascota. Devuelve la url."""
        await self.get_pet(pet_id)
        photo_id, _ = self.photos.allocate(lambda _id: bytes(data))
        url = PHOTO_URL.format(photo_id)

        updated = self.pets.modify(
            pet_id,
            lambda p: p.model_copy(update={"photo_urls": [*p.photo_urls, url]}),
        )
        if updated is None:
            # borrada entre la lectura y la escritura; la foto se queda guardada
            raise MissingPet(f"La mascota {pet_id} no existe")
        logger.info("Foto %s añadida a la mascota %s", photo_id, pet_id)
        return url

    async def get_photo(self, photo_id: int) -> bytes:
        data = self.photos.get(photo_id)
        if data is None:
            raise MissingPhoto(f"La foto {photo_id} no existe")
        return data

    async def get_inventory(self) -> Inventory:
        # los estados sin mascotas cuentan 0
        counts = {s: 0 for s in Status}
        for p in self.pets.values():
            if p.status is not None:
                counts[p.status] += 1
        return Inventory(
            available=counts[Status.available],
            pending=counts[Status.pending],
            adopted=counts[Status.adopted],
        )

    # ==================== Tags / categorías ====================

    async def add_tag(self, tag: Tag) -> Tag:
        if tag.id is not None:
            raise InvalidInput("Un tag nuevo no debe traer id")
        _, stored = self.tags.allocate(lambda new_id: tag.model_copy(update={"id": new_id}))
        return _snapshot(stored)

    async def get_tag(self, tag_id: int) -> Tag:
        tag = self.tags.get(tag_id)
        if tag is None:
            raise MissingTag(f"El tag {tag_id} no existe")
        return _snapshot(tag)

    async def add_category(self, category: Category) -> Category:
        if category.id is not None:
            raise InvalidInput("Una categoría nueva no debe traer id")
        _, stored = self.categories.allocate(
            lambda new_id: category.model_copy(update={"id": new_id})
        )
        return _snapshot(stored)

    async def get_category(self, category_id: int) -> Category:
        category = self.categories.get(category_id)
        if category is None:
            raise MissingCategory(f"La categoría {category_id} no existe")
        return _snapshot(category)

    # ==================== Pedidos ====================

    async def add_order(self, order: Order) -> int:
        if order.id is not None:
            raise InvalidInput("Un pedido nuevo no debe traer id")
        order_id, _ = self.orders.allocate(
            lambda new_id: order.model_copy(update={"id": new_id}, deep=True)
        )
        logger.info("Pedido %s creado", order_id)
        return order_id

    async def delete_order(self, order_id: int) -> bool:
        """True si se borró, False si no existía (no lanza)"""
        removed = self.orders.remove(order_id)
        if removed:
            logger.info("Pedido %s borrado", order_id)
        return removed

    async def find_order(self, order_id: int) -> Order:
        order = self.orders.get(order_id)
        if order is None:
            raise OrderNotFound(f"El pedido {order_id} no existe")
        return _snapshot(order)

    # ==================== Usuarios ====================

    async def add_user(self, user: User) -> str:
        """Da de alta un usuario y devuelve su username (no el id)"""
        def check(existing: List[User]) -> None:
            if any(u.username == user.username for u in existing):
                raise RedundantUsername(f"El username {user.username} ya está en uso")
            if user.id is not None:
                raise InvalidInput("Un usuario nuevo no debe traer id")

        user_id, _ = self.users.allocate(
            lambda new_id: user.model_copy(update={"id": new_id}, deep=True),
            check=check,
        )
        logger.info("Usuario %s creado con id %s", user.username, user_id)
        return user.username

    async def add_users(self, users: Iterable[User]) -> List[str]:
        """Alta de varios usuarios en orden; se para en el primer fallo"""
        return [await self.add_user(u) for u in users]

    async def get_user(self, username: str) -> User:
        found = self.users.find(lambda u: u.username == username)
        if found is None:
            raise MissingUser(f"El usuario {username} no existe")
        return _snapshot(found[1])

    async def delete_user(self, username: str) -> None:
        user = await self.get_user(username)
        if not self.users.remove(user.id):
            raise MissingUser(f"El usuario {username} no existe")
        logger.info("Usuario %s borrado", username)

    async def update_user(self, user: User) -> User:
        """
        Actualiza un usuario localizándolo por el username del registro nuevo.
        El username no se puede cambiar y el id siempre es el del usuario
        existente, venga lo que venga en el registro nuevo.
        """
        existing = await self.get_user(user.username)
        stored = user.model_copy(update={"id": existing.id}, deep=True)
        if not self.users.replace(existing.id, stored):
            raise MissingUser(f"El usuario {user.username} no existe")
        return _snapshot(stored)


_db: PetstoreDb | None = None

async def get_db() -> PetstoreDb:
    global _db
    if _db is None:
        _db = PetstoreDb()
    return _db
