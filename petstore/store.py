"""
Mapa en memoria protegido por su propio lock.

Cada colección de la tienda (mascotas, tags, categorías, pedidos, fotos,
usuarios) vive en un LockedStore independiente: no hay lock global.
Los locks son de threading, así que valen tanto para varias corrutinas en
un mismo event loop como para varios hilos. Nunca se mantienen a través de
un await.
"""
from threading import Lock
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class LockedStore(Generic[T]):
    def __init__(self, name: str) -> None:
        self.name = name
        self._items: Dict[int, T] = {}
        self._lock = Lock()

    def _next_id(self) -> int:
        # 0 si está vacío, si no max + 1 (se reutiliza el id mayor tras borrarlo)
        return max(self._items) + 1 if self._items else 0

    def next_id(self) -> int:
        with self._lock:
            return self._next_id()

    def allocate(
        self,
        build: Callable[[int], T],
        check: Optional[Callable[[List[T]], None]] = None,
    ) -> Tuple[int, T]:
        """
        Calcula el siguiente id e inserta build(id) en una única sección crítica.
        Si se pasa check, se llama antes con los valores actuales (bajo el mismo
        lock) y puede lanzar para abortar el alta.
        Devuelve (id, valor guardado).
        """
        with self._lock:
            if check is not None:
                check(list(self._items.values()))
            new_id = self._next_id()
            value = build(new_id)
            self._items[new_id] = value
            return new_id, value

    def get(self, item_id: int) -> Optional[T]:
        with self._lock:
            return self._items.get(item_id)

    def values(self) -> List[T]:
        """Todos los valores ordenados por id ascendente"""
        with self._lock:
            return [self._items[k] for k in sorted(self._items)]

    def find(self, predicate: Callable[[T], bool]) -> Optional[Tuple[int, T]]:
        with self._lock:
            for k in sorted(self._items):
                if predicate(self._items[k]):
                    return k, self._items[k]
        return None

    def replace(self, item_id: int, value: T) -> bool:
        """Sustituye el valor solo si el id ya existe"""
        with self._lock:
            if item_id not in self._items:
                return False
            self._items[item_id] = value
            return True

    def modify(self, item_id: int, fn: Callable[[T], T]) -> Optional[T]:
        """Lee, transforma y reescribe bajo el lock. None si el id no existe."""
        with self._lock:
            if item_id not in self._items:
                return None
            value = fn(self._items[item_id])
            self._items[item_id] = value
            return value

    def remove(self, item_id: int) -> bool:
        with self._lock:
            return self._items.pop(item_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
