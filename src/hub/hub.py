"""PublishSubscribeHub — типизированный keyed store с синхронным fan-out.

Каждая стадия пайплайна построена на хабе:
- хранит последнее значение по ключу (latest write wins)
- держит упорядоченный реестр listeners
- upsert() сохраняет значение и синхронно вызывает process_add у каждого listener
  в порядке регистрации; возврат из upsert() означает, что весь fan-out завершён

Поиск по ключу явный: get() бросает NotFound, find() возвращает None.
Значения по умолчанию никогда не создаются неявно.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterator, Optional, TypeVar

from src.core.logging import get_logger

logger = get_logger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class NotFound(KeyError):
    """Ключ отсутствует в хабе."""

    def __init__(self, hub_name: str, key: object):
        self.hub_name = hub_name
        self.key = key
        super().__init__(f"{key!r} not found in {hub_name}")


class ServiceListener(ABC, Generic[V]):
    """Listener хаба.

    process_add — единственный callback, который вызывает пайплайн.
    process_remove / process_update — точки расширения, по умолчанию no-op.
    """

    @abstractmethod
    def process_add(self, data: V) -> None:
        """Новое или обновлённое значение."""

    def process_remove(self, data: V) -> None:
        return None

    def process_update(self, data: V) -> None:
        return None


class FunctionListener(ServiceListener[V]):
    """Адаптер: обычная функция как listener."""

    def __init__(self, on_add: Callable[[V], None], name: Optional[str] = None):
        self._on_add = on_add
        self.name = name or getattr(on_add, "__name__", "function_listener")

    def process_add(self, data: V) -> None:
        self._on_add(data)

    def __repr__(self) -> str:
        return f"FunctionListener({self.name})"


class PublishSubscribeHub(Generic[K, V]):
    """Keyed store + ordered listener registry + синхронный fan-out."""

    def __init__(self, name: Optional[str] = None):
        """
        Args:
            name: имя хаба для логов и ошибок (по умолчанию — имя класса)
        """
        self.name = name or type(self).__name__
        self._data: dict[K, V] = {}
        self._listeners: list[ServiceListener[V]] = []

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def upsert(self, key: K, value: V) -> None:
        """Сохранение значения и уведомление всех listeners в порядке регистрации."""
        self._store(key, value)
        self._notify(value)

    def _store(self, key: K, value: V) -> None:
        """Сохранение без уведомления (для переходов, которые не публикуются)."""
        self._data[key] = value

    def _notify(self, value: V) -> None:
        for listener in self._listeners:
            listener.process_add(value)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, key: K) -> V:
        """Значение по ключу.

        Raises:
            NotFound: если ключ не записывался
        """
        try:
            return self._data[key]
        except KeyError:
            raise NotFound(self.name, key) from None

    def find(self, key: K) -> Optional[V]:
        """Значение по ключу или None (для мест, где отсутствие — нормальная первая запись)."""
        return self._data.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def keys(self) -> Iterator[K]:
        return iter(self._data.keys())

    def values(self) -> Iterator[V]:
        return iter(self._data.values())

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: ServiceListener[V]) -> None:
        """Регистрация listener (вызывается после всех ранее добавленных)."""
        if not isinstance(listener, ServiceListener):
            raise TypeError(f"{listener!r} is not a ServiceListener")
        self._listeners.append(listener)
        logger.debug("listener_added", hub=self.name, listener=repr(listener))

    @property
    def listeners(self) -> tuple[ServiceListener[V], ...]:
        """Listeners в порядке регистрации."""
        return tuple(self._listeners)
