# core/events.py

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]

class Observable:
    """Публикация изменений подписчикам (один писатель, без блокировок)"""

    event_name = "changed"

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Подписаться на изменения. Возвращает функцию отписки."""
        self._listeners.append(listener)

        def _unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.event_name)
            except Exception as e:
                logger.warning(f"⚠️ Ошибка обработчика события {self.event_name}: {e}")
