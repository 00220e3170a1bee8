# services/journal_service.py

"""
Сервис журнала: единственный владелец каталога и журнала.

Все изменения выполняются в одном потоке (цикле событий). Блокировок нет:
удалённые операции возвращают результат в тот же цикл, прежде чем
трогать состояние.
"""

import logging
import time
from datetime import date, datetime
from pathlib import Path
from typing import Any, AbstractSet, Callable, Dict, List, Optional

from config import JournalConfig
from core.catalog import ActivityCatalog
from core.ledger import DayLedger, Entries
from core.models import Activity, AppTheme, RGBColor, StreakSegment, ValidationError, validate_day_key
from core.projection import YearProjection
from core.reindex import remap
from core.streaks import current_streak, longest_streak, streaks_for
from database.manager import KeyValueStore
from services.data_export import export_csv_file, to_csv
from services.google_sheets import GoogleSheetsService, RemoteSheetsError, SheetsSession
from utils.datetime_utils import now_local

logger = logging.getLogger(__name__)

class JournalService:
    """Каталог + журнал + кэш проекции + опциональная таблица Google"""

    def __init__(
        self,
        store: KeyValueStore,
        catalog_key: str = "activityCatalog",
        ledger_key: str = "activityData",
        settings_key: str = "appSettings",
        timezone: str = "UTC",
        sheets: Optional[GoogleSheetsService] = None,
        spreadsheet_id: Optional[str] = None,
        export_dir: Path = Path("exports"),
        csv_rfc4180: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.settings_key = settings_key
        self.catalog = ActivityCatalog(store, catalog_key)
        self.ledger = DayLedger(store, ledger_key)
        self.sheets = sheets
        self.spreadsheet_id = spreadsheet_id
        self.export_dir = Path(export_dir)
        self.csv_rfc4180 = csv_rfc4180
        self._clock = clock or (lambda: now_local(timezone))
        self.is_live = True
        self.started_at = time.time()

    @classmethod
    def from_config(cls, config: JournalConfig) -> "JournalService":
        store = KeyValueStore(config.storage.path, config.storage.backup_dir)
        sheets = None
        if config.integrations.google_enabled:
            session = SheetsSession(Path(config.integrations.google_credentials_file))
            session.restore_previous_session()
            sheets = GoogleSheetsService(session)

        return cls(
            store,
            catalog_key=config.storage.catalog_key,
            ledger_key=config.storage.ledger_key,
            settings_key=config.storage.settings_key,
            timezone=config.timezone,
            sheets=sheets,
            spreadsheet_id=config.integrations.google_sheet_id,
            export_dir=config.export_dir,
            csv_rfc4180=config.csv_rfc4180,
        )

    # ===== ВРЕМЯ =====

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        now = self.now()
        return now.date() if isinstance(now, datetime) else now

    @property
    def current_year(self) -> int:
        return self.now().year

    # ===== ПОДПИСКИ =====

    def subscribe(self, listener: Callable[[str], None]) -> Callable[[], None]:
        """Подписка на изменения каталога и журнала"""
        unsubscribe_catalog = self.catalog.subscribe(listener)
        unsubscribe_ledger = self.ledger.subscribe(listener)

        def _unsubscribe():
            unsubscribe_catalog()
            unsubscribe_ledger()

        return _unsubscribe

    # ===== ЖУРНАЛ =====

    def _check_index(self, activity_index: int) -> None:
        if not 0 <= activity_index < len(self.catalog):
            raise ValidationError(f"Нет активности с индексом {activity_index}")

    def toggle_on(self, day_key: str, activity_index: int) -> bool:
        self._check_index(activity_index)
        return self.ledger.toggle_on(day_key, activity_index)

    def toggle_off(self, day_key: str, activity_index: int) -> bool:
        self._check_index(activity_index)
        return self.ledger.toggle_off(day_key, activity_index)

    def status_vector(self, day_key: str) -> List[bool]:
        validate_day_key(day_key)
        return self.ledger.status_vector(day_key, len(self.catalog))

    def projection(self, refresh: bool = False) -> YearProjection:
        """
        Проекция текущего года. Перестраивается при смене числа
        активностей, смене года или по явному запросу.
        """
        current = self.ledger.projection
        activity_count = len(self.catalog)
        year = self.current_year
        if (
            refresh
            or current is None
            or current.activity_count != activity_count
            or current.year != year
        ):
            current = self.ledger.rebuild_projection(activity_count, year)
            logger.debug(f"🔄 Проекция {year} перестроена ({activity_count} активностей)")
        return current

    def clear_all(self) -> bool:
        return self.ledger.clear_all()

    # ===== КАТАЛОГ =====

    def add_activity(self, name: str, color: RGBColor) -> Activity:
        activity = Activity.create(name, color)
        self.catalog.add(activity)
        return activity

    def update_activity(self, position: int, name: Optional[str] = None, color: Optional[RGBColor] = None) -> bool:
        return self.catalog.update(position, name=name, color=color)

    def move_activity(self, from_positions: AbstractSet[int], to_position: int) -> bool:
        """Перенумерация журнала по старому порядку, затем перестановка каталога"""
        from_positions = set(from_positions)
        if not self.catalog.can_move(from_positions, to_position):
            return False
        remap(self.ledger, from_positions, to_position, len(self.catalog))
        return self.catalog.move(from_positions, to_position)

    def delete_activity(self, position: int) -> bool:
        """Удаление данных позиции в журнале, затем удаление из каталога"""
        if self.catalog.get(position) is None:
            return False
        remap(self.ledger, {position}, None, len(self.catalog))
        return self.catalog.delete_at(position)

    # ===== СЕРИИ =====

    def streaks(self, activity_index: int) -> List[StreakSegment]:
        self._check_index(activity_index)
        return streaks_for(self.projection(), activity_index)

    def current_streak(self, activity_index: int, today: Optional[date] = None) -> int:
        self._check_index(activity_index)
        return current_streak(self.projection(), activity_index, today or self.today())

    def streak_badges(self, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Текущая и лучшая серия по каждой активности"""
        projection = self.projection()
        today = today or self.today()
        return [
            {
                "index": index,
                "id": activity.id,
                "name": activity.name,
                "current_streak": current_streak(projection, index, today),
                "longest_streak": longest_streak(projection, index),
            }
            for index, activity in enumerate(self.catalog)
        ]

    # ===== ЭКСПОРТ =====

    def export_csv(self) -> str:
        return to_csv(self.ledger, self.catalog.activities, self.current_year, rfc4180=self.csv_rfc4180)

    def export_csv_file(self) -> Path:
        return export_csv_file(self.export_csv(), self.export_dir, self.now())

    def _require_sheets(self, spreadsheet_id: Optional[str]) -> str:
        if self.sheets is None:
            raise RemoteSheetsError("auth", "Интеграция с Google Sheets не настроена.")
        if not self.sheets.session.is_signed_in and not self.sheets.session.restore_previous_session():
            raise RemoteSheetsError("auth")
        spreadsheet_id = spreadsheet_id or self.spreadsheet_id
        if not spreadsheet_id:
            raise RemoteSheetsError("not_found", "Не задан ID таблицы.")
        return spreadsheet_id

    async def export_to_sheets(self, spreadsheet_id: Optional[str] = None) -> bool:
        spreadsheet_id = self._require_sheets(spreadsheet_id)
        return await self.sheets.export(
            spreadsheet_id,
            self.ledger,
            self.catalog.activities,
            self.current_year,
            is_live=lambda: self.is_live,
        )

    async def fetch_from_sheets(self, spreadsheet_id: Optional[str] = None, replace: bool = False) -> Optional[Entries]:
        """Прочитать журнал из таблицы; replace=True заменяет локальный журнал"""
        spreadsheet_id = self._require_sheets(spreadsheet_id)
        entries = await self.sheets.fetch(
            spreadsheet_id,
            len(self.catalog),
            self.current_year,
            is_live=lambda: self.is_live,
        )
        if entries is not None and replace:
            self.ledger.replace_entries(entries)
        return entries

    def sign_out_of_sheets(self) -> bool:
        """Выйти из Google; False, если интеграция не настроена или вход не выполнен"""
        if self.sheets is None or not self.sheets.session.is_signed_in:
            return False
        self.sheets.session.sign_out()
        return True

    # ===== НАСТРОЙКИ =====

    @property
    def theme(self) -> AppTheme:
        settings = self.store.get(self.settings_key) or {}
        if not isinstance(settings, dict):
            return AppTheme.SYSTEM
        return AppTheme.parse(settings.get("theme"))

    def set_theme(self, theme: AppTheme) -> bool:
        settings = self.store.get(self.settings_key)
        settings = dict(settings) if isinstance(settings, dict) else {}
        settings["theme"] = theme.value
        return self.store.set(self.settings_key, settings)

    # ===== СОСТОЯНИЕ =====

    def close(self) -> None:
        """Завершённые после закрытия удалённые операции не применяются"""
        self.is_live = False

    def health_check(self) -> Dict[str, Any]:
        status = "healthy" if self.store.failed_saves == 0 else "warning"
        return {
            "status": status,
            "activities": len(self.catalog),
            "days_recorded": len(self.ledger.day_keys()),
            "saves": self.store.save_count,
            "failed_saves": self.store.failed_saves,
            "google_sheets": bool(self.sheets and self.sheets.session.is_signed_in),
            "uptime_seconds": int(time.time() - self.started_at),
        }
