# services/google_sheets.py

import asyncio
import functools
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import gspread

from core.ledger import DayLedger, Entries
from core.models import Activity, RGBColor
from core.projection import date_for_day_of_year, day_key, days_in_year
from services.data_export import SHEET_ID, build_sheet_requests

logger = logging.getLogger(__name__)

SPREADSHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"

GRID_FIELDS = (
    "sheets(properties(sheetId),"
    "data(startRow,startColumn,rowData(values(userEnteredFormat(backgroundColor)))))"
)

ERROR_MESSAGES = {
    "permission": "Нет доступа к таблице. Проверьте, что сервисному аккаунту выданы права.",
    "not_found": "Таблица не найдена. Проверьте ID таблицы.",
    "network": "Нет соединения с Google. Проверьте подключение к сети.",
    "auth": "Требуется вход в Google аккаунт.",
    "generic": "Не удалось выполнить операцию с Google Sheets.",
}

class RemoteSheetsError(Exception):
    """Ошибка удалённой таблицы с коротким сообщением для пользователя"""

    def __init__(self, category: str, message: Optional[str] = None, detail: str = ""):
        self.category = category
        self.message = message or ERROR_MESSAGES.get(category, ERROR_MESSAGES["generic"])
        self.detail = detail
        super().__init__(self.message)

def classify_remote_error(error: BaseException) -> RemoteSheetsError:
    """Категория по подстрокам в тексте и имени типа исключения"""
    if isinstance(error, RemoteSheetsError):
        return error

    text = f"{type(error).__name__} {error}".lower()
    if any(marker in text for marker in ("permission", "forbidden", "[403]")):
        category = "permission"
    elif any(marker in text for marker in ("not found", "notfound", "[404]")):
        category = "not_found"
    elif any(marker in text for marker in ("network", "connection", "timed out", "timeout", "unreachable", "offline")):
        category = "network"
    elif any(marker in text for marker in ("unauthenticated", "credentials", "[401]", "invalid_grant")):
        category = "auth"
    else:
        category = "generic"

    return RemoteSheetsError(category, detail=str(error))

class SheetsSession:
    """
    Вход в Google через сервисный аккаунт.

    Для остального кода это флаг "вошли или нет" плюс клиент gspread,
    которым подписываются запросы.
    """

    def __init__(self, credentials_file: Path):
        self.credentials_file = Path(credentials_file)
        self._client: Optional[gspread.Client] = None

    @property
    def is_signed_in(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> gspread.Client:
        if self._client is None:
            raise RemoteSheetsError("auth")
        return self._client

    def restore_previous_session(self) -> bool:
        """Тихий вход, если файл ключа уже есть"""
        if self._client is not None:
            return True
        if not self.credentials_file.exists():
            logger.info("🔑 Файл ключа Google не найден, вход не выполнен")
            return False
        try:
            self.sign_in()
        except RemoteSheetsError as e:
            logger.warning(f"⚠️ Не удалось восстановить сессию Google: {e.detail or e.message}")
            return False
        return True

    def sign_in(self) -> gspread.Client:
        try:
            self._client = gspread.service_account(filename=str(self.credentials_file), scopes=[SPREADSHEETS_SCOPE])
        except Exception as e:
            logger.error(f"❌ Ошибка авторизации Google Sheets: {e}")
            error = classify_remote_error(e)
            if error.category == "generic":
                error = RemoteSheetsError("auth", detail=str(e))
            raise error from e
        logger.info("✅ Вход в Google Sheets выполнен")
        return self._client

    def sign_out(self) -> None:
        self._client = None
        logger.info("🚪 Выход из Google Sheets")

def parse_grid_data(metadata: Mapping[str, Any], activity_count: int, year: int,
                    sheet_id: int = SHEET_ID) -> Entries:
    """
    Разреженный журнал из данных листа.

    Строка activity_index + 2 (с 1) - активность, столбец day + 1 - день года.
    Ячейка активна, если у неё есть не белая заливка.
    """
    sheet = next(
        (s for s in metadata.get("sheets", []) if s.get("properties", {}).get("sheetId", 0) == sheet_id),
        None,
    )
    if sheet is None or not sheet.get("data"):
        return {}

    grid = sheet["data"][0]
    start_row = grid.get("startRow", 0)
    start_column = grid.get("startColumn", 0)
    total_days = days_in_year(year)
    entries: Entries = {}

    for row_offset, row in enumerate(grid.get("rowData", [])):
        activity_index = start_row + row_offset - 1
        if not 0 <= activity_index < activity_count:
            continue
        for column_offset, cell in enumerate(row.get("values", [])):
            day = start_column + column_offset
            if not 1 <= day <= total_days:
                continue
            background = (cell or {}).get("userEnteredFormat", {}).get("backgroundColor")
            if not background:
                continue
            # Нулевые каналы API не передаёт
            color = RGBColor.from_floats(
                background.get("red", 0.0), background.get("green", 0.0), background.get("blue", 0.0)
            )
            if color.is_white():
                continue
            key = day_key(date_for_day_of_year(year, day))
            entries.setdefault(key, {})[activity_index] = True

    return entries

class GoogleSheetsService:
    """
    Удалённое хранилище в виде таблицы.

    Блокирующие вызовы gspread выполняются в пуле потоков, результат
    возвращается в цикл событий вызывающего. Записи в одну таблицу
    выполняются строго по очереди.
    """

    def __init__(self, session: SheetsSession):
        self.session = session
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    @asynccontextmanager
    async def _serialized(self, spreadsheet_id: str):
        """Записи в одну таблицу по очереди; замок удаляется, когда он никому не нужен"""
        lock = self._locks.get(spreadsheet_id)
        if lock is None:
            lock = self._locks[spreadsheet_id] = asyncio.Lock()
        self._lock_users[spreadsheet_id] = self._lock_users.get(spreadsheet_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[spreadsheet_id] -= 1
            if not self._lock_users[spreadsheet_id]:
                del self._lock_users[spreadsheet_id]
                del self._locks[spreadsheet_id]

    async def _run(self, func: Callable, *args):
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(func, *args))
        except Exception as e:
            error = classify_remote_error(e)
            logger.error(f"❌ Ошибка Google Sheets ({error.category}): {e}")
            raise error from e

    # ===== ЗАПИСЬ =====

    def _send_batch(self, spreadsheet_id: str, requests: List[Dict[str, Any]]) -> Dict[str, Any]:
        spreadsheet = self.session.client.open_by_key(spreadsheet_id)
        return spreadsheet.batch_update({"requests": requests})

    async def export(self, spreadsheet_id: str, ledger: DayLedger, activities: Sequence[Activity], year: int,
                     is_live: Optional[Callable[[], bool]] = None) -> bool:
        """
        Выгрузить год в таблицу одним batchUpdate.

        Возвращает False, если к моменту ответа владелец уже неактуален.
        """
        requests = build_sheet_requests(ledger, activities, year)
        async with self._serialized(spreadsheet_id):
            logger.info(f"📤 Выгрузка в таблицу {spreadsheet_id}: {len(activities)} активностей")
            await self._run(self._send_batch, spreadsheet_id, requests)

        if is_live is not None and not is_live():
            logger.info("⏭️ Ответ выгрузки пришёл после закрытия сессии, пропущен")
            return False

        logger.info(f"✅ Таблица {spreadsheet_id} обновлена")
        return True

    # ===== ЧТЕНИЕ =====

    def _fetch_grid(self, spreadsheet_id: str) -> Mapping[str, Any]:
        spreadsheet = self.session.client.open_by_key(spreadsheet_id)
        return spreadsheet.fetch_sheet_metadata(params={"includeGridData": "true", "fields": GRID_FIELDS})

    async def fetch(self, spreadsheet_id: str, activity_count: int, year: int,
                    is_live: Optional[Callable[[], bool]] = None) -> Optional[Entries]:
        """Прочитать журнал из таблицы. None - ответ устарел."""
        metadata = await self._run(self._fetch_grid, spreadsheet_id)
        if is_live is not None and not is_live():
            logger.info("⏭️ Ответ чтения пришёл после закрытия сессии, пропущен")
            return None

        entries = parse_grid_data(metadata, activity_count, year)
        logger.info(f"📥 Из таблицы {spreadsheet_id} прочитано дней: {len(entries)}")
        return entries
