from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict, Any

from core.models import Activity, AppTheme, RGBColor, ValidationError

# Модели активностей
class ActivityIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(..., description="#RRGGBB")

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        try:
            RGBColor.from_hex(v)
        except ValidationError as e:
            raise ValueError(str(e))
        return v

    def rgb(self) -> RGBColor:
        return RGBColor.from_hex(self.color)

class ActivityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = None

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        if v is None:
            return v
        try:
            RGBColor.from_hex(v)
        except ValidationError as e:
            raise ValueError(str(e))
        return v

    def rgb(self) -> Optional[RGBColor]:
        return RGBColor.from_hex(self.color) if self.color else None

class ActivityOut(BaseModel):
    position: int
    id: str
    name: str
    colorHex: str
    darkText: bool

    @classmethod
    def from_activity(cls, position: int, activity: Activity) -> "ActivityOut":
        return cls(
            position=position,
            id=activity.id,
            name=activity.name,
            colorHex=activity.color.to_hex(),
            darkText=activity.color.prefers_dark_text()
        )

class MoveRequest(BaseModel):
    from_positions: List[int] = Field(..., min_length=1)
    to_position: int = Field(..., ge=0)

# Модели дней
class DayStatus(BaseModel):
    day: str
    day_of_year: int
    statuses: List[bool]

class ToggleResult(BaseModel):
    day: str
    index: int
    active: bool
    saved: bool

# Модели экспорта
class SheetsRequest(BaseModel):
    spreadsheet_id: Optional[str] = None

class SheetsImportRequest(SheetsRequest):
    replace: bool = False

class ThemeIn(BaseModel):
    theme: AppTheme

# Служебные модели
class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
    details: Dict[str, Any] = {}
