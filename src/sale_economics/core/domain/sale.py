"""
Sale: модели продажи таймшера

Разделение сырого ввода и производных величин:
- SaleInput: immutable сырой ввод формы (числовые поля хранятся как есть)
- SaleEconomics: immutable производные величины, вычисленные калькулятором
- SaleRecord: сохраняемая запись продажи (ввод + производные)

Производные величины никогда не патчатся инкрементально: при любом
изменении ввода создаётся новый SaleInput и SaleEconomics пересчитывается
целиком. Сериализация в camelCase совместима с JSON фронтенда.
"""

import datetime as dt
import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class SaleType(str, Enum):
    """Тип продажи: определяет тарифную сетку комиссий."""

    DEED = "DEED"
    TRUST = "TRUST"

    @classmethod
    def coerce(cls, value: Any) -> "SaleType":
        """
        Приведение значения к SaleType без исключений.

        Регистр не важен. Неизвестное значение → DEED (выбор формы
        по умолчанию) с предупреждением в лог.
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass

        logger.warning("Unknown sale type %r, falling back to %s", value, cls.DEED.value)
        return cls.DEED


_RECORD_MODEL_CONFIG = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


# =============================================================================
# RAW INPUT
# =============================================================================


class SaleInput(BaseModel):
    """
    Сырой ввод формы продажи.

    Числовые поля (sale_amount, fdi, number_of_tours) принимаются в том виде,
    в каком их отдаёт поле формы: строкой или числом. Нормализация
    выполняется только калькулятором.
    """

    date: dt.date = Field(default_factory=dt.date.today, description="Дата продажи")
    client_last_name: str = Field(default="", description="Фамилия клиента")
    lead_number: str = Field(default="", description="Номер лида")
    number_of_tours: int | float | str | None = Field(
        default=0, description="Количество туров (сырое значение)"
    )
    manager_name: str = Field(default="", description="Имя менеджера")
    sale_amount: float | str | None = Field(
        default="", description="Сумма продажи (сырое значение)"
    )
    fdi: float | str | None = Field(
        default="", description="Выданные FDI баллы (сырое значение)"
    )
    notes: str = Field(default="", description="Заметки")
    sale_type: SaleType = Field(default=SaleType.DEED, description="Тип продажи")
    is_cancelled: bool = Field(default=False, description="Продажа отменена")

    model_config = _RECORD_MODEL_CONFIG

    @field_validator("sale_type", mode="before")
    @classmethod
    def coerce_sale_type(cls, v: Any) -> SaleType:
        return SaleType.coerce(v)

    @classmethod
    def from_record(cls, record: "SaleRecord") -> "SaleInput":
        """
        Восстановление редактируемого ввода из сохранённой записи.

        Args:
            record: Ранее сохранённая запись продажи

        Returns:
            SaleInput с теми же описательными полями и сырыми числами
        """
        return cls(
            date=record.date,
            client_last_name=record.client_last_name,
            lead_number=record.lead_number,
            number_of_tours=record.number_of_tours,
            manager_name=record.manager_name,
            sale_amount=record.sale_amount,
            fdi=record.fdi,
            notes=record.notes,
            sale_type=record.sale_type,
            is_cancelled=record.is_cancelled,
        )


# =============================================================================
# DERIVED OUTPUT
# =============================================================================


class SaleEconomics(BaseModel):
    """Производные финансовые величины продажи."""

    sale_amount: float = Field(..., ge=0, description="Нормализованная сумма продажи (USD)")
    commission_percentage: float = Field(..., ge=0, le=100, description="Ставка комиссии (%)")
    commission_amount: float = Field(..., ge=0, description="Сумма комиссии (USD)")
    fdi_points: float = Field(..., ge=0, description="Доступные FDI баллы")
    fdi_given_points: float = Field(..., ge=0, description="Выданные FDI баллы")
    fdi_cost: float = Field(..., ge=0, description="Стоимость FDI сверх лимита (USD)")
    daily_vpg: float = Field(..., ge=0, description="Daily VPG: объём продаж на тур")

    model_config = _RECORD_MODEL_CONFIG

    @property
    def has_fdi_cost(self) -> bool:
        """Предупреждение: выдано больше баллов, чем доступно."""
        return self.fdi_cost > 0


# =============================================================================
# PERSISTED RECORD
# =============================================================================


class SaleRecord(BaseModel):
    """
    Сохраняемая запись продажи.

    Поля соответствуют JSON контракту sale_record (camelCase).
    """

    id: str | None = Field(default=None, description="Идентификатор записи")
    date: dt.date
    client_last_name: str
    lead_number: str
    number_of_tours: int = Field(..., ge=0)
    manager_name: str
    sale_amount: float = Field(..., ge=0)
    commission_percentage: float = Field(..., ge=0, le=100)
    commission_amount: float = Field(..., ge=0)
    fdi: str = Field(default="", description="Сырое значение поля FDI")
    fdi_points: float = Field(..., ge=0)
    fdi_given_points: float = Field(..., ge=0)
    fdi_cost: float = Field(..., ge=0)
    notes: str = ""
    sale_type: SaleType
    is_cancelled: bool = False
    daily_vpg: float = Field(..., ge=0, alias="dailyVPG")

    model_config = _RECORD_MODEL_CONFIG

    @property
    def economics(self) -> SaleEconomics:
        """Производные величины записи."""
        return SaleEconomics(
            sale_amount=self.sale_amount,
            commission_percentage=self.commission_percentage,
            commission_amount=self.commission_amount,
            fdi_points=self.fdi_points,
            fdi_given_points=self.fdi_given_points,
            fdi_cost=self.fdi_cost,
            daily_vpg=self.daily_vpg,
        )

    def to_payload(self) -> dict[str, Any]:
        """
        JSON-совместимый dict в camelCase.

        id опускается, если запись ещё не сохранена.
        """
        payload = self.model_dump(by_alias=True, mode="json")
        if payload.get("id") is None:
            payload.pop("id", None)
        return payload
