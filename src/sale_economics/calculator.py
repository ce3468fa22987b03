"""Sale Economics Calculator

Композиция чистых функций расчёта с инжектируемой конфигурацией:
тарифные сетки DEED/TRUST и политика FDI передаются через
SaleEconomicsConfig, а не берутся из глобальных констант.

Порядок расчёта (evaluate):
1. Нормализация суммы продажи (2 знака, half-up)
2. Ставка комиссии по накопленному объёму и типу продажи
3. Сумма комиссии
4. Доступные FDI баллы
5. Выданные FDI баллы и стоимость сверх лимита
6. Daily VPG

Калькулятор не хранит состояния между вызовами: один экземпляр
безопасно использовать из нескольких форм одновременно.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sale_economics.core.contracts import validate_sale_input
from sale_economics.core.domain.sale import SaleEconomics, SaleInput, SaleRecord, SaleType
from sale_economics.core.domain.schedule import (
    DEFAULT_DEED_SCHEDULE,
    DEFAULT_FDI_POLICY,
    DEFAULT_TRUST_SCHEDULE,
    CommissionSchedule,
    FDIPolicy,
)
from sale_economics.core.math.commission import commission_amount, total_commission_rate
from sale_economics.core.math.fdi import fdi_available_points, fdi_discount_cost
from sale_economics.core.math.numerical_safeguards import (
    normalize_amount,
    normalize_count,
    normalize_money,
    round_money,
)
from sale_economics.core.math.productivity import daily_productivity_metric

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


def _schedule_from_data(data: Any) -> CommissionSchedule:
    """Сетка из dict {"tiers": [...]} или списка пар [[порог, ставка], ...]."""
    if isinstance(data, CommissionSchedule):
        return data
    if isinstance(data, dict):
        return CommissionSchedule.model_validate(data)
    return CommissionSchedule.from_pairs(data)


@dataclass(frozen=True)
class SaleEconomicsConfig:
    """Конфигурация калькулятора.

    Значения по умолчанию: DEFAULT_DEED_SCHEDULE, DEFAULT_TRUST_SCHEDULE,
    DEFAULT_FDI_POLICY. Тесты и альтернативные тарифы передают свои сетки.
    """

    deed_schedule: CommissionSchedule = DEFAULT_DEED_SCHEDULE
    trust_schedule: CommissionSchedule = DEFAULT_TRUST_SCHEDULE
    fdi_policy: FDIPolicy = DEFAULT_FDI_POLICY

    @property
    def schedules(self) -> dict[SaleType, CommissionSchedule]:
        return {
            SaleType.DEED: self.deed_schedule,
            SaleType.TRUST: self.trust_schedule,
        }

    def schedule_for(self, sale_type: Any) -> CommissionSchedule:
        """Сетка для типа продажи (неизвестный тип → DEED)."""
        return self.schedules[SaleType.coerce(sale_type)]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SaleEconomicsConfig":
        """Построение конфигурации из dict.

        Формат::

            {
                "deed": [[0, 6.0], [500000, 7.0]],
                "trust": {"tiers": [{"volume_threshold": 0, "rate_pct": 4.0}]},
                "fdi": {"points_per_dollar": 0.05, "excess_point_cost_usd": 0.1}
            }

        Отсутствующие секции берутся по умолчанию.

        Raises:
            ValidationError: Если сетка или политика некорректны
        """
        defaults = cls()
        return cls(
            deed_schedule=(
                _schedule_from_data(data["deed"]) if "deed" in data else defaults.deed_schedule
            ),
            trust_schedule=(
                _schedule_from_data(data["trust"]) if "trust" in data else defaults.trust_schedule
            ),
            fdi_policy=(
                FDIPolicy.model_validate(data["fdi"]) if "fdi" in data else defaults.fdi_policy
            ),
        )

    @classmethod
    def from_json_file(cls, path: str | Path) -> "SaleEconomicsConfig":
        """Загрузка конфигурации из JSON файла (формат from_dict)."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Loaded sale economics config from %s", path)
        return cls.from_dict(data)


# =============================================================================
# CALCULATOR
# =============================================================================


class SaleEconomicsCalculator:
    """Калькулятор производных величин продажи.

    Каждый метод независим и может вызываться на каждое нажатие клавиши;
    evaluate() пересчитывает все производные поля из неизменяемого ввода.
    """

    def __init__(self, config: SaleEconomicsConfig | None = None):
        """
        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or SaleEconomicsConfig()

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def total_commission_rate(self, sale_amount: Any, prior_volume: Any, sale_type: Any) -> float:
        return total_commission_rate(
            sale_amount, prior_volume, sale_type, schedules=self.config.schedules
        )

    def commission_amount(self, sale_amount: Any, rate: Any) -> float:
        return commission_amount(sale_amount, rate)

    def fdi_available_points(self, sale_amount: Any) -> float:
        return fdi_available_points(sale_amount, policy=self.config.fdi_policy)

    def fdi_discount_cost(self, points_redeemed: Any, points_available: Any) -> float:
        return fdi_discount_cost(points_redeemed, points_available, policy=self.config.fdi_policy)

    def daily_productivity_metric(self, sale_amount: Any, tour_count: Any) -> float:
        return daily_productivity_metric(sale_amount, tour_count)

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def evaluate(self, sale_input: SaleInput, prior_volume: Any) -> SaleEconomics:
        """Полный пересчёт производных величин.

        Args:
            sale_input: сырой ввод формы
            prior_volume: накопленный объём продаж до этой продажи

        Returns:
            SaleEconomics
        """
        amount = normalize_money(sale_input.sale_amount)
        rate = self.total_commission_rate(amount, prior_volume, sale_input.sale_type)
        commission = self.commission_amount(amount, rate)
        points_available = self.fdi_available_points(amount)
        points_given = round_money(normalize_amount(sale_input.fdi, non_negative=True))
        cost = self.fdi_discount_cost(points_given, points_available)
        vpg = self.daily_productivity_metric(amount, sale_input.number_of_tours)

        economics = SaleEconomics(
            sale_amount=amount,
            commission_percentage=rate,
            commission_amount=commission,
            fdi_points=points_available,
            fdi_given_points=points_given,
            fdi_cost=cost,
            daily_vpg=vpg,
        )
        logger.debug("Sale economics evaluated: %s", economics)
        return economics

    def build_record(
        self,
        sale_input: SaleInput,
        prior_volume: Any,
        record_id: str | None = None,
    ) -> SaleRecord:
        """Сохраняемая запись: описательные поля ввода + производные величины.

        Args:
            sale_input: сырой ввод формы
            prior_volume: накопленный объём продаж до этой продажи
            record_id: идентификатор при редактировании существующей записи
        """
        economics = self.evaluate(sale_input, prior_volume)
        fdi_raw = "" if sale_input.fdi is None else str(sale_input.fdi)

        return SaleRecord(
            id=record_id,
            date=sale_input.date,
            client_last_name=sale_input.client_last_name,
            lead_number=sale_input.lead_number,
            number_of_tours=normalize_count(sale_input.number_of_tours),
            manager_name=sale_input.manager_name,
            sale_amount=economics.sale_amount,
            commission_percentage=economics.commission_percentage,
            commission_amount=economics.commission_amount,
            fdi=fdi_raw,
            fdi_points=economics.fdi_points,
            fdi_given_points=economics.fdi_given_points,
            fdi_cost=economics.fdi_cost,
            notes=sale_input.notes,
            sale_type=sale_input.sale_type,
            is_cancelled=sale_input.is_cancelled,
            daily_vpg=economics.daily_vpg,
        )

    def record_from_payload(
        self,
        payload: dict[str, Any],
        prior_volume: Any,
        record_id: str | None = None,
    ) -> SaleRecord:
        """Запись из JSON payload формы с проверкой контракта sale_input.

        Контракт проверяет и календарную корректность даты (format "date"),
        поэтому payload, прошедший контракт, всегда собирается в SaleInput.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует контракту
            pydantic.ValidationError: Если поля не приводятся к типам SaleInput
        """
        validate_sale_input(payload)
        sale_input = SaleInput.model_validate(payload)
        return self.build_record(sale_input, prior_volume, record_id=record_id)

    def recalculate(self, record: SaleRecord, prior_volume: Any) -> SaleRecord:
        """Пересчёт сохранённой записи (редактирование): тот же id, свежие производные."""
        return self.build_record(SaleInput.from_record(record), prior_volume, record_id=record.id)
