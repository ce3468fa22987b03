"""
Numerical Safeguards: нормализация ввода и денежное округление

Единая точка нормализации всех числовых входов калькулятора.
Форма передаёт сырые значения текстовых полей на каждое нажатие клавиши,
поэтому каждая функция расчёта сначала прогоняет вход через этот модуль:

- Разбор числа из строки по ведущему числовому префиксу (как parseFloat)
- NaN/Inf санитизация (замена на fallback)
- Clamp отрицательных значений к нулю для неотрицательных доменов
- Денежное округление half-up до 2 знаков через Decimal
- Безопасное деление с нулевым результатом при делении на ноль

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Нормализация никогда не выбрасывает исключений (невалидный вход → 0)
2. NaN/Inf никогда не пропагируют
3. Округление детерминировано и идемпотентно: round_money(round_money(x)) == round_money(x)
"""

import logging
import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Final

logger = logging.getLogger(__name__)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Количество знаков после запятой для денежных сумм, процентов и баллов
MONEY_PLACES: Final[int] = 2

# Контекст Decimal с точностью, покрывающей весь диапазон float (~1.8e308)
# плюс дробные знаки: quantize и умножение не теряют точность
MONEY_CONTEXT: Final[Context] = Context(prec=400, rounding=ROUND_HALF_UP)

# Ведущий числовой префикс строки: "  12.5abc" → "12.5", "1e3x" → "1e3"
_FLOAT_PREFIX_RE: Final = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Ведущий целочисленный префикс строки: "12.7" → "12"
_INT_PREFIX_RE: Final = re.compile(r"^\s*([+-]?\d+)")


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Санитизация float: замена NaN/Inf на fallback значение.

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
        >>> clamp(150.0, 0.0, 100.0)
        100.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def safe_divide(numerator: float, denominator: float, fallback: float = 0.0) -> float:
    """
    Безопасное деление: деление на ноль и NaN/Inf дают fallback.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        fallback: Значение при делении на ноль (default: 0.0)

    Returns:
        Результат деления или fallback

    Examples:
        >>> safe_divide(1000.0, 4.0)
        250.0
        >>> safe_divide(5000.0, 0.0)
        0.0
    """
    num_clean = sanitize_float(numerator, fallback=0.0)
    denom_clean = sanitize_float(denominator, fallback=0.0)

    if denom_clean == 0.0:
        return fallback

    return sanitize_float(num_clean / denom_clean, fallback=fallback)


# =============================================================================
# РАЗБОР СЫРОГО ВВОДА
# =============================================================================


def parse_number(raw: object) -> float | None:
    """
    Разбор числа из сырого значения поля формы.

    Строки разбираются по ведущему числовому префиксу, как это делает
    parseFloat в браузере: "12.5abc" → 12.5, "" → None, "abc" → None.
    bool не считается числом.

    Args:
        raw: str / int / float / Decimal / None

    Returns:
        float (может быть NaN/Inf для float-входа) или None если разбор невозможен
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float, Decimal)):
        try:
            return float(raw)
        except (ValueError, OverflowError):
            # sNaN Decimal или int вне диапазона float
            return None

    if isinstance(raw, str):
        match = _FLOAT_PREFIX_RE.match(raw)
        if match is None:
            return None
        return float(match.group(1))

    return None


def normalize_amount(raw: object, non_negative: bool = True) -> float:
    """
    Нормализация числового входа.

    parse → NaN/Inf/неразбираемое → 0.0 → (опционально) clamp отрицательных к 0.
    Никогда не выбрасывает исключений.

    Args:
        raw: Сырое значение поля
        non_negative: Требуется ли неотрицательность домена (default: True)

    Returns:
        Нормализованное конечное значение

    Examples:
        >>> normalize_amount("2500.005")
        2500.005
        >>> normalize_amount("")
        0.0
        >>> normalize_amount(-10)
        0.0
        >>> normalize_amount(-10, non_negative=False)
        -10.0
    """
    value = parse_number(raw)

    if value is None:
        if raw not in (None, ""):
            logger.debug("Unparseable numeric input %r coerced to 0", raw)
        return 0.0

    value = sanitize_float(value, fallback=0.0)

    if non_negative:
        value = clamp(value, min_value=0.0)

    return value


def normalize_count(raw: object) -> int:
    """
    Нормализация целочисленного счётчика (например, количество туров).

    Строки разбираются по ведущему целому префиксу (как parseInt),
    дробная часть float отбрасывается, отрицательное → 0.

    Examples:
        >>> normalize_count("4")
        4
        >>> normalize_count("4.9")
        4
        >>> normalize_count(-2)
        0
        >>> normalize_count("")
        0
    """
    if raw is None or isinstance(raw, bool):
        return 0

    if isinstance(raw, str):
        match = _INT_PREFIX_RE.match(raw)
        if match is None:
            if raw != "":
                logger.debug("Unparseable count input %r coerced to 0", raw)
            return 0
        try:
            return max(int(match.group(1)), 0)
        except ValueError:
            # длина строки выше лимита int() интерпретатора
            return 0

    value = parse_number(raw)
    if value is None or not is_valid_float(value):
        return 0

    return max(int(value), 0)


# =============================================================================
# ДЕНЕЖНОЕ ОКРУГЛЕНИЕ
# =============================================================================


def to_decimal(value: float) -> Decimal:
    """
    Конверсия float в Decimal по кратчайшему repr.

    Decimal(2500.005) даёт 2500.00499999..., а Decimal(repr(2500.005))
    даёт ровно 2500.005, то есть значение, введённое оператором.
    NaN/Inf → Decimal(0).
    """
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal(0)

    clean = sanitize_float(float(value), fallback=0.0)
    return Decimal(repr(clean))


def round_money(value: float | Decimal, places: int = MONEY_PLACES) -> float:
    """
    Округление half-up до заданного числа знаков (денежное округление).

    Args:
        value: Значение (float или Decimal)
        places: Количество знаков после запятой (default: 2)

    Returns:
        Округлённое значение как float

    Examples:
        >>> round_money(2500.005)
        2500.01
        >>> round_money(187.50075)
        187.5
        >>> round_money(float('nan'))
        0.0
        >>> round_money(Decimal("1e400"))
        0.0
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=MONEY_CONTEXT)
    # Результат вне диапазона float становится inf
    return sanitize_float(float(rounded), fallback=0.0)


def normalize_money(raw: object) -> float:
    """
    Нормализация денежной суммы: normalize_amount + round_money.

    Examples:
        >>> normalize_money("2500.005")
        2500.01
        >>> normalize_money("-5")
        0.0
    """
    return round_money(normalize_amount(raw, non_negative=True))


def multiply_money(
    value: float | Decimal,
    factor: float | Decimal,
    divisor: int = 1,
    places: int = MONEY_PLACES,
) -> float:
    """
    Точное произведение value × factor / divisor с денежным округлением.

    Вычисляется в Decimal, поэтому 2500.01 × 7.5 / 100 не накапливает
    двоичную погрешность float перед округлением.

    Examples:
        >>> multiply_money(2500.01, 6.0, divisor=100)
        150.0
        >>> multiply_money(1000.0, 0.05)
        50.0
    """
    product = MONEY_CONTEXT.multiply(to_decimal(value), to_decimal(factor))
    if divisor != 1:
        product = MONEY_CONTEXT.divide(product, Decimal(divisor))
    return round_money(product, places=places)
