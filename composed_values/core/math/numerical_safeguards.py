"""
Numerical Safeguards — Finite Math Primitives

Модуль обеспечивает численную устойчивость композитных значений:
- NaN/Inf санитизация для предотвращения распространения невалидных значений
- Finite clamp: замена не-конечного результата на максимальный конечный float
- Мультипликативная свёртка с конвенцией пустого произведения (= 1)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не пропагируют из finite_clamp (заменяются на max_value)
2. Знак бесконечности не сохраняется: -inf → max_value (как и +inf)
3. Пустое произведение равно 1, а не 0
4. Переполнение int → float трактуется как не-конечное значение, а не как ошибка
"""

import math
import sys
from typing import Final, Iterable, Union

Number = Union[int, float]

# =============================================================================
# ПРЕДЕЛЫ
# =============================================================================

# Максимальное конечное значение float (IEEE 754 double)
# Используется как результат finite_clamp для NaN/Inf
MAX_FINITE_VALUE: Final[float] = sys.float_info.max

# Нейтральный элемент умножения (пустое произведение)
EMPTY_PRODUCT: Final[int] = 1


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: Number) -> bool:
    """
    Проверка, является ли число валидным (не NaN, не Inf).

    Python int произвольной длины, который не помещается в float,
    считается невалидным (overflow), исключение не пробрасывается.

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN, Inf или overflow

    Examples:
        >>> is_valid_float(10.0)
        True
        >>> is_valid_float(float('inf'))
        False
        >>> is_valid_float(10 ** 400)
        False
    """
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def sanitize_float(value: Number, fallback: float = 0.0) -> Number:
    """
    Санитизация числа: замена NaN/Inf на fallback значение.

    Args:
        value: Исходное значение
        fallback: Значение для замены NaN/Inf (default: 0.0)

    Returns:
        value если валидное, иначе fallback

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


def finite_clamp(value: Number, max_value: float = MAX_FINITE_VALUE) -> Number:
    """
    Finite clamp: не-конечный результат заменяется на max_value.

    +inf, -inf и NaN отображаются в одно и то же max_value, информация
    о знаке отбрасывается. Конечные значения возвращаются без изменений.

    Args:
        value: Результат вычисления
        max_value: Значение для замены (default: MAX_FINITE_VALUE)

    Returns:
        value если конечное, иначе max_value

    Examples:
        >>> finite_clamp(20.0)
        20.0
        >>> finite_clamp(float('inf')) == MAX_FINITE_VALUE
        True
        >>> finite_clamp(float('-inf')) == MAX_FINITE_VALUE
        True
    """
    return sanitize_float(value, fallback=max_value)


# =============================================================================
# ПРОИЗВЕДЕНИЯ
# =============================================================================


def product(values: Iterable[Number]) -> Number:
    """
    Мультипликативная свёртка последовательности.

    Переполнение при смешанном умножении int/float даёт math.inf;
    итоговый clamp выполняет вызывающий код.

    Args:
        values: Множители

    Returns:
        Произведение всех множителей; для пустой последовательности 1

    Examples:
        >>> product([10, 2])
        20
        >>> product([])
        1
    """
    result: Number = EMPTY_PRODUCT
    for value in values:
        try:
            result = result * value
        except OverflowError:
            return math.inf
    return result


def finite_multiply(
    left: Number,
    right: Number,
    max_value: float = MAX_FINITE_VALUE,
) -> Number:
    """
    Умножение двух чисел с последующим finite clamp.

    Смешанное умножение огромного int на float поднимает OverflowError;
    такой случай трактуется как переполнение и заменяется на max_value.

    Args:
        left: Первый множитель
        right: Второй множитель
        max_value: Значение для замены не-конечного результата

    Returns:
        finite_clamp(left * right, max_value)

    Examples:
        >>> finite_multiply(10, 2)
        20
        >>> finite_multiply(MAX_FINITE_VALUE, 2.0) == MAX_FINITE_VALUE
        True
    """
    try:
        result = left * right
    except OverflowError:
        return max_value

    return finite_clamp(result, max_value=max_value)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что значение конечное и положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
