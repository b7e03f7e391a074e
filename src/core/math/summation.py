"""
Compensated Summation — суммирование Кэхэна

Пара (total, carry): total — текущая сумма в рабочей точности, carry —
накопленная ошибка округления, которая вычитается из следующего слагаемого.
total - carry представляет точную частичную сумму точнее, чем total.

Используется рядом Тейлора в log1p2x и накоплением в restoring log.

Критерий остановки ряда: слагаемое больше не меняет total (насыщение ULP).
"""

from typing import Any, NamedTuple

from src.core.math.float_formats import FloatFormat


class CompensatedSum(NamedTuple):
    """Неизменяемая компенсированная сумма."""

    total: Any
    carry: Any

    @classmethod
    def zero(cls, fmt: FloatFormat) -> "CompensatedSum":
        """Пустая сумма в точности формата."""
        return cls(fmt.cast(0), fmt.cast(0))

    def add(self, term: Any) -> "CompensatedSum":
        """
        Шаг Кэхэна.

        Args:
            term: Слагаемое в той же точности, что и total

        Returns:
            Новая сумма; self не изменяется

        Examples:
            >>> s = CompensatedSum(1.0, 0.0).add(1e-16).add(1e-16)
            >>> s.total
            1.0000000000000002
        """
        y = term - self.carry
        t = self.total + y
        return CompensatedSum(t, (t - self.total) - y)

    def saturated_by(self, previous: "CompensatedSum") -> bool:
        """Последнее слагаемое не изменило total."""
        return self.total == previous.total
