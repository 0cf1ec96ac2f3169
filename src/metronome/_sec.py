"""Duration value in seconds.

:class:`Sec` wraps a single ``float`` and gives it a unit.  Only
operations that keep the unit meaningful are defined:

- ``Sec ± Sec`` → ``Sec``
- ``Sec * scalar``, ``scalar * Sec``, ``Sec / scalar`` → ``Sec``
- ``-Sec``, ``abs(Sec)`` → ``Sec``

Multiplying or dividing two durations would produce seconds² or a bare
ratio, so those raise :class:`TypeError`.  Use ``float(a) / float(b)``
when a ratio is what you want.

Arithmetic follows IEEE 754 throughout: dividing by zero produces
``inf`` or ``nan`` instead of raising, and ``nan`` propagates through
further arithmetic.  Comparisons involving ``nan`` are false (except
``!=``), mirroring ``float``.
"""

from __future__ import annotations

import math
import re
from datetime import timedelta
from numbers import Real
from typing import ClassVar

from metronome._errors import SecParseError

_UNIT_SUFFIX = re.compile(r"\s+s$")


def _ieee_div(numerator: float, denominator: float) -> float:
    """Divide with IEEE 754 semantics instead of raising on zero."""
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


class Sec:
    """Time or duration in seconds.

    Example::

        frame = Sec(1 / 60)
        budget = 16 * Sec.MILLI
        assert frame > budget
        assert str(Sec(1.5)) == "1.5 s"
        assert Sec.parse("1.5 s") == Sec(1.5)
    """

    __slots__ = ("_amount",)

    ZERO: ClassVar[Sec]
    NANO: ClassVar[Sec]
    MICRO: ClassVar[Sec]
    MILLI: ClassVar[Sec]
    ONE: ClassVar[Sec]
    KILO: ClassVar[Sec]
    MEGA: ClassVar[Sec]
    GIGA: ClassVar[Sec]
    MINUTE: ClassVar[Sec]
    HOUR: ClassVar[Sec]
    DAY: ClassVar[Sec]

    def __init__(self, amount: float = 0.0) -> None:
        self._amount = float(amount)

    # -- conversions --------------------------------------------------------

    @property
    def amount(self) -> float:
        """The raw number of seconds."""
        return self._amount

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> Sec:
        """Create from a :class:`datetime.timedelta`."""
        return cls(delta.total_seconds())

    def to_timedelta(self) -> timedelta:
        """Convert to a :class:`datetime.timedelta`.

        ``timedelta`` has microsecond resolution; finer detail is
        rounded away.  Raises :class:`OverflowError` or
        :class:`ValueError` for values ``timedelta`` cannot hold
        (``inf``, ``nan``, more than a billion days).
        """
        return timedelta(seconds=self._amount)

    @classmethod
    def parse(cls, text: str) -> Sec:
        """Parse a float literal, optionally followed by the ``s`` unit.

        Accepts whatever ``float()`` accepts (``"1.5"``, ``"-2e-3"``,
        ``"inf"``, ``"nan"``) and the output of ``str(Sec)``
        (``"1.5 s"``).

        Raises:
            SecParseError: If *text* is not a valid literal.
        """
        stripped = _UNIT_SUFFIX.sub("", text.strip())
        try:
            return cls(float(stripped))
        except ValueError as exc:
            raise SecParseError(text) from exc

    def __float__(self) -> float:
        return self._amount

    def __bool__(self) -> bool:
        return self._amount != 0.0

    # -- arithmetic ---------------------------------------------------------

    def __add__(self, other: object) -> Sec:
        if not isinstance(other, Sec):
            return NotImplemented
        return Sec(self._amount + other._amount)

    def __sub__(self, other: object) -> Sec:
        if not isinstance(other, Sec):
            return NotImplemented
        return Sec(self._amount - other._amount)

    def __mul__(self, factor: object) -> Sec:
        if isinstance(factor, Sec) or not isinstance(factor, Real):
            return NotImplemented
        return Sec(self._amount * float(factor))

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> Sec:
        if isinstance(divisor, Sec) or not isinstance(divisor, Real):
            return NotImplemented
        return Sec(_ieee_div(self._amount, float(divisor)))

    def __neg__(self) -> Sec:
        return Sec(-self._amount)

    def __pos__(self) -> Sec:
        return self

    def __abs__(self) -> Sec:
        return Sec(abs(self._amount))

    # -- comparison ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self._amount == other._amount

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self._amount != other._amount

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self._amount < other._amount

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self._amount <= other._amount

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self._amount > other._amount

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self._amount >= other._amount

    def __hash__(self) -> int:
        return hash(self._amount)

    def isnan(self) -> bool:
        """Return ``True`` when the value is not a number."""
        return math.isnan(self._amount)

    def isclose(self, other: Sec, *, rel_tol: float = 1e-9, abs_tol: float = 0.0) -> bool:
        """Compare with a tolerance, see :func:`math.isclose`."""
        return math.isclose(self._amount, other._amount, rel_tol=rel_tol, abs_tol=abs_tol)

    # -- text ---------------------------------------------------------------

    def __repr__(self) -> str:
        return f"Sec({self._amount!r})"

    def __str__(self) -> str:
        return f"{self._amount} s"

    def __format__(self, format_spec: str) -> str:
        """Format the amount with *format_spec* and append the unit."""
        return f"{format(self._amount, format_spec)} s"


Sec.ZERO = Sec(0.0)
Sec.NANO = Sec(1e-9)
Sec.MICRO = Sec(1e-6)
Sec.MILLI = Sec(1e-3)
Sec.ONE = Sec(1.0)
Sec.KILO = Sec(1e3)
Sec.MEGA = Sec(1e6)
Sec.GIGA = Sec(1e9)
Sec.MINUTE = Sec(60.0)
Sec.HOUR = Sec(60.0 * 60.0)
Sec.DAY = Sec(24.0 * 60.0 * 60.0)
