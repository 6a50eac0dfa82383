import math


class BasicMath:
    """Numeric primitives with IEEE results in place of Python math errors."""

    pi = math.pi

    def sqrt(self, x: float) -> float:
        if x < 0:
            return math.nan
        return math.sqrt(x)

    def sin(self, x: float) -> float:
        if math.isinf(x):
            return math.nan
        return math.sin(x)

    def cos(self, x: float) -> float:
        if math.isinf(x):
            return math.nan
        return math.cos(x)

    def ln(self, x: float) -> float:
        if math.isnan(x) or x < 0:
            return math.nan
        if x == 0:
            return -math.inf
        return math.log(x)

    def exp(self, x: float) -> float:
        try:
            return math.exp(x)
        except OverflowError:
            return math.inf

    def hypot(self, *xs: float) -> float:
        return math.hypot(*xs)
