"""Planning math for choosing ``m`` and ``k``.

    optimal_k(m, n)      = ln(2) * m / n
    estimated_fpr(m,n,k) = (1 - e^(-k n / m)) ^ k
    optimal_m(n, p)      = ceil(-n ln(p) / ln(2)^2)

The estimate assumes independent, uniformly distributed offsets and
exactly ``n`` distinct insertions.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidParameters

logger = logging.getLogger(__name__)


def optimal_k(m: float, n: float) -> float:
    """Hash count minimizing the false-positive rate for ``m`` bits and ``n`` elements."""
    if m <= 0 or n <= 0:
        raise InvalidParameters("m and n must be positive")
    return math.log(2) * m / n


def estimated_fpr(m: float, n: float, k: float) -> float:
    """Analytic false-positive probability after ``n`` insertions."""
    if m <= 0 or k <= 0:
        raise InvalidParameters("m and k must be positive")
    if n < 0:
        raise InvalidParameters("n must be non-negative")
    return (1.0 - math.exp(-k * n / m)) ** k


def optimal_m(n: float, p: float) -> int:
    """Bit count needed to hold ``n`` elements at false-positive rate ``p``."""
    if n <= 0:
        raise InvalidParameters("n must be positive")
    if not 0.0 < p < 1.0:
        raise InvalidParameters("false positive rate must be in (0, 1)")
    return max(1, math.ceil(-n * math.log(p) / (math.log(2) ** 2)))


@dataclass(frozen=True)
class BloomConfig:
    """Sizing parameters for a Bloom filter.

    Attributes:
        capacity: Number of distinct elements expected to be inserted
        false_positive_rate: Target false positive rate (0 < rate < 1)
        num_hashes: Fixed hash count; derived from ``num_bits`` when None
    """

    capacity: int
    false_positive_rate: float = 0.01
    num_hashes: Optional[int] = None

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise InvalidParameters("capacity must be positive")
        if not 0.0 < self.false_positive_rate < 1.0:
            raise InvalidParameters("false_positive_rate must be in (0, 1)")
        if self.num_hashes is not None and self.num_hashes <= 0:
            raise InvalidParameters("num_hashes must be positive")

    @property
    def num_bits(self) -> int:
        return optimal_m(self.capacity, self.false_positive_rate)

    def num_hashes_or_optimal(self) -> int:
        if self.num_hashes is not None:
            return self.num_hashes
        k = round(optimal_k(self.num_bits, self.capacity))
        if k < 1:
            logger.warning("Derived hash count %d for %r clamped to 1", k, self)
            k = 1
        return k

    def expected_fpr(self) -> float:
        """Analytic FPR of the derived ``(m, k)`` at full capacity."""
        return estimated_fpr(self.num_bits, self.capacity, self.num_hashes_or_optimal())
