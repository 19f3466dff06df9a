# capacity_model/dynamics/sampling/lognormal.py
"""
Method-of-moments mapping from arithmetic mean/std to log-normal parameters.
"""

import math
from dataclasses import dataclass

from capacity_model.exceptions import InvalidParameters


@dataclass(frozen=True)
class LogNormalParams:
    """Location/scale of the underlying normal distribution.

    Args:
        mu: Mean of log(X)
        sigma: Standard deviation of log(X)
    """
    mu: float
    sigma: float

    @property
    def mean(self) -> float:
        """Arithmetic mean of X."""
        return math.exp(self.mu + self.sigma ** 2 / 2)

    @property
    def std(self) -> float:
        """Arithmetic standard deviation of X."""
        return math.sqrt((math.exp(self.sigma ** 2) - 1) * math.exp(2 * self.mu + self.sigma ** 2))


def derive_lognormal_params(mean: float, std: float) -> LogNormalParams:
    """
    Convert the arithmetic mean and standard deviation of a positive quantity
    into the ``mu``/``sigma`` of a log-normal with the same first two moments.

        mu    = ln(m^2 / sqrt(s^2 + m^2))
        sigma = sqrt(ln(1 + s^2 / m^2))

    Args:
        mean: Arithmetic mean ``m`` (must be > 0)
        std: Arithmetic standard deviation ``s`` (must be >= 0)

    Returns:
        LogNormalParams with the matched ``mu`` and ``sigma``.

    Raises:
        InvalidParameters: If ``m <= 0``, ``s < 0`` or either is non-finite.
    """
    if not (math.isfinite(mean) and math.isfinite(std)):
        raise InvalidParameters(f"Log-normal moments must be finite (mean={mean}, std={std})")
    if mean <= 0:
        raise InvalidParameters(f"Log-normal mean must be positive, got {mean}")
    if std < 0:
        raise InvalidParameters(f"Log-normal standard deviation must be non-negative, got {std}")

    total = std ** 2 + mean ** 2
    if total <= 0:
        raise InvalidParameters(f"std^2 + mean^2 must be positive, got {total}")

    mu = math.log(mean ** 2 / math.sqrt(total))
    sigma = math.sqrt(math.log1p(std ** 2 / mean ** 2))
    return LogNormalParams(mu=mu, sigma=sigma)
