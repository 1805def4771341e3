"""
Montgomery modular multiplication for an arbitrary odd modulus.

A MontgomeryContext is built once per modulus N and then reused for any
number of multiplications. Values are moved into the Montgomery domain
(x -> x * R mod N), multiplied there with REDC, which only needs masking
and shifting by the bit length of N, and moved back out at the end.
"""

import logging

logger = logging.getLogger(__name__)


class InvalidModulus(ValueError):
    """Raised when a context is requested for an even or non-positive modulus."""


class InvariantViolation(RuntimeError):
    """Raised when the precomputed Montgomery constants are inconsistent."""


class MontgomeryContext:
    """Precomputed constants for Montgomery arithmetic modulo a fixed odd N."""

    __slots__ = ('_n', '_bit_length', '_r', '_mask', '_r_inv', '_n_prime')

    def __init__(self, n):
        """
        Build the context for modulus n.

        Args:
            n (int): Odd, strictly positive modulus

        Raises:
            TypeError: n is not an integer
            InvalidModulus: n is even or not positive
            InvariantViolation: R * R^-1 - 1 is not divisible by n
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"Modulus must be an int, got {type(n).__name__}")
        if n <= 0:
            raise InvalidModulus(f"Modulus must be positive, got {n}")
        if n % 2 == 0:
            raise InvalidModulus(f"Modulus must be odd, got {n}")

        bit_length = n.bit_length()
        r = 1 << bit_length  # R = 2^k > n
        r_inv = pow(r, -1, n)

        # N' = (R * R' - 1) / N, exact
        n_prime, remainder = divmod(r * r_inv - 1, n)
        if remainder:
            raise InvariantViolation(
                f"R * R^-1 - 1 is not divisible by the modulus (remainder {remainder})"
            )

        set_field = object.__setattr__
        set_field(self, '_n', n)
        set_field(self, '_bit_length', bit_length)
        set_field(self, '_r', r)
        set_field(self, '_mask', r - 1)
        set_field(self, '_r_inv', r_inv)
        set_field(self, '_n_prime', n_prime)

        logger.debug("Montgomery context ready for a %d-bit modulus", bit_length)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def n(self):
        return self._n

    @property
    def bit_length(self):
        return self._bit_length

    @property
    def r(self):
        return self._r

    @property
    def mask(self):
        """Low bit_length bits, i.e. reduction mod R."""
        return self._mask

    @property
    def r_inv(self):
        return self._r_inv

    @property
    def n_prime(self):
        return self._n_prime

    def to_montgomery(self, t):
        """Enter the Montgomery domain: t * R mod N."""
        return t * self._r % self._n

    def from_montgomery(self, m):
        """
        Leave the Montgomery domain: m * R^-1 mod N.

        m must be a Montgomery representative; an ordinary value gives a
        well-defined but meaningless result.
        """
        return m * self._r_inv % self._n

    def redc(self, t):
        """
        Montgomery reduction: compute t * R^(-1) mod N.

        Args:
            t (int): Unreduced value, 0 <= t < N * R

        Returns:
            int: t * R^(-1) mod N, in [0, N)
        """
        m = ((t & self._mask) * self._n_prime) & self._mask
        u = (t + m * self._n) >> self._bit_length

        if u >= self._n:
            return u - self._n
        return u

    def multiply(self, a, b):
        """
        Montgomery multiplication of two Montgomery-domain values.

        Args:
            a (int): x * R mod N
            b (int): y * R mod N

        Returns:
            int: x * y * R mod N
        """
        return self.redc(a * b)

    def square(self, a):
        return self.redc(a * a)

    def one(self):
        """Montgomery representative of 1."""
        return self._r % self._n

    def describe(self):
        """Return the context constants and log them at DEBUG level."""
        constants = {
            'N': self._n,
            'R': self._r,
            "N'": self._n_prime,
            "R'": self._r_inv,
            'n size': self._bit_length,
        }
        if logger.isEnabledFor(logging.DEBUG):
            for name, value in constants.items():
                if name == 'n size':
                    logger.debug("%s = %d", name, value)
                else:
                    logger.debug("%s = 0x%x; = %d", name, value, value)
        return constants

    def __eq__(self, other):
        if not isinstance(other, MontgomeryContext):
            return NotImplemented
        return self._n == other._n

    def __hash__(self):
        return hash((MontgomeryContext, self._n))

    def __repr__(self):
        return f"MontgomeryContext(n={self._n}, bit_length={self._bit_length})"
