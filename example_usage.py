"""
Example usage of the Montgomery context.
Runs the reference multiplication vectors and a naive exponentiation demo.
"""

import argparse
import logging
import sys

from montgomery import MontgomeryContext

logger = logging.getLogger(__name__)


# (a, b, N, a * b mod N), as decimal strings
_MULTIPLY_VECTORS = [
    ("1", "2", "13", "2"),
    ("1", "1", "13", "1"),
    ("7", "7", "13", "10"),
    ("2", "13", "207", "26"),
    ("1", "1", "1009", "1"),
    ("2", "10", "1009", "20"),
    ("5", "1", "193514046488575", "5"),
    ("15", "1", "4349330786055998253486590232462401", "15"),
    ("15", "10",
     "1475703270992002140168997557525132617116077748043980354291003276386587324053694848174953095546817655706234979251318204003655882580688895",
     "150"),
    ("148677972634832330983979593310074301486537017973460461278300587514468301043894574906886127642530475786889672304776052879927627556769456140664043088700743909632312483413393134504352834240399191134336344285483935856491230340093391784574980688823380828143810804684752914935441384845195613674104960646037368551517",
     "158741574437007245654463598139927898730476924736461654463975966787719309357536545869203069369466212089132653564188443272208127277664424448947476335413293018778018615899291704693105620242763173357203898195318179150836424196645745308205164116144020613415407736216097185962171301808761138424668335445923774195463",
     "446397596678771930935753654586920306936946621208913265356418844327220812727766442444894747633541329301877801861589929170469310562024276317335720389819531817915083642419664574530820516411614402061341540773621609718596217130180876113842466833544592377419546315874157443700724565446359813992789873047692473646165446397596678771930935753654586920306936946621208913265356418844327220812727766442444894747633541329301877801861589929170469310562045923774195463",
     "15733033542428556326610775226428250291950090984377467644096837926072"
     "98553857572965450727431838091748906310425930542328045644280094594289"
     "52380420588404540083723320848855612172087517363909606183916778041064"
     "11997952939978862543172484483575568826983703005515400230343351224994"
     "85403291437917132468481025327704901371719125205664144192914895118949"
     "25716605685210349843822514310138216212323303683754146084454361295646"
     "557462263542138176646203699553393662651092450"),
]

MULTIPLY_CASES = [tuple(int(v) for v in case) for case in _MULTIPLY_VECTORS]

# (a, u, m, a^u mod m)
POW_CASES = [
    (15, 117, 17, 2),
    (21251, 12415, 222221, 213559),
]


def check_multiply_case(a, b, n):
    """Multiply a and b modulo n through the Montgomery domain."""
    ctx = MontgomeryContext(n)
    a_mont = ctx.to_montgomery(a)
    b_mont = ctx.to_montgomery(b)
    ab_mont = ctx.multiply(a_mont, b_mont)
    return ctx.from_montgomery(ab_mont)


def pow_mod_example(a, u, m):
    """
    Compute a^u mod m with u successive Montgomery multiplications.

    Just an example, don't do this: the loop is linear in the exponent.
    Real callers should square-and-multiply over the bits of u.

    Args:
        a (int): Base
        u (int): Non-negative exponent
        m (int): Odd modulus

    Returns:
        int: a^u mod m
    """
    if u < 0:
        raise ValueError("Negative exponents not supported in this example.")

    ctx = MontgomeryContext(m)
    a_mont = ctx.to_montgomery(a)
    r_mont = ctx.one()

    for _ in range(u):
        r_mont = ctx.multiply(r_mont, a_mont)

    return ctx.from_montgomery(r_mont)


def run_vectors(skip_pow=False):
    """
    Run the reference vectors.

    Returns:
        list: (kind, inputs, expected, got) for every mismatch
    """
    failures = []

    for a, b, n, expected in MULTIPLY_CASES:
        if logger.isEnabledFor(logging.DEBUG):
            MontgomeryContext(n).describe()
        got = check_multiply_case(a, b, n)
        if got == expected:
            logger.info("mul ok: %d-bit modulus", n.bit_length())
        else:
            logger.error("mul mismatch for N=%d: expected %d, got %d", n, expected, got)
            failures.append(('mul', (a, b, n), expected, got))

    if skip_pow:
        logger.info("Skipping exponentiation vectors")
        return failures

    for a, u, m, expected in POW_CASES:
        got = pow_mod_example(a, u, m)
        if got == expected:
            logger.info("pow ok: %d^%d mod %d = %d", a, u, m, got)
        else:
            logger.error("pow mismatch for %d^%d mod %d: expected %d, got %d",
                         a, u, m, expected, got)
            failures.append(('pow', (a, u, m), expected, got))

    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Run the Montgomery multiplication reference vectors.",
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help="Log the Montgomery constants of every context",
    )
    parser.add_argument(
        '--skip-pow',
        action='store_true',
        help="Skip the naive exponentiation vectors",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    failures = run_vectors(skip_pow=args.skip_pow)
    total = len(MULTIPLY_CASES) + (0 if args.skip_pow else len(POW_CASES))

    print("Montgomery Multiplication Reference Vectors")
    print("=" * 45)
    print(f"Passed: {total - len(failures)}/{total}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
