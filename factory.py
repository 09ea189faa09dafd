"""
The catalog factory.

The factory does NOT just construct a catalog - it *verifies* it
against the executable specs before releasing it.

Flow:
  1. Caller requests a catalog for an ``EngineConfig``.
  2. Factory builds the engine and declares every operation on it.
  3. Factory runs the full spec suite against the catalog.
  4. If verification passes  -> return the catalog.
     If verification fails   -> raise, never hand out a broken catalog.
"""

from __future__ import annotations

import inspect
import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Iterable

from arithmetic import ArithmeticEngine
from catalog import Catalog, build_catalog
from config import EngineConfig
from errors import DivisionByZeroError
from operand import Operand, from_int
from spec import Property, Spec, all_specs

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """How one property fared over its operand combinations."""

    property_name: str
    passed: bool
    counterexample: tuple[str, ...] | None = None
    tests_run: int = 0
    skipped: int = 0  # combinations that hit a zero divisor

    def __repr__(self) -> str:
        text = f"{'ok' if self.passed else 'FAIL'} {self.property_name}: {self.tests_run} checks"
        if self.skipped:
            text += f", {self.skipped} zero divisors"
        if self.counterexample is not None:
            text += f", fails on ({', '.join(self.counterexample)})"
        return text


@dataclass
class VerificationReport:
    """Per-property results for one spec."""

    spec_name: str
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def failures(self) -> list[VerificationResult]:
        return [r for r in self.results if not r.passed]

    @property
    def tests_run(self) -> int:
        return sum(r.tests_run for r in self.results)

    def summary(self) -> str:
        verdict = "passed" if self.passed else f"FAILED ({len(self.failures)})"
        body = "\n".join(f"    {r!r}" for r in self.results)
        return f"{self.spec_name}: {verdict}\n{body}"


class VerificationError(Exception):
    """Raised when a catalog breaks one of its properties."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(f"Catalog rejected by {report.spec_name}:\n{report.summary()}")


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class CatalogFactory:
    """
    Produces catalogs that are checked against every spec.

    When the native range is small enough the factory checks every
    combination of native values; results routinely overflow such a
    range, so the digit algorithms get exhaustive coverage too.  For
    wider ranges it samples edge values and seeded random operands,
    both native and extended.
    """

    @classmethod
    def create(
        cls,
        config: EngineConfig | None = None,
        specs: list[Spec] | None = None,
    ) -> Catalog:
        """Build, verify, and return a Catalog."""
        if config is None:
            config = EngineConfig()
        catalog = build_catalog(ArithmeticEngine(native=config.native))
        if config.verify:
            cls.verify(catalog, config, specs)
        else:
            logger.info("Verification disabled; catalog released unchecked")
        return catalog

    @classmethod
    def verify(
        cls,
        catalog: Catalog,
        config: EngineConfig,
        specs: list[Spec] | None = None,
    ) -> list[VerificationReport]:
        """Check ``catalog`` against ``specs`` (all of them by default).

        Stops at the first spec with a failing property.
        """
        reports = []
        for spec in specs if specs is not None else all_specs():
            report = cls._verify_spec(spec, catalog, config)
            if not report.passed:
                logger.error("%s", report.summary())
                raise VerificationError(report)
            logger.info(
                "Verified %s: %d properties, %d checks",
                spec.name, len(report.results), report.tests_run,
            )
            reports.append(report)
        return reports

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_spec(
        cls, spec: Spec, catalog: Catalog, config: EngineConfig
    ) -> VerificationReport:
        return VerificationReport(
            spec_name=spec.name,
            results=[cls._verify_property(p, catalog, config) for p in spec],
        )

    @classmethod
    def _verify_property(
        cls, prop: Property, catalog: Catalog, config: EngineConfig
    ) -> VerificationResult:
        result = VerificationResult(property_name=prop.name, passed=True)
        for combo in _combinations(config, _predicate_arity(prop)):
            result.tests_run += 1
            try:
                holds = prop.check(catalog, *combo)
            except DivisionByZeroError:
                result.skipped += 1
                continue
            if not holds:
                result.passed = False
                result.counterexample = tuple(str(v) for v in combo)
                break
        return result


# ---------------------------------------------------------------------------
# Operand generation
# ---------------------------------------------------------------------------

def _predicate_arity(prop: Property) -> int:
    """Operand count of a predicate; its first parameter is the catalog."""
    return len(inspect.signature(prop.predicate).parameters) - 1


def _combinations(config: EngineConfig, arity: int) -> Iterable[tuple[Operand, ...]]:
    if config.exhaustive:
        domain = [from_int(v) for v in config.native.all_values()]
        return itertools.product(domain, repeat=arity)
    return _generate_samples(config, arity)


def edge_values(config: EngineConfig) -> list[Operand]:
    """Native boundaries, small values and a few extended magnitudes."""
    native = config.native
    big = 10 ** config.extended_digits
    raw = [
        native.lo, native.lo - 1, -1, 0, 1, native.hi, native.hi + 1,
        big - 1, -(big + 7),
    ]
    return [from_int(v) for v in dict.fromkeys(raw)]


def _random_value(rng: random.Random, config: EngineConfig) -> int:
    if rng.random() < 0.5:
        return rng.randint(config.native.lo, config.native.hi)
    digits = rng.randint(1, config.extended_digits)
    return rng.choice((-1, 1)) * rng.randint(0, 10 ** digits - 1)


def _generate_samples(config: EngineConfig, arity: int) -> list[tuple[Operand, ...]]:
    """Edge-case combinations followed by seeded random ones."""
    rng = random.Random(config.seed)
    samples = list(itertools.product(edge_values(config), repeat=arity))
    for _ in range(config.sample_count):
        samples.append(
            tuple(from_int(_random_value(rng, config)) for _ in range(arity))
        )
    return samples
