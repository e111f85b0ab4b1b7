"""Configuration dataclasses for the dissonance model.

The published defaults are module-level constants. Callers never mutate
them; :func:`resolve_params` merges overrides field-by-field into a new,
fully materialised :class:`DissonanceParams` that is then passed explicitly
to every pairwise computation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from fractions import Fraction
from typing import Any

from .exceptions import InvalidParamsError

DEFAULT_START = Fraction(1)
DEFAULT_END = Fraction(2)
DEFAULT_MAX_DENOMINATOR = 60


@dataclass(frozen=True)
class SecondOrderBeatingTerm:
    """A near-harmonic ratio that produces additional beating.

    Attributes:
        ratio: Frequency ratio around which second-order beats appear.
        magnitude: Relative weight of the term.
    """

    ratio: float
    magnitude: float


@dataclass(frozen=True)
class SecondOrderBeatingParams:
    """Configuration for the second-order-beating extension.

    With no terms configured the extension contributes nothing.

    Attributes:
        terms: Beating terms to evaluate for each partial pair.
        width_magnitude_relationship: How strongly a term's magnitude narrows
            its dissonance bump.
        total_contribution: Weight of the summed beating terms.
    """

    terms: tuple[SecondOrderBeatingTerm, ...] = ()
    width_magnitude_relationship: float = 0.0
    total_contribution: float = 1.0

    @property
    def enabled(self) -> bool:
        """Whether any beating term is configured."""
        return len(self.terms) > 0


@dataclass(frozen=True)
class DissonanceParams:
    """Plomp-Levelt fitting constants.

    Defaults are the parameters proposed by Sethares in the appendix
    "How to Draw Dissonance Curves".

    Attributes:
        s1: Slope of the critical-bandwidth scaling with frequency.
        s2: Offset of the critical-bandwidth scaling.
        b1: Rate of the first exponential.
        b2: Rate of the second exponential.
        x_star: Frequency difference (in critical bandwidths) of peak dissonance.
        total_contribution: Weight of the base Plomp-Levelt term.
        second_order_beating: Second-order-beating extension settings.
    """

    s1: float = 0.021
    s2: float = 19.0
    b1: float = 3.5
    b2: float = 5.75
    x_star: float = 0.24
    total_contribution: float = 1.0
    second_order_beating: SecondOrderBeatingParams = field(
        default_factory=SecondOrderBeatingParams
    )


SECOND_ORDER_BEATING_PARAMS = SecondOrderBeatingParams()
SETHARES_DISSONANCE_PARAMS = DissonanceParams()
DEFAULT_DISSONANCE_PARAMS = SETHARES_DISSONANCE_PARAMS


def _as_term(term: Any) -> SecondOrderBeatingTerm:
    if isinstance(term, SecondOrderBeatingTerm):
        return term
    if isinstance(term, Mapping):
        return SecondOrderBeatingTerm(
            ratio=float(term["ratio"]), magnitude=float(term["magnitude"])
        )
    ratio, magnitude = term
    return SecondOrderBeatingTerm(ratio=float(ratio), magnitude=float(magnitude))


def _field_names(cls: type) -> set[str]:
    return {f.name for f in fields(cls)}


def _check_keys(cls: type, overrides: Mapping[str, Any]) -> None:
    unknown = set(overrides) - _field_names(cls)
    if unknown:
        raise InvalidParamsError(
            f"Unknown {cls.__name__} field(s): {', '.join(sorted(unknown))}"
        )


def resolve_beating_params(
    base: SecondOrderBeatingParams,
    overrides: SecondOrderBeatingParams | Mapping[str, Any] | None,
) -> SecondOrderBeatingParams:
    """Merge second-order-beating overrides into ``base``.

    Args:
        base: Parameters to start from.
        overrides: Complete replacement, mapping of field overrides, or None.

    Returns:
        Resolved beating parameters.

    Raises:
        InvalidParamsError: If the mapping names an unknown field.
    """
    if overrides is None:
        return base
    if isinstance(overrides, SecondOrderBeatingParams):
        return overrides

    _check_keys(SecondOrderBeatingParams, overrides)
    changes = dict(overrides)
    if "terms" in changes:
        terms: Iterable[Any] = changes["terms"] or ()
        changes["terms"] = tuple(_as_term(t) for t in terms)
    return replace(base, **changes)


def resolve_params(
    base: DissonanceParams | Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> DissonanceParams:
    """Resolve a fully materialised parameter set.

    Layers are applied in order: published defaults, then ``base``, then
    ``overrides``. Mappings are merged field-by-field, including the nested
    ``second_order_beating`` block.

    Args:
        base: A complete parameter set or a mapping of overrides.
        overrides: Further field overrides applied on top of ``base``.

    Returns:
        Resolved parameters.

    Raises:
        InvalidParamsError: If a mapping names an unknown field.

    Example:
        >>> params = resolve_params(overrides={"b1": 3.0})
        >>> params.b1, params.b2
        (3.0, 5.75)
    """
    resolved = DEFAULT_DISSONANCE_PARAMS
    for layer in (base, overrides):
        if layer is None:
            continue
        if isinstance(layer, DissonanceParams):
            resolved = layer
            continue

        _check_keys(DissonanceParams, layer)
        changes = dict(layer)
        if "second_order_beating" in changes:
            changes["second_order_beating"] = resolve_beating_params(
                resolved.second_order_beating, changes["second_order_beating"]
            )
        resolved = replace(resolved, **changes)
    return resolved
