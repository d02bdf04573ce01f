"""Tolerances used for geometric comparisons.

Every comparison in cadgeom takes an optional :class:`Tolerance`.  When
none is given, the process-wide default returned by
:func:`get_global_tolerance` is used.

A handful of fixed thresholds guard geometric degeneracy checks rather
than point equality.  They are module-level names so they can be
tuned; redefine them at your peril.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)

#: distance below which a polyline parameter snaps to a vertex in
#: ``Polyline.break_at``
BREAK_PARAM_EPSILON = 1e-6

#: cross-product threshold under which three points count as clockwise
#: when picking the sign of a fillet bulge
CLOCKWISE_EPSILON = 1e-8

#: point/vector tolerance for 3D coplanarity and containment tests
COPLANAR_EPSILON = 1e-9

#: absolute difference under which bulges and widths compare equal
BULGE_EPSILON = 1e-9


@dataclass(frozen=True)
class Tolerance:
    """A pair of comparison tolerances.

    ``equal_point`` is the distance under which two points are the
    same.  ``equal_vector`` is the difference under which two unit
    vectors (or angles, in radians) are the same.
    """

    equal_point: float = 1e-10
    equal_vector: float = 1e-10

    def __post_init__(self):
        if self.equal_point < 0 or self.equal_vector < 0:
            raise ValueError('negative tolerance values are not allowed: '
                             '{}, {}'.format(self.equal_point, self.equal_vector))


DEFAULT_TOLERANCE = Tolerance()

_global_tolerance = DEFAULT_TOLERANCE


def get_global_tolerance() -> Tolerance:
    """Return the process-wide default tolerance."""
    return _global_tolerance


def set_global_tolerance(tol: Tolerance) -> Tolerance:
    """Replace the process-wide default tolerance and return the old one."""
    global _global_tolerance
    if not isinstance(tol, Tolerance):
        raise ValueError('bad tolerance passed to set_global_tolerance: {}'.format(tol))
    old = _global_tolerance
    _global_tolerance = tol
    log.debug('global tolerance set to %s', tol)
    return old


def resolve(tol: Tolerance | None) -> Tolerance:
    """Return ``tol``, or the global tolerance when ``tol`` is ``None``."""
    return _global_tolerance if tol is None else tol


__all__ = [
    'BREAK_PARAM_EPSILON',
    'CLOCKWISE_EPSILON',
    'COPLANAR_EPSILON',
    'BULGE_EPSILON',
    'Tolerance',
    'DEFAULT_TOLERANCE',
    'get_global_tolerance',
    'set_global_tolerance',
    'resolve',
]
