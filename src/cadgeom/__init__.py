# -*- coding: utf-8 -*-
"""pure computational geometry helpers for CAD extension code

Triangles, circle tangents, bulge-encoded polyline segments, polyline
area/centroid decomposition, point collections and coordinate-system
transforms, all operating on plain yapCAD-style points and lists.
"""

import logging as _logging

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cadgeom")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
