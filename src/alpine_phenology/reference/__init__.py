"""Static calibration constants for the station.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from alpine_phenology.reference.thresholds import DEFAULT_THRESHOLDS as DEFAULT_THRESHOLDS
from alpine_phenology.reference.thresholds import Thresholds as Thresholds
