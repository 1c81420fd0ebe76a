"""Ecowitt to APRS-IS weather gateway."""

from gwaprs.constants import SOFTWARE_NAME, VERSION

__all__ = ['SOFTWARE_NAME', 'VERSION']
