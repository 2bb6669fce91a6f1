"""Seesaw sub-controller hierarchy.

This package provides FastCS sub-controllers for the Seesaw modules driven
by this package:
- GPIO bank (bulk state, per-pin state, pin commands)
- ADC sampling

Each sub-controller exposes its associated registers as FastCS attributes
and acts on the device through SeesawDevice.
"""

from .adc import AdcController
from .gpio import GpioController

__all__ = [
    "AdcController",
    "GpioController",
]
