"""Protocol timings, defaults and poll periods."""

DEFAULT_ADDRESS = 0x49

# Settle delays (seconds). These are empirically observed minimums, not a
# ready/busy handshake; the chip may need longer under load.
READ_DELAY = 0.005
DIGITAL_WRITE_DELAY = 0.010
RESET_DELAY = 0.100

# 10-bit ADC
ADC_FULL_SCALE = 1023
DEFAULT_ADC_REF_VOLTAGE = 3.3

# fastcs poll periods (seconds)
SLOW_UPDATE = 1.0
FAST_UPDATE = 0.2
