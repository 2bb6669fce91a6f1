"""FastCS Seesaw EPICS server entry point.

Launches a FastCS server that exposes a Seesaw chip via EPICS PVs.

Usage:
    python -m fastcs_seesaw --port /dev/i2c-1 --address 0x49 --pv-prefix BL99I-EA-SEESAW-01:
"""

import logging
from argparse import ArgumentParser
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .constants import DEFAULT_ADC_REF_VOLTAGE, DEFAULT_ADDRESS
from .seesaw_controller import SeesawController

__all__ = ["main"]


def main(args: Sequence[str] | None = None) -> None:
    """Launch the FastCS Seesaw EPICS server."""
    parser = ArgumentParser(description="FastCS Seesaw EPICS Server")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=__version__,
    )
    parser.add_argument(
        "--port",
        type=str,
        required=True,
        help="I2C adapter (e.g., /dev/i2c-1, 1) or sim://name",
    )
    parser.add_argument(
        "--address",
        type=lambda value: int(value, 0),
        default=DEFAULT_ADDRESS,
        help=f"I2C device address (default: {DEFAULT_ADDRESS:#04x})",
    )
    parser.add_argument(
        "--adc-ref",
        type=float,
        default=DEFAULT_ADC_REF_VOLTAGE,
        help=f"ADC reference voltage (default: {DEFAULT_ADC_REF_VOLTAGE})",
    )
    parser.add_argument(
        "--pv-prefix",
        type=str,
        default="SEESAW",
        help="EPICS PV prefix (default: SEESAW)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--gui",
        type=str,
        default=None,
        help="Generate Phoebus screen file (e.g., seesaw.bob)",
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Run without the interactive shell",
    )

    parsed_args = parser.parse_args(args)

    # Setup logging
    logging.basicConfig(
        level=getattr(logging, parsed_args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Import FastCS components (optional dependency for EPICS)
    try:
        from fastcs.launch import FastCS
        from fastcs.transports.epics.ca import EpicsCATransport
        from fastcs.transports.epics.options import (
            EpicsGUIOptions,
            EpicsIOCOptions,
        )
    except ImportError as e:
        print(f"Error: FastCS EPICS transport not available: {e}")
        print("Please install with: pip install 'fastcs[ca]'")
        return

    controller = SeesawController(
        port=parsed_args.port,
        address=parsed_args.address,
        adc_ref_voltage=parsed_args.adc_ref,
    )

    # Setup GUI options if requested
    gui_options = None
    if parsed_args.gui:
        gui_options = EpicsGUIOptions(
            output_path=Path(parsed_args.gui),
            title="Seesaw I2C Co-processor",
        )

    transport = EpicsCATransport(
        gui=gui_options,
        epicsca=EpicsIOCOptions(pv_prefix=parsed_args.pv_prefix),
    )

    fastcs = FastCS(controller, [transport])
    fastcs.run(interactive=not parsed_args.no_interactive)


if __name__ == "__main__":
    main()
