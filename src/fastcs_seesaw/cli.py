"""Command-line interface for Seesaw I2C communication testing.

Provides interactive commands for testing the SeesawTransport,
SeesawProtocol and SeesawDevice layers against real hardware.
"""

import argparse
import asyncio
import logging
import sys
from typing import NoReturn

from .constants import DEFAULT_ADDRESS
from .device import PinMode, SeesawDevice
from .transport import SeesawTransport

logger = logging.getLogger(__name__)


class SeesawCLI:
    """Interactive CLI for Seesaw communication.

    Commands:
    - r <reg> <sub> <len>: Read register (hex reg/sub, decimal length)
    - w <reg> <sub> <hex bytes>: Write register payload
    - detect: Identify the chip
    - gpio: Read the GPIO bulk register
    - mode <pin> <output|input|input_pullup|input_pulldown>: Set pin mode
    - high <pin> / low <pin>: Drive a pin
    - toggle <pin>: Invert a pin
    - adc <pin>: Read an ADC pin
    - reset: Software reset
    - quit: Exit
    """

    def __init__(self, port: str, address: int = DEFAULT_ADDRESS):
        """Initialize CLI.

        Args:
            port: I2C adapter or sim://name
            address: 7-bit I2C device address
        """
        self.port = port
        self.address = address
        self.transport: SeesawTransport | None = None
        self.device: SeesawDevice | None = None

    async def start(self) -> None:
        """Connect to the bus and create the device."""
        self.transport = SeesawTransport(self.port)
        await self.transport.connect()
        self.device = SeesawDevice(self.transport, address=self.address)

        print(f"Connected to Seesaw at {self.address:#04x} on {self.port}")
        print("Type 'help' for available commands")

    async def stop(self) -> None:
        """Disconnect from the bus."""
        if self.transport:
            await self.transport.disconnect()

        print("Disconnected")

    async def run_command(self, cmd_line: str) -> bool:
        """Execute a command.

        Args:
            cmd_line: Command line input

        Returns:
            False if should exit, True otherwise
        """
        parts = cmd_line.strip().split()
        if not parts:
            return True

        cmd = parts[0].lower()
        device: SeesawDevice = self.device  # type: ignore[assignment]

        try:
            if cmd in ("quit", "exit", "q"):
                return False

            elif cmd == "help":
                print(self.__class__.__doc__)

            elif cmd == "r" and len(parts) == 4:
                reg = int(parts[1], 16)
                sub = int(parts[2], 16)
                data = await device.protocol.read(reg, sub, int(parts[3]))
                print(f"R{reg:02X}/{sub:02X} = {data.hex()}")

            elif cmd == "w" and len(parts) == 4:
                reg = int(parts[1], 16)
                sub = int(parts[2], 16)
                payload = bytes.fromhex(parts[3])
                await device.protocol.write(reg, sub, payload)
                print(f"W{reg:02X}/{sub:02X} {payload.hex()}")

            elif cmd == "detect":
                info = await device.detect_hardware()
                print(
                    f"{device.model.name}: chip id {info.chip_id:#04x}, "  # type: ignore[union-attr]
                    f"serial {info.serial}, built {info.build_date_str}"
                )
                print(f"Modules: {', '.join(device.options.enabled())}")

            elif cmd == "gpio":
                status = await device.read_gpio_bulk()
                print(f"GPIO = {status.value:#010x} ({status.to_bin_string()})")

            elif cmd == "mode" and len(parts) == 3:
                pin = int(parts[1])
                mode = PinMode[parts[2].upper()]
                await device.pin_mode(pin, mode)
                print(f"Pin {pin} -> {mode.name}")

            elif cmd in ("high", "low") and len(parts) == 2:
                pin = int(parts[1])
                await device.digital_write(pin, cmd == "high")
                print(f"Pin {pin} -> {cmd}")

            elif cmd == "toggle" and len(parts) == 2:
                pin = int(parts[1])
                await device.toggle(pin)
                print(f"Pin {pin} toggled -> {int(await device.digital_read(pin))}")

            elif cmd == "adc" and len(parts) == 2:
                pin = int(parts[1])
                raw = await device.analog_read(pin)
                volts = device.to_voltage(raw)
                print(f"ADC pin {pin} = {raw} ({volts:.3f} V)")

            elif cmd == "reset":
                await device.reset()
                print("Seesaw reset")

            else:
                print(f"Unknown command: {cmd}")
                print("Type 'help' for available commands")

        except (ValueError, KeyError) as e:
            print(f"Error: {e}")
        except Exception as e:
            print(f"Command failed: {e}")
            logger.exception("Command error")

        return True

    async def run_interactive(self) -> None:
        """Run interactive command loop."""
        await self.start()

        try:
            while True:
                try:
                    loop = asyncio.get_running_loop()
                    cmd_line = await loop.run_in_executor(None, input, "seesaw> ")

                    should_continue = await self.run_command(cmd_line)
                    if not should_continue:
                        break

                except EOFError:
                    print()
                    break
                except KeyboardInterrupt:
                    print()
                    break

        finally:
            await self.stop()


async def async_main(args: argparse.Namespace) -> int:
    """Async main entry point.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    cli = SeesawCLI(args.port, args.address)

    if args.command:
        # Execute single command
        await cli.start()
        try:
            await cli.run_command(" ".join(args.command))
        finally:
            await cli.stop()
        return 0

    await cli.run_interactive()
    return 0


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv)
    """
    parser = argparse.ArgumentParser(description="Seesaw I2C communication test tool")
    parser.add_argument(
        "port",
        help="I2C adapter (e.g., /dev/i2c-1 or 1) or sim://name",
    )
    parser.add_argument(
        "-a",
        "--address",
        type=lambda value: int(value, 0),
        default=DEFAULT_ADDRESS,
        help=f"I2C device address (default: {DEFAULT_ADDRESS:#04x})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-c",
        "--command",
        nargs="+",
        help="Execute single command and exit",
    )

    args = parser.parse_args(argv)

    try:
        exit_code = asyncio.run(async_main(args))
    except KeyboardInterrupt:
        print("\nInterrupted")
        exit_code = 130

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
