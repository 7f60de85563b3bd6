"""Board definitions for pinpoint-planner."""

from pinpoint_planner.models import BoardDefinition, Capability, PinSpec

_CAP = {c.value: c for c in Capability}


def _pins(rows: list[tuple[str, str, str]]) -> list[PinSpec]:
    return [PinSpec(label=label, capability=_CAP[cap], title=title) for label, cap, title in rows]


def _build_boards() -> dict[str, BoardDefinition]:
    """Build the dict of built-in board definitions."""
    boards: dict[str, BoardDefinition] = {}

    def _reg(b: BoardDefinition) -> None:
        boards[b.id] = b

    # --- Raspberry Pi 4 ---
    # 40-pin header, pin 1 through pin 40.
    _reg(BoardDefinition(
        id="rpi4",
        name="Raspberry Pi 4 Model B",
        title="Raspberry Pi 4 Pinout",
        logic_voltage=3.3,
        language="python",
        pins=_pins([
            ("3.3V", "power", "Pin 1: 3.3V Power Rail"),
            ("5V", "power", "Pin 2: 5V Power Rail"),
            ("2", "i2c", "Pin 3: GPIO 2 (I2C1, SDA)"),
            ("5V", "power", "Pin 4: 5V Power Rail"),
            ("3", "i2c", "Pin 5: GPIO 3 (I2C1, SCL)"),
            ("GND", "ground", "Pin 6: Ground"),
            ("4", "gpio", "Pin 7: GPIO 4 (GPCLK0)"),
            ("14", "uart", "Pin 8: GPIO 14 (UART TXD)"),
            ("GND", "ground", "Pin 9: Ground"),
            ("15", "uart", "Pin 10: GPIO 15 (UART RXD)"),
            ("17", "gpio", "Pin 11: GPIO 17"),
            ("18", "gpio", "Pin 12: GPIO 18 (PWM0)"),
            ("27", "gpio", "Pin 13: GPIO 27"),
            ("GND", "ground", "Pin 14: Ground"),
            ("22", "gpio", "Pin 15: GPIO 22"),
            ("23", "gpio", "Pin 16: GPIO 23"),
            ("3.3V", "power", "Pin 17: 3.3V Power Rail"),
            ("24", "gpio", "Pin 18: GPIO 24"),
            ("10", "spi", "Pin 19: GPIO 10 (SPI0, MOSI)"),
            ("GND", "ground", "Pin 20: Ground"),
            ("9", "spi", "Pin 21: GPIO 9 (SPI0, MISO)"),
            ("25", "gpio", "Pin 22: GPIO 25"),
            ("11", "spi", "Pin 23: GPIO 11 (SPI0, SCLK)"),
            ("8", "spi", "Pin 24: GPIO 8 (SPI0, CE0)"),
            ("GND", "ground", "Pin 25: Ground"),
            ("7", "spi", "Pin 26: GPIO 7 (SPI0, CE1)"),
            ("ID_SD", "i2c", "Pin 27: ID_SD (I2C ID EEPROM)"),
            ("ID_SC", "i2c", "Pin 28: ID_SC (I2C ID EEPROM)"),
            ("5", "gpio", "Pin 29: GPIO 5"),
            ("GND", "ground", "Pin 30: Ground"),
            ("6", "gpio", "Pin 31: GPIO 6"),
            ("12", "gpio", "Pin 32: GPIO 12 (PWM0)"),
            ("13", "gpio", "Pin 33: GPIO 13 (PWM1)"),
            ("GND", "ground", "Pin 34: Ground"),
            ("19", "spi", "Pin 35: GPIO 19 (SPI1, MISO)"),
            ("16", "gpio", "Pin 36: GPIO 16"),
            ("26", "gpio", "Pin 37: GPIO 26"),
            ("20", "spi", "Pin 38: GPIO 20 (SPI1, MOSI)"),
            ("GND", "ground", "Pin 39: Ground"),
            ("21", "spi", "Pin 40: GPIO 21 (SPI1, SCLK)"),
        ]),
    ))

    # --- Arduino Uno ---
    # Left (power & analog) and right (digital) headers interleaved.
    _reg(BoardDefinition(
        id="uno",
        name="Arduino Uno R3",
        title="Arduino Uno Pinout",
        logic_voltage=5.0,
        language="arduino",
        pins=_pins([
            ("IOREF", "power", "Power: I/O Voltage Reference"),
            ("SCL", "i2c", "Pin SCL (I2C)"),
            ("RESET", "gpio", "System Reset"),
            ("SDA", "i2c", "Pin SDA (I2C)"),
            ("3.3V", "power", "Power: 3.3V Regulated Output"),
            ("AREF", "gpio", "Power: Analog Reference"),
            ("5V", "power", "Power: 5V Regulated Output"),
            ("GND", "ground", "Power: Ground"),
            ("GND", "ground", "Power: Ground"),
            ("13", "spi", "Pin 13: Digital I/O (SPI SCK, LED)"),
            ("GND", "ground", "Power: Ground"),
            ("12", "spi", "Pin 12: Digital I/O (SPI MISO)"),
            ("VIN", "power", "Power: Voltage In (7-12V)"),
            ("11", "spi", "Pin 11: Digital I/O (SPI MOSI, PWM)"),
            ("A0", "gpio", "Pin A0: Analog In"),
            ("10", "spi", "Pin 10: Digital I/O (SPI SS, PWM)"),
            ("A1", "gpio", "Pin A1: Analog In"),
            ("9", "gpio", "Pin 9: Digital I/O (PWM)"),
            ("A2", "gpio", "Pin A2: Analog In"),
            ("8", "gpio", "Pin 8: Digital I/O"),
            ("A3", "gpio", "Pin A3: Analog In"),
            ("7", "gpio", "Pin 7: Digital I/O"),
            ("A4", "i2c", "Pin A4: Analog In (I2C SDA)"),
            ("6", "gpio", "Pin 6: Digital I/O (PWM)"),
            ("A5", "i2c", "Pin A5: Analog In (I2C SCL)"),
            ("5", "gpio", "Pin 5: Digital I/O (PWM)"),
            ("4", "gpio", "Pin 4: Digital I/O"),
            ("3", "gpio", "Pin 3: Digital I/O (PWM, Interrupt)"),
            ("2", "gpio", "Pin 2: Digital I/O (Interrupt)"),
            ("1", "uart", "Pin 1: Digital I/O (TX1)"),
            ("0", "uart", "Pin 0: Digital I/O (RX0)"),
        ]),
    ))

    # --- ESP32 DevKitC ---
    _reg(BoardDefinition(
        id="esp32",
        name="ESP32 DevKitC",
        title="ESP32 DevKitC Pinout",
        logic_voltage=3.3,
        language="arduino",
        pins=_pins([
            # Left side
            ("EN", "power", "EN: Enable (HIGH for normal operation)"),
            ("VP", "gpio", "GPIO36 (ADC1_0, SensVP)"),
            ("VN", "gpio", "GPIO39 (ADC1_3, SensVN)"),
            ("34", "gpio", "GPIO34 (ADC1_6)"),
            ("35", "gpio", "GPIO35 (ADC1_7)"),
            ("32", "gpio", "GPIO32 (ADC1_4, Touch9)"),
            ("33", "gpio", "GPIO33 (ADC1_5, Touch8)"),
            ("25", "gpio", "GPIO25 (ADC2_8, DAC1)"),
            ("26", "gpio", "GPIO26 (ADC2_9, DAC2)"),
            ("27", "gpio", "GPIO27 (ADC2_7, Touch7)"),
            ("14", "gpio", "GPIO14 (HSPI_CLK, Touch6)"),
            ("12", "gpio", "GPIO12 (HSPI_MISO, Touch5)"),
            ("13", "gpio", "GPIO13 (HSPI_MOSI, Touch4)"),
            ("GND", "ground", "Ground"),
            ("VIN", "power", "5V Power Input"),
            # Right side
            ("23", "spi", "GPIO23 (VSPI_MOSI)"),
            ("22", "i2c", "GPIO22 (I2C SCL)"),
            ("1", "uart", "GPIO1 (U0_TXD)"),
            ("3", "uart", "GPIO3 (U0_RXD)"),
            ("21", "i2c", "GPIO21 (I2C SDA)"),
            ("19", "spi", "GPIO19 (VSPI_MISO)"),
            ("18", "spi", "GPIO18 (VSPI_SCK)"),
            ("5", "spi", "GPIO5 (VSPI_CS)"),
            ("17", "uart", "GPIO17 (U2_TXD)"),
            ("16", "uart", "GPIO16 (U2_RXD)"),
            ("4", "gpio", "GPIO4 (ADC2_0, Touch0)"),
            ("2", "gpio", "GPIO2 (ADC2_2, Touch2)"),
            ("15", "gpio", "GPIO15 (ADC2_3, Touch3)"),
            ("GND", "ground", "Ground"),
            ("3.3V", "power", "3.3V Power Output"),
        ]),
    ))

    return boards


BOARDS: dict[str, BoardDefinition] = _build_boards()
