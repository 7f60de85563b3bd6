"""Built-in component definitions for pinpoint-planner."""

from pinpoint_planner.models import (
    OPTIONAL,
    BoardOverride,
    Capability,
    ComponentDefinition,
    DependencyRule,
)

GPIO = (Capability.GPIO,)
I2C = (Capability.I2C,)
SPI = (Capability.SPI,)
UART = (Capability.UART,)
I2C_OR_SPI = (Capability.I2C, Capability.SPI)

_UNO_5V = BoardOverride(required=False, reason="Arduino Uno operates at 5V")


def _build_components() -> dict[str, ComponentDefinition]:
    """Build the dict of built-in component definitions."""
    components: dict[str, ComponentDefinition] = {}

    def _reg(c: ComponentDefinition) -> None:
        components[c.id] = c

    # --- Sensors ---

    _reg(ComponentDefinition(
        id="dht22", name="DHT22 Sensor", data=GPIO, power=1, ground=1,
        category="Sensors", voltage="3.3V-5V", complexity="simple",
        tip="Digital temperature and humidity sensor. Works directly with data pin.",
        notes="Built-in pull-up resistor. Connect directly to GPIO pin.",
    ))
    _reg(ComponentDefinition(
        id="bmp280", name="BMP280 Pressure Sensor", data=I2C, power=1, ground=1,
        category="Sensors", voltage="3.3V", complexity="simple",
        tip="Barometric pressure and temperature sensor with I2C interface.",
        notes="Usually comes on breakout board with built-in voltage regulation.",
        i2c_address="0x76 or 0x77",
    ))
    _reg(ComponentDefinition(
        id="bme680", name="BME680 Air Quality Sensor", data=I2C_OR_SPI, power=1, ground=1,
        category="Sensors", voltage="3.3V", complexity="moderate",
        tip="Air quality sensor measuring temperature, humidity, pressure, and gas.",
        notes="Premium environmental sensor with gas resistance measurement.",
        i2c_address="0x76 or 0x77",
    ))
    _reg(ComponentDefinition(
        id="ds18b20", name="DS18B20 Temperature Sensor", data=GPIO, power=1, ground=1,
        category="Sensors", voltage="3.3V-5V", complexity="moderate",
        tip="Waterproof digital temperature sensor using 1-Wire protocol.",
        notes="Perfect for temperature monitoring in wet environments.",
        dependencies=[DependencyRule(
            type="resistor", value="4.7kΩ", purpose="pull_up",
            description="1-Wire pull-up resistor",
            reason="1-Wire protocol requires pull-up resistor on data line",
            connection="gpio_to_power",
        )],
    ))
    _reg(ComponentDefinition(
        id="pir", name="PIR Motion Sensor", data=GPIO, power=1, ground=1,
        category="Sensors", voltage="3.3V-5V", complexity="simple",
        tip="Passive infrared motion sensor for detecting movement.",
        notes="Digital output (HIGH when motion detected). Has sensitivity adjustment.",
    ))
    _reg(ComponentDefinition(
        id="ultrasonic_hcsr04", name="HC-SR04 Ultrasonic Sensor", data=GPIO, power=1, ground=1,
        category="Sensors", voltage="5V", complexity="moderate",
        tip="Ultrasonic distance sensor for measuring distances 2-400cm.",
        notes="TRIG pin can accept 3.3V, but ECHO outputs 5V.",
        warnings=["ECHO pin outputs 5V - protect 3.3V boards"],
        dependencies=[DependencyRule(
            type="level_shifter", purpose="voltage_protection",
            description="Voltage divider or level shifter for ECHO pin",
            reason="ECHO pin outputs 5V which can damage 3.3V boards",
            board_overrides={"uno": _UNO_5V},
        )],
    ))
    _reg(ComponentDefinition(
        id="mpu6050", name="MPU6050 Gyro/Accel", data=I2C, power=1, ground=1,
        category="Sensors", voltage="3.3V", complexity="complex",
        tip="MEMS motion tracking device. Usually comes on breakout board.",
        notes="Most breakout boards include voltage regulation and I2C pull-ups.",
        code_hints={
            "rpi4": "Enable I2C: sudo raspi-config -> Interface -> I2C",
            "uno": "Use Wire.h library for I2C communication",
        },
        dependencies=[
            DependencyRule(
                type="breakout_board", default_required=False, purpose="voltage_regulation",
                description="MPU6050 breakout board with onboard 3.3V regulator",
                reason="Raw MPU6050 chip is difficult to solder and needs external components",
            ),
            DependencyRule(
                type="resistor", value="4.7kΩ", purpose="i2c_pullup", quantity=2,
                description="Pull-up resistors for I2C SDA and SCL lines",
                connection="sda_scl_to_power",
                alternative="Many breakout boards include these resistors",
            ),
        ],
    ))
    _reg(ComponentDefinition(
        id="mpu9250", name="MPU9250 9-Axis IMU", data=I2C_OR_SPI, power=1, ground=1,
        category="Sensors", voltage="3.3V", complexity="complex",
        tip="9-axis inertial measurement unit with gyroscope, accelerometer, and magnetometer.",
        notes="More advanced than MPU6050. Includes magnetometer for compass heading.",
        i2c_address="0x68 or 0x69",
        dependencies=[DependencyRule(
            type="resistor", value="4.7kΩ", purpose="i2c_pullup", quantity=2,
            description="Pull-up resistors for I2C lines",
            alternative="Many breakout boards include these resistors",
        )],
    ))
    _reg(ComponentDefinition(
        id="photoresistor", name="Photoresistor (LDR)", data=GPIO, power=1, ground=1,
        category="Sensors", voltage="3.3V-5V", complexity="simple",
        tip="Light-Dependent Resistor for detecting ambient light levels.",
        notes="Requires an Analog (ADC) pin to read values.",
        dependencies=[DependencyRule(
            type="resistor", value="10kΩ", purpose="voltage_divider",
            description="Pull-down resistor for voltage divider",
            reason="An LDR needs to be in a voltage divider to produce a variable voltage.",
        )],
    ))
    _reg(ComponentDefinition(
        id="soil_moisture", name="Soil Moisture Sensor", data=GPIO, power=1, ground=1,
        category="Sensors", voltage="3.3V-5V", complexity="simple",
        tip="Detects moisture level in soil. Has both analog and digital outputs.",
        notes="Use the Analog Output (AO) pin for variable moisture levels.",
    ))
    _reg(ComponentDefinition(
        id="mq2_gas_sensor", name="MQ-2 Gas Sensor", data=GPIO, power=1, ground=1,
        category="Sensors", voltage="5V", complexity="moderate",
        tip="Detects smoke, LPG, and other combustible gases.",
        notes="Provides both analog and digital outputs.",
        warnings=["Sensor can get hot during operation.", "Requires a warm-up period for accurate readings."],
    ))
    _reg(ComponentDefinition(
        id="fsr", name="Force Sensitive Resistor (FSR)", data=GPIO, power=1, ground=1,
        category="Sensors", voltage="3.3V-5V", complexity="moderate",
        tip="Detects physical pressure, squeeze, and weight.",
        notes="Requires an Analog (ADC) pin. Resistance decreases as pressure increases.",
        dependencies=[DependencyRule(
            type="resistor", value="10kΩ", purpose="voltage_divider",
            description="Pull-down resistor for voltage divider",
            reason="FSRs are variable resistors and need a voltage divider circuit.",
        )],
    ))

    # --- Displays ---

    _reg(ComponentDefinition(
        id="oled_128x64", name="OLED Display (128x64)", data=I2C, power=1, ground=1,
        category="Displays", voltage="3.3V", complexity="simple",
        tip="Small OLED display with excellent contrast and I2C interface.",
        notes="No backlight needed. Great for battery-powered projects.",
        i2c_address="0x3C or 0x3D",
    ))
    _reg(ComponentDefinition(
        id="lcd", name="LCD Display (16x2)", data=GPIO, power=1, ground=1,
        category="Displays", voltage="5V", complexity="moderate",
        tip="Character LCD display. I2C backpack highly recommended.",
    ))
    _reg(ComponentDefinition(
        id="tm1637", name="7-Segment Display (TM1637)", data=GPIO, power=1, ground=1,
        category="Displays", voltage="3.3V-5V", complexity="simple",
        tip="4-digit 7-segment LED display with simple 2-wire interface.",
        notes="Uses custom 2-wire protocol (CLK and DIO). Library available.",
    ))
    _reg(ComponentDefinition(
        id="e_ink_display", name="E-Ink/E-Paper Display", data=SPI, power=1, ground=1,
        category="Displays", voltage="3.3V", complexity="complex",
        tip="Low-power, high-contrast display that holds an image without power.",
        warnings=["E-Ink displays have slow refresh rates and are not suitable for animation."],
    ))
    _reg(ComponentDefinition(
        id="max7219_matrix", name="8x8 LED Matrix (MAX7219)", data=SPI, power=1, ground=1,
        category="Displays", voltage="5V", complexity="moderate",
        tip="8x8 LED matrix display driven by a MAX7219 chip.",
        notes="Requires 3 GPIO pins for SPI (Data, Clock, CS). Can be daisy-chained.",
    ))

    # --- Input ---

    _reg(ComponentDefinition(
        id="push_button", name="Push Button", data=GPIO, power=1, ground=1,
        category="Input", voltage="3.3V", complexity="moderate",
        tip="Momentary contact switch for user input.",
        notes="Connect button between GPIO and GND, with pull-up resistor from GPIO to 3.3V.",
        code_hints={
            "rpi4": "GPIO.setup(pin, GPIO.IN, pull_up_down=GPIO.PUD_UP)",
            "uno": "pinMode(pin, INPUT_PULLUP)",
            "esp32": "pinMode(pin, INPUT_PULLUP)",
        },
        dependencies=[DependencyRule(
            type="resistor", value="10kΩ", purpose="pull_up",
            description="Pull-up resistor",
            reason="Prevents floating input state when button is not pressed",
            connection="gpio_to_power",
            alternative="Many boards have internal pull-up resistors that can be enabled in software",
        )],
    ))
    _reg(ComponentDefinition(
        id="rotary_encoder", name="Rotary Encoder", data=GPIO, power=1, ground=1,
        category="Input", voltage="3.3V-5V", complexity="moderate",
        tip="Rotary encoder for precise directional input with optional push button.",
        notes="Requires 2-3 GPIO pins (A, B, and optional SW). Use interrupts for best performance.",
        dependencies=[DependencyRule(
            type="resistor", value="10kΩ", purpose="pull_up", quantity=2,
            description="Pull-up resistors for encoder pins",
            reason="Prevents floating inputs and improves signal reliability",
            connection="gpio_to_power",
            alternative="Many boards support internal pull-ups",
        )],
    ))
    _reg(ComponentDefinition(
        id="potentiometer", name="Potentiometer", data=GPIO, power=1, ground=1,
        category="Input", voltage="3.3V-5V", complexity="simple",
        tip="A variable resistor used as an analog input knob.",
        notes="Connect the middle pin to an Analog (ADC) pin.",
    ))
    _reg(ComponentDefinition(
        id="matrix_keypad_4x4", name="Matrix Keypad (4x4)", data=GPIO, power=0, ground=0,
        category="Input", voltage="3.3V-5V", complexity="moderate",
        tip="16-button keypad arranged in a 4x4 grid.",
        notes="Requires 8 GPIO pins (4 for rows, 4 for columns). No external power needed.",
    ))
    _reg(ComponentDefinition(
        id="dip_switch", name="DIP Switch", data=GPIO, power=0, ground=1,
        category="Input", voltage="3.3V-5V", complexity="simple",
        tip="A set of manual electric switches in a small package.",
        notes="Each switch requires one GPIO pin. Useful for setting configuration modes.",
        dependencies=[DependencyRule(
            type="resistor", value="10kΩ", purpose="pull_up_down", quantity="per_switch",
            description="Pull-up or pull-down resistors for each switch",
            reason="Prevents floating inputs for each switch pin.",
            alternative="Use internal pull-ups on the microcontroller.",
        )],
    ))

    # --- Output ---

    _reg(ComponentDefinition(
        id="led", name="LED", data=GPIO, power=0, ground=1,
        category="Output", voltage="2.0V-3.3V", complexity="moderate",
        tip="Light emitting diode for visual indication.",
        notes="ALWAYS use a current-limiting resistor!",
        warnings=["Never connect LED directly to GPIO - will damage both LED and board"],
        dependencies=[DependencyRule(
            type="resistor", value="220Ω-330Ω", purpose="current_limiting",
            description="Current limiting resistor",
            reason="Prevents LED burnout by limiting current flow",
            connection="series_with_data",
        )],
    ))
    _reg(ComponentDefinition(
        id="servo", name="Servo Motor", data=GPIO, power=0, ground=1,
        category="Output", voltage="4.8V-6V", complexity="moderate",
        tip="Precision motor with position control. Power requirements vary by size.",
        notes="Small servos (SG90) can be powered from board. Larger servos need external power.",
        warnings=["Connect servo ground to board ground even with external power"],
        dependencies=[DependencyRule(
            type="power_supply", default_required=OPTIONAL, value="5V 1A+",
            purpose="servo_power", description="External 5V power supply",
            reason="Servos can draw high current, especially under load",
            condition="For servos drawing >500mA or multiple servos",
        )],
    ))
    _reg(ComponentDefinition(
        id="buzzer", name="Passive Buzzer", data=GPIO, power=1, ground=1,
        category="Output", voltage="3.3V-5V", complexity="simple",
        tip="Passive buzzer for generating tones and simple melodies.",
        notes="Requires PWM signal to generate tones. Use tone() function on Arduino.",
    ))
    _reg(ComponentDefinition(
        id="relay", name="Relay Module", data=GPIO, power=1, ground=1,
        category="Output", voltage="3.3V-5V", complexity="moderate",
        tip="Electromagnetic relay for controlling high-power devices.",
        notes="Most modules include optocoupler isolation and flyback diode.",
        warnings=["Never control mains voltage without proper safety measures"],
        dependencies=[DependencyRule(
            type="optocoupler", default_required=False, purpose="isolation",
            description="Optical isolation",
            reason="Protects microcontroller from relay coil back-EMF",
            alternative="Most relay modules include optocoupler isolation",
        )],
    ))
    _reg(ComponentDefinition(
        id="rgb_led_cc", name="RGB LED (Common Cathode)", data=GPIO, power=0, ground=1,
        category="Output", voltage="3.3V-5V", complexity="moderate",
        tip="A single LED that can produce multiple colors.",
        notes="Requires 3 GPIO pins (one for each color). The common pin connects to Ground.",
        dependencies=[DependencyRule(
            type="resistor", value="220Ω-330Ω", purpose="current_limiting", quantity=3,
            description="Current limiting resistor for each color channel (R, G, B)",
            reason="Prevents LED burnout by limiting current to each channel.",
        )],
    ))
    _reg(ComponentDefinition(
        id="vibration_motor", name="Vibration Motor", data=GPIO, power=0, ground=1,
        category="Output", voltage="3V-5V", complexity="simple",
        tip="A small motor for haptic feedback, like in a phone.",
        dependencies=[DependencyRule(
            type="transistor", purpose="motor_control",
            description="Transistor (e.g., PN2222) and Diode",
            reason="A transistor is needed to handle the motor's current, and a flyback diode protects the GPIO pin.",
        )],
    ))

    # --- Communication ---

    _reg(ComponentDefinition(
        id="esp01", name="ESP-01 WiFi Module", data=UART, power=1, ground=1,
        category="Communication", voltage="3.3V", complexity="complex",
        tip="WiFi module for adding wireless connectivity to projects.",
        notes="AT command interface. Consider ESP32 for new projects.",
        warnings=[
            "Never connect to 5V - will permanently damage module",
            "Needs stable 3.3V power supply for reliable operation",
        ],
        dependencies=[
            DependencyRule(
                type="level_shifter", purpose="voltage_compatibility",
                description="5V to 3.3V level shifter",
                reason="ESP-01 is 3.3V only and can be damaged by 5V signals",
                board_overrides={
                    "rpi4": BoardOverride(required=False, reason="Raspberry Pi GPIO is already 3.3V"),
                    "esp32": BoardOverride(required=False, reason="ESP32 is already 3.3V"),
                },
            ),
            DependencyRule(
                type="power_supply", value="3.3V 250mA+", purpose="stable_power",
                description="Stable 3.3V power supply",
                reason="ESP-01 needs stable power, especially during WiFi transmission",
            ),
        ],
    ))
    _reg(ComponentDefinition(
        id="hc05", name="HC-05 Bluetooth Module", data=UART, power=1, ground=1,
        category="Communication", voltage="3.3V-6V", complexity="moderate",
        tip="Classic Bluetooth module for wireless communication.",
        notes="AT command interface for configuration. Pairs with smartphones easily.",
        dependencies=[DependencyRule(
            type="level_shifter", default_required=OPTIONAL, purpose="voltage_compatibility",
            description="Voltage level shifter",
            reason="HC-05 logic levels may not be compatible with 3.3V boards",
            condition="Check module specifications - some have onboard regulation",
        )],
    ))
    _reg(ComponentDefinition(
        id="nrf24l01", name="NRF24L01+ RF Transceiver", data=SPI, power=1, ground=1,
        category="Communication", voltage="3.3V", complexity="complex",
        tip="2.4GHz wireless communication module.",
        notes="Requires SPI plus 2 additional GPIO pins (CE, CSN).",
        warnings=["Module is strictly 3.3V. 5V on data pins can damage it."],
    ))
    _reg(ComponentDefinition(
        id="rfid_mfrc522", name="RFID Reader (MFRC522)", data=SPI, power=1, ground=1,
        category="Communication", voltage="3.3V", complexity="complex",
        tip="Reads 13.56MHz RFID tags and cards.",
        notes="Requires SPI plus 2 additional GPIO pins (SDA/CS, RST).",
        warnings=["Module is strictly 3.3V. 5V on data pins can damage it."],
    ))
    _reg(ComponentDefinition(
        id="gps_neo6m", name="GPS Module (NEO-6M)", data=UART, power=1, ground=1,
        category="Communication", voltage="3.3V-5V", complexity="complex",
        tip="Receives satellite signals to determine geographic location.",
        notes="Connect the module's TX pin to the microcontroller's RX pin, and vice-versa.",
    ))

    # --- Motors & Drivers ---

    _reg(ComponentDefinition(
        id="stepper_28byj", name="28BYJ-48 Stepper Motor", data=GPIO, power=1, ground=1,
        category="Motors & Drivers", voltage="5V", complexity="moderate",
        tip="Small stepper motor with ULN2003 driver board.",
        notes="Usually sold with ULN2003 driver board. Requires 4 digital pins.",
        dependencies=[DependencyRule(
            type="driver_board", purpose="motor_control",
            description="ULN2003 stepper driver",
            reason="Stepper motor requires driver to control multiple coils",
        )],
    ))
    _reg(ComponentDefinition(
        id="l298n", name="L298N Motor Driver", data=GPIO, power=0, ground=1,
        category="Motors & Drivers", voltage="5V-35V", complexity="complex",
        tip="Dual H-bridge motor driver for DC motors or single stepper motor.",
        notes="Can control 2 DC motors or 1 stepper. Always connect grounds together.",
        warnings=["Always connect board GND to driver GND"],
        dependencies=[DependencyRule(
            type="power_supply", value="7-35V 2A+", purpose="motor_power",
            description="External power supply for motors",
            reason="Motors require much more current than boards can provide",
        )],
    ))
    _reg(ComponentDefinition(
        id="a4988_driver", name="A4988 Stepper Driver", data=GPIO, power=2, ground=2,
        category="Motors & Drivers", voltage="3.3V-5V (Logic), 8V-35V (Motor)", complexity="complex",
        tip="Driver for controlling bipolar stepper motors (like NEMA 17).",
        notes="Requires 2 GPIO pins (STEP, DIR) for basic control.",
        dependencies=[DependencyRule(
            type="capacitor", value="100µF", purpose="power_smoothing",
            description="Decoupling capacitor for motor power supply",
            reason="Protects the driver from voltage spikes.",
            connection="across_motor_power",
        )],
    ))

    # --- Advanced & ICs ---

    _reg(ComponentDefinition(
        id="ws2812_strip", name="WS2812 LED Strip (NeoPixel)", data=GPIO, power=0, ground=2,
        category="Advanced & ICs", voltage="5V", complexity="complex",
        tip="Addressable RGB LED strip. Complex setup with multiple dependencies.",
        notes="Complex setup requiring external power, level shifting, and proper grounding.",
        warnings=[
            "Never power LED strip directly from board - will damage board",
            "Always connect grounds between board, level shifter, and power supply",
            "Consider adding 330Ω resistor in series with data line for protection",
        ],
        dependencies=[
            DependencyRule(
                type="level_shifter", purpose="logic_level",
                description="3.3V to 5V logic level converter",
                reason="WS2812 needs 5V logic levels, but Pi/ESP32 output 3.3V",
                board_overrides={"uno": _UNO_5V},
            ),
            DependencyRule(
                type="power_supply", value="5V 2A+", purpose="external_power",
                description="External 5V power supply",
                reason="LED strips can draw several amps - far more than board can supply",
            ),
            DependencyRule(
                type="capacitor", value="1000µF", purpose="power_smoothing",
                description="Large electrolytic capacitor",
                reason="Smooths power supply current spikes from LEDs",
                connection="across_power_supply",
            ),
        ],
    ))
    _reg(ComponentDefinition(
        id="sd_card", name="SD Card Module", data=SPI, power=1, ground=1,
        category="Advanced & ICs", voltage="3.3V-5V", complexity="moderate",
        tip="SD card reader for data logging and storage.",
        notes="Most modules handle voltage conversion automatically.",
        dependencies=[DependencyRule(
            type="level_shifter", default_required=False, purpose="voltage_compatibility",
            description="5V to 3.3V level shifter",
            reason="SD cards operate at 3.3V logic levels",
            alternative="Most modules include onboard voltage regulation",
        )],
    ))
    _reg(ComponentDefinition(
        id="rtc_ds3231", name="DS3231 RTC Module", data=I2C, power=1, ground=1,
        category="Advanced & ICs", voltage="3.3V-5V", complexity="simple",
        tip="Precision real-time clock module with temperature compensation.",
        notes="Battery backup maintains time when power is off. Very accurate.",
        i2c_address="0x68",
    ))
    _reg(ComponentDefinition(
        id="camera_ov2640", name="OV2640 Camera Module", data=GPIO, power=1, ground=1,
        category="Advanced & ICs", voltage="3.3V", complexity="complex",
        tip="Camera module for ESP32-CAM projects.",
        notes="Requires ESP32-CAM board or compatible. Uses dedicated camera interface.",
        boards=["esp32"],
        dependencies=[DependencyRule(
            type="power_supply", value="3.3V 500mA+", purpose="camera_power",
            description="Stable 3.3V power supply",
            reason="Camera module draws significant current during operation",
        )],
    ))
    _reg(ComponentDefinition(
        id="shift_register_74hc595", name="74HC595 Shift Register", data=GPIO, power=1, ground=1,
        category="Advanced & ICs", voltage="2V-6V", complexity="moderate",
        tip="Serial-in, parallel-out shift register for expanding GPIO outputs.",
        notes="Control 8 outputs with just 3 GPIO pins (Data, Clock, Latch). Can be daisy-chained.",
    ))
    _reg(ComponentDefinition(
        id="pcf8574_expander", name="I2C GPIO Expander (PCF8574)", data=I2C, power=1, ground=1,
        category="Advanced & ICs", voltage="2.5V-6V", complexity="moderate",
        tip="Adds 8 extra GPIO pins using the I2C bus.",
        i2c_address="0x20-0x27",
    ))

    # --- Power Management ---

    _reg(ComponentDefinition(
        id="ina219_current_sensor", name="INA219 Current Sensor", data=I2C, power=1, ground=1,
        category="Power Management", voltage="3.3V-5V", complexity="moderate",
        tip="High-side DC current and power sensor with I2C interface.",
        notes="Measures voltage and current on a separate power rail up to 26V.",
        i2c_address="0x40-0x4F",
    ))

    return components


COMPONENTS: dict[str, ComponentDefinition] = _build_components()
