"""Tests for starter code rendering."""

import pytest

from pinpoint_planner.catalog import default_catalog
from pinpoint_planner.codegen import EMPTY_MESSAGE, pin_constant, render_code
from pinpoint_planner.project import PlannerSession


def _session(board_id):
    return PlannerSession(default_catalog(), board_id)


class TestPinConstant:
    @pytest.mark.parametrize("name,expected", [
        ("LED", "LED_PIN"),
        ("DHT22 Sensor", "DHT22_SENSOR_PIN"),
        ("HC-SR04 Ultrasonic Sensor", "HC_SR04_ULTRASONIC_SENSOR_PIN"),
        ("MPU6050 Gyro/Accel", "MPU6050_GYRO_ACCEL_PIN"),
    ])
    def test_names(self, name, expected):
        assert pin_constant(name) == expected


class TestRenderCode:
    def test_empty_board(self):
        assert render_code(default_catalog(), _session("rpi4").state) == ("text", EMPTY_MESSAGE)

    def test_python_for_raspberry_pi(self):
        session = _session("rpi4")
        session.assign("dht22", 6)
        language, code = render_code(session.catalog, session.state)
        assert language == "python"
        assert code.startswith("# PinPoint Planner: Python starter code for Raspberry Pi 4 Model B")
        assert "# Pin for DHT22 Sensor\nDHT22_SENSOR_PIN = 4" in code
        assert "GPIO.setup(DHT22_SENSOR_PIN, GPIO.OUT)" in code
        assert "except KeyboardInterrupt:" in code

    def test_named_pin_quoted_in_python(self):
        session = _session("rpi4")
        session.assign_label("bmp280", "ID_SD")
        _, code = render_code(session.catalog, session.state)
        assert 'BMP280_PRESSURE_SENSOR_PIN = "ID_SD"' in code
        compile(code, "starter.py", "exec")

    def test_arduino_for_uno(self):
        session = _session("uno")
        session.assign_label("led", "9")
        language, code = render_code(session.catalog, session.state)
        assert language == "cpp"
        assert "#define LED_PIN 9" in code
        assert "pinMode(LED_PIN, OUTPUT);" in code
        assert "void loop() {" in code

    def test_arduino_for_esp32(self):
        session = _session("esp32")
        session.assign_label("dht22", "4")
        assert render_code(session.catalog, session.state)[0] == "cpp"

    def test_pins_in_header_order(self):
        session = _session("rpi4")
        session.assign("pir", 10)
        session.assign("dht22", 6)
        _, code = render_code(session.catalog, session.state)
        assert code.index("DHT22_SENSOR_PIN") < code.index("PIR_MOTION_SENSOR_PIN")

    def test_code_hints_for_board(self):
        session = _session("rpi4")
        session.assign("mpu6050", 2)
        _, code = render_code(session.catalog, session.state)
        assert "# MPU6050 Gyro/Accel: Enable I2C: sudo raspi-config" in code

        uno = _session("uno")
        uno.assign_label("mpu6050", "SDA")
        _, code = render_code(uno.catalog, uno.state)
        assert "// MPU6050 Gyro/Accel: Use Wire.h library" in code
