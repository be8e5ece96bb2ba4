import numpy as np
import pytest

from datacomm import ConfigurationError, DomainError
from datacomm.bits import (
    bits_to_text,
    frame_async,
    sanitize_bits,
    text_to_ascii,
    text_to_bits,
    to_bit_array,
    to_bit_string,
    transmission_schedule,
)


def test_sanitize_bits():
    assert sanitize_bits("1a0 1-1x") == "1011"
    assert sanitize_bits("hello") == ""


def test_to_bit_array():
    arr = to_bit_array("10 1")
    assert arr.dtype == np.int8
    assert arr.tolist() == [1, 0, 1]
    assert to_bit_array([0, 1, 1]).tolist() == [0, 1, 1]
    with pytest.raises(DomainError):
        to_bit_array([0, 2])


def test_to_bit_string():
    assert to_bit_string(np.array([1, 0, 0, 1])) == "1001"


def test_text_conversions():
    assert text_to_ascii("Hi") == [72, 105]
    assert text_to_bits("A") == "01000001"
    assert text_to_bits("A", width=7) == "1000001"
    assert bits_to_text(text_to_bits("Hello")) == "Hello"
    assert bits_to_text("0100000101") == "A"


def test_text_too_wide():
    with pytest.raises(DomainError):
        text_to_bits("é", width=7)


def test_frame_async():
    assert frame_async("1011") == "010111"


def test_serial_schedule():
    sched = transmission_schedule("1011", "serial")
    assert sched.bits == "1011"
    assert sched.departures == pytest.approx((0.0, 0.6, 1.2, 1.8))
    assert sched.duration == pytest.approx(4 * 0.5 + 2.0 + 0.5)


def test_asynchronous_schedule():
    sched = transmission_schedule("1011", "asynchronous")
    assert sched.bits == "010111"
    assert len(sched.departures) == 6
    assert sched.duration == pytest.approx(6 * 0.5 + 2.5)


def test_parallel_schedule():
    sched = transmission_schedule("1011", "parallel", travel_time=1.0)
    assert set(sched.departures) == {0.0}
    assert sched.duration == pytest.approx(1.5)


def test_schedule_errors():
    with pytest.raises(ConfigurationError):
        transmission_schedule("1", "carrier-pigeon")
    with pytest.raises(DomainError):
        transmission_schedule("1", travel_time=-1)


@pytest.mark.parametrize("bits", [[256], [256, 257], [0.6], [0.6, 1.9], [-1]])
def test_to_bit_array_rejects_values_before_casting(bits):
    with pytest.raises(DomainError):
        to_bit_array(bits)


def test_encode_line_rejects_wrapped_values():
    from datacomm import encode_line

    with pytest.raises(DomainError):
        encode_line([256, 1], "AMI")


def test_to_bit_array_accepts_float_and_bool_bits():
    assert to_bit_array([1.0, 0.0]).tolist() == [1, 0]
    assert to_bit_array(np.array([True, False])).tolist() == [1, 0]


def test_text_above_byte_range_rejected():
    with pytest.raises(DomainError, match="do not fit in 8 bits"):
        text_to_bits("Ω")
    assert text_to_bits("Ω", width=16) == format(ord("Ω"), "016b")
