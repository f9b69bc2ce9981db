import pytest

from pipestreams.zero import b2s, s2b


@pytest.mark.parametrize(
    "text,expected",
    [
        ("hello", bytes([ord("h"), ord("e"), ord("l"), ord("l"), ord("o")])),
        ("", b""),
        ("¡Hola!", bytes([0xC2, 0xA1]) + b"Hola!"),
    ],
)
def test_s2b(text, expected):
    assert s2b(text) == expected


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"hello", "hello"),
        (b"", ""),
        (bytes([0xC2, 0xA1]) + b"Hola!", "¡Hola!"),
    ],
)
def test_b2s(data, expected):
    assert b2s(data) == expected


def test_s2b_example():
    data = s2b("Hello, World!")
    assert list(data) == [72, 101, 108, 108, 111, 44, 32, 87, 111, 114, 108, 100, 33]
    assert b2s(data) == "Hello, World!"


def test_b2s_example():
    data = bytearray("Hello, Gophers!", "utf-8")
    assert list(data) == [72, 101, 108, 108, 111, 44, 32, 71, 111, 112, 104, 101, 114, 115, 33]
    text = b2s(data)
    assert text == "Hello, Gophers!"
    assert len(text) == 15


def test_b2s_accepts_memoryview():
    assert b2s(memoryview(b"abc")) == "abc"


def test_invalid_utf8_raises():
    with pytest.raises(UnicodeDecodeError):
        b2s(bytes([0xFF]))