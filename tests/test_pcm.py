import struct
import wave

from imatools.common.pcm import dump_payload, samples_to_bytes, write_pcm, write_wav


def test_samples_to_bytes_little_endian():
    assert samples_to_bytes([11, -1, 32767, -32768]) == struct.pack('<4h', 11, -1, 32767, -32768)


def test_samples_to_bytes_big_endian():
    assert samples_to_bytes([11, -2], big_endian=True) == struct.pack('>2h', 11, -2)


def test_samples_to_bytes_empty():
    assert samples_to_bytes([]) == b''


def test_write_pcm(tmp_path):
    path = tmp_path / "nested" / "out.pcm"
    write_pcm([1, 2, 3], str(path))
    assert path.read_bytes() == struct.pack('<3h', 1, 2, 3)


def test_write_wav(tmp_path):
    path = tmp_path / "out.wav"
    write_wav([0, 100, -100], str(path), 8000)
    with wave.open(str(path), 'rb') as w:
        assert w.getnchannels() == 1
        assert w.getsampwidth() == 2
        assert w.getframerate() == 8000
        assert w.readframes(3) == struct.pack('<3h', 0, 100, -100)


def test_dump_payload(tmp_path):
    path = tmp_path / "dumped.adpcm"
    dump_payload(b'\x70\x00', str(path))
    assert path.read_bytes() == b'\x70\x00'


def test_samples_to_bytes_saturates():
    assert samples_to_bytes([40000, -40000]) == struct.pack('<2h', 32767, -32768)
