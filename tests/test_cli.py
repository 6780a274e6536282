import io

import pytest

from gpstrack.cli import BANNER, main, process_sentence, read_sentences
from gpstrack.landmarks import FACULTY_LANDMARKS, Landmark, str_to_float
from gpstrack.nmea import get_latitude, get_longitude, get_speed

SAMPLE = "$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A"


def test_read_sentences_splits_lines():
    assert list(read_sentences(io.StringIO("a\nb\n"))) == ["a\n", "b\n"]


def test_read_sentences_respects_max_len():
    assert list(read_sentences(io.StringIO("abcdef"), max_len=4)) == ["abc", "def"]


def test_read_sentences_bad_max_len():
    with pytest.raises(ValueError):
        list(read_sentences(io.StringIO("x"), max_len=1))


@pytest.mark.parametrize("text", ["$GPGGA,1*00", SAMPLE.replace("022.4", "023.4"), ""])
def test_process_rejects_invalid(text):
    assert process_sentence(text) is None


def test_process_valid_sentence():
    report = process_sentence(SAMPLE + "\r\n")
    assert report is not None
    assert report.speed == get_speed(SAMPLE)
    assert report.latitude == str_to_float(get_latitude(SAMPLE))
    assert report.longitude == -str_to_float(get_longitude(SAMPLE))
    assert report.landmark == FACULTY_LANDMARKS[report.index]
    assert report.lines == ("Speed: " + report.speed, report.landmark.name)


def test_process_alert_when_library_nearest():
    marks = [Landmark("Hall A", 0.0, 0.0), Landmark("Library", 48.1, -11.5)]
    report = process_sentence(SAMPLE, marks)
    assert report.landmark.name == "Library"
    assert report.alert is True


def test_process_no_alert_elsewhere():
    marks = [Landmark("Library", 0.0, 0.0), Landmark("Hall A", 48.1, -11.5)]
    report = process_sentence(SAMPLE, marks)
    assert report.index == 1
    assert report.alert is False


def test_main_reads_file(tmp_path, capsys):
    path = tmp_path / "fixes.nmea"
    path.write_text("garbage line\n" + SAMPLE + "\r\n", encoding="latin-1")
    assert main([str(path), "--echo"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == BANNER
    assert out[1] == SAMPLE
    assert out[2].startswith("Speed: " + get_speed(SAMPLE) + " | ")
    assert len(out) == 3