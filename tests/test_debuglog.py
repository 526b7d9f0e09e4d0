import re

from voicepitch.debuglog import AudioLog


def _files(tmp_path, stem):
    return sorted(tmp_path.glob(f"{stem}*"))


def test_file_name_with_name(tmp_path):
    prefix = str(tmp_path / "audio")
    log = AudioLog("rec", prefix)
    log.log(b"rec-data")
    log.flush()
    path = log.path
    assert re.fullmatch(re.escape(prefix) + r"_rec_\d+", path)
    with open(path, "rb") as fh:
        assert fh.read() == b"rec-data"


def test_file_name_without_name(tmp_path):
    prefix = str(tmp_path / "audio")
    log = AudioLog(None, prefix)
    log.log(b"plain")
    log.flush()
    path = log.path
    assert re.fullmatch(re.escape(prefix) + r"_\d+", path)
    with open(path, "rb") as fh:
        assert fh.read() == b"plain"


def test_binary_and_text_logging(tmp_path):
    log = AudioLog("play", str(tmp_path / "audio"))
    log.log(b"\x00\x01\x02")
    log.log("hello\n")
    log.log(b"")
    log.log("")
    log.flush()
    with open(log.path, "rb") as fh:
        assert fh.read() == b"\x00\x01\x02hello\n"


def test_context_manager_flushes(tmp_path):
    with AudioLog("ctx", str(tmp_path / "audio")) as log:
        log.log(b"abc")
    with open(log.path, "rb") as fh:
        assert fh.read() == b"abc"


def test_log_after_flush_opens_new_numbered_file(tmp_path):
    log = AudioLog("seq", str(tmp_path / "audio"))
    log.log(b"first")
    log.flush()
    first = log.path
    log.log(b"second")
    log.flush()
    second = log.path
    assert first != second
    n1 = int(first.rsplit("_", 1)[1])
    n2 = int(second.rsplit("_", 1)[1])
    assert n2 > n1
    with open(first, "rb") as fh:
        assert fh.read() == b"first"
    with open(second, "rb") as fh:
        assert fh.read() == b"second"


def test_log_time_lines(tmp_path):
    log = AudioLog("time", str(tmp_path / "audio"))
    for _ in range(3):
        log.log_time()
    log.flush()
    with open(log.path, "r", encoding="utf-8") as fh:
        lines = fh.read().splitlines()
    assert len(lines) == 2
    parsed = []
    for line in lines:
        match = re.fullmatch(r"(\d+)    (\d+)", line)
        assert match is not None
        parsed.append((int(match.group(1)), int(match.group(2))))
    assert parsed[1][0] - parsed[0][0] == parsed[1][1]
    assert parsed[1][0] >= parsed[0][0]


def test_first_log_time_writes_nothing(tmp_path):
    log = AudioLog("once", str(tmp_path / "audio"))
    log.log_time()
    log.flush()
    with open(log.path, "rb") as fh:
        assert fh.read() == b""


def test_unopenable_file_drops_data(tmp_path):
    prefix = str(tmp_path / "missing_dir" / "audio")
    log = AudioLog("x", prefix)
    log.log(b"data")
    log.flush()
    assert log.path is None
    assert not (tmp_path / "missing_dir").exists()


def test_distinct_logs_get_distinct_files(tmp_path):
    prefix = str(tmp_path / "audio")
    a = AudioLog("same", prefix)
    b = AudioLog("same", prefix)
    a.flush()
    b.flush()
    assert a.path != b.path
    assert len(_files(tmp_path, "audio_same")) == 2