import pytest

from deskwidgets import sysutils
from deskwidgets.sysutils import (
    SizeUnit,
    desktop_file_icon_name,
    desktop_file_map,
    file_exists,
    format_unit,
    normalize_proc_name,
    process_cmdline,
    process_environment_variable,
    qrc_path,
    starts_with_hanzi,
    status_bar_max_width,
)


def test_format_unit_scales_up():
    assert format_unit(5 * 1024 * 1024) == format_unit(5, SizeUnit.MB)
    assert format_unit(5, SizeUnit.MB) == "5.0 M"


def test_format_unit_exact_1024_not_scaled():
    assert format_unit(1024).endswith(" B")


def test_format_unit_precision():
    assert format_unit(1536, SizeUnit.B, 2) == format_unit(1.5, SizeUnit.KB, 2)
    assert format_unit(1536, SizeUnit.B, 2).split()[0].split(".")[1].__len__() == 2


def test_format_unit_speed():
    result = format_unit(2048, SizeUnit.KB, 1, True)
    assert result.endswith(" MB/s")


def test_format_unit_caps_at_largest_unit():
    assert format_unit(1024**9).endswith(" E")


def test_format_unit_not_a_number():
    assert format_unit("abc") == ""
    assert format_unit(None) == ""


def test_normalize_short_name_kept():
    assert normalize_proc_name("short", ["/usr/bin/shortened"]) == "short"


def test_normalize_empty_cmdline():
    name = "a-very-long-proc"
    assert normalize_proc_name(name, []) == name


def test_normalize_finds_full_name():
    name = "dde-widgets-hel"
    cmdline = [b"/usr/bin/dde-widgets-helper", b"--flag"]
    assert normalize_proc_name(name, cmdline) == "dde-widgets-helper"


def test_normalize_windows_path():
    name = "longwindowsproc"
    assert normalize_proc_name(name, ["C:/Program/app.exe"]) == "app.exe"


def test_normalize_no_match():
    name = "nothing-matches-x"
    assert normalize_proc_name(name, ["/bin/ls", "-l"]) == name


def test_starts_with_hanzi():
    assert starts_with_hanzi("中文") is True
    assert starts_with_hanzi("abc中") is False
    assert starts_with_hanzi("") is False


def test_desktop_file_map():
    mapping = desktop_file_map()
    assert mapping["/opt/kingsoft/wps-office/office6/et"] == (
        "/usr/share/applications/wps-office-et.desktop"
    )
    assert len(mapping) == 3


def test_status_bar_max_width():
    assert status_bar_max_width() == 300


def test_icon_theme_name(tmp_path):
    desktop = tmp_path / "app.desktop"
    desktop.write_text("[Desktop Entry]\nName=App\nIcon=  my-app  \nIcon=other\n")
    assert desktop_file_icon_name(desktop) == "my-app"


def test_icon_path_then_theme(tmp_path):
    desktop = tmp_path / "app.desktop"
    desktop.write_text("Icon=/usr/share/icons/app.png\n")
    assert desktop_file_icon_name(desktop) == "/usr/share/icons/app.png"


def test_icon_missing_line(tmp_path):
    desktop = tmp_path / "app.desktop"
    desktop.write_text("[Desktop Entry]\nName=App\n")
    assert desktop_file_icon_name(desktop) == "application-x-executable"


def test_icon_missing_file(tmp_path):
    assert desktop_file_icon_name(tmp_path / "none.desktop") == "application-x-executable"


@pytest.fixture
def fake_proc(tmp_path, monkeypatch):
    monkeypatch.setattr(sysutils, "_PROC_ROOT", tmp_path)
    proc = tmp_path / "42"
    proc.mkdir()
    (proc / "cmdline").write_bytes(b"/usr/bin/tool\0--opt\0value\0")
    (proc / "environ").write_bytes(b"HOME=/home/user\0LANG=C\0EMPTY=\0")
    return tmp_path


def test_process_cmdline(fake_proc):
    assert process_cmdline(42) == "/usr/bin/tool --opt value"


def test_process_cmdline_missing(fake_proc):
    assert process_cmdline(7) == ""


def test_process_environment_variable(fake_proc):
    assert process_environment_variable(42, "LANG") == "C"
    assert process_environment_variable(42, "HOME") == "/home/user"
    assert process_environment_variable(42, "EMPTY") == ""
    assert process_environment_variable(42, "HOM") == ""


def test_process_environment_missing(fake_proc):
    assert process_environment_variable(7, "HOME") == ""


def test_qrc_path():
    assert qrc_path("logo.svg") == ":/image/logo.svg"


def test_file_exists(tmp_path):
    target = tmp_path / "f.txt"
    target.write_text("x")
    assert file_exists(target) is True
    assert file_exists(tmp_path) is False
    assert file_exists(tmp_path / "missing") is False