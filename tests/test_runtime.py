import datetime
import os
import re
import threading

from kestrelchess.runtime import ENGINE_NAME, CommandLine, DebugStats, engine_info


def test_engine_info_plain_contains_date_and_by():
    info = engine_info()
    today = datetime.date.today()
    stamp = f"{today.day:02d}{today.month:02d}{today.year % 100:02d}"
    assert info.startswith(f"{ENGINE_NAME} {stamp}")
    assert " by " in info
    assert "\n" not in info


def test_engine_info_uci_has_author_line():
    info = engine_info(True)
    lines = info.split("\n")
    assert len(lines) == 2
    assert re.fullmatch(rf"{ENGINE_NAME} \d{{6}}", lines[0])
    assert lines[1].startswith("id author ")


def test_debug_stats_empty_report():
    assert DebugStats().report() == ""


def test_debug_stats_hit_rate():
    stats = DebugStats()
    stats.hit_on(True)
    stats.hit_on(False)
    stats.hit_on(True)
    assert stats.hits_total == 3
    assert stats.hits == 2
    assert stats.report() == "Total 3 Hits 2 hit rate (%) 66"


def test_debug_stats_condition_false_is_ignored():
    stats = DebugStats()
    stats.hit_on(True, False)
    stats.hit_on(False, True)
    assert stats.hits_total == 1
    assert stats.hits == 0


def test_debug_stats_mean():
    stats = DebugStats()
    stats.mean_of(2)
    stats.mean_of(4)
    assert stats.report() == "Total 2 Mean 3"


def test_debug_stats_both_lines():
    stats = DebugStats()
    stats.hit_on(True)
    stats.mean_of(5)
    lines = stats.report().split("\n")
    assert len(lines) == 2
    assert lines[0].startswith("Total 1 Hits 1")
    assert lines[1] == "Total 1 Mean 5"


def test_debug_stats_threaded_counts():
    stats = DebugStats()

    def work():
        for _ in range(1000):
            stats.hit_on(True)
            stats.mean_of(1)

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert stats.hits_total == 4000
    assert stats.means_count == 4000
    assert stats.means_sum == 4000


def test_command_line_absolute_path():
    cl = CommandLine.from_argv0("/opt/engines/kestrel", "/work")
    assert cl.binary_directory == "/opt/engines/"
    assert cl.argv0 == "/opt/engines/kestrel"
    assert cl.working_directory == "/work"


def test_command_line_backslash_path():
    cl = CommandLine.from_argv0("C:\\engines\\kestrel.exe", "C:\\work")
    assert cl.binary_directory == "C:\\engines\\"


def test_command_line_bare_name_uses_working_directory():
    cl = CommandLine.from_argv0("kestrel", "/work")
    assert cl.binary_directory == "/work" + os.sep


def test_command_line_dot_relative_path():
    argv0 = "." + os.sep + "kestrel"
    cl = CommandLine.from_argv0(argv0, "/work")
    assert cl.binary_directory == "/work" + os.sep


def test_command_line_default_working_directory():
    cl = CommandLine.from_argv0("kestrel")
    assert cl.working_directory == os.getcwd()
    assert cl.binary_directory == os.getcwd() + os.sep