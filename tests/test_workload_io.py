from pathlib import Path

import pytest

from schedsim.errors import WorkloadFormatError
from schedsim.models import Process
from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].priority == 0


def test_bad_entry(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":"soon","burst_time":3}]')
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_json_must_be_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid":"A"}')
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("A 0 3")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


@pytest.mark.parametrize("suffix", [".csv", ".json"])
def test_non_utf8_file(tmp_path: Path, suffix):
    p = tmp_path / f"w{suffix}"
    p.write_bytes(b"pid,arrival_time,burst_time\n\xff\xfe,0,3\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


@pytest.mark.parametrize("burst", ["2.7", "true", '"3.5"'])
def test_non_integral_numbers_rejected(tmp_path: Path, burst):
    p = tmp_path / "w.json"
    p.write_text(f'[{{"pid":"A","arrival_time":0,"burst_time":{burst}}}]')
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_integral_float_accepted(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":1.0,"burst_time":3}]')
    assert load_workload(p)[0].arrival_time == 1
