import argparse
import json
import math
import random

import pytest
from sympy import isprime

import bench_suite
from bench_suite import (
    Instance, RemoteRunner, evaluate, make_instance, run_local, run_suite, summarize, write_csv,
)
from rsattack.modmath import mod_exp


def test_make_instance_is_consistent():
    random.seed(5)
    rng = random.Random(5)
    for bits in (8, 12, 17):
        inst = make_instance(bits, rng)
        assert inst.p < inst.q and inst.p * inst.q == inst.n
        assert isprime(inst.p) and isprime(inst.q)
        assert math.gcd(inst.e, (inst.p - 1) * (inst.q - 1)) == 1
        assert 2 <= inst.m < inst.n
        assert mod_exp(inst.m, inst.e, inst.n) == inst.c


def test_make_instance_rejects_tiny_levels():
    with pytest.raises(ValueError):
        make_instance(4, random.Random(0))


def test_evaluate_flags_wrong_plaintext():
    inst = Instance(bits=12, p=53, q=61, e=17, n=3233, m=65, c=2790)
    good = run_local(inst)
    assert evaluate(inst, 12, 1, good).ok

    bad = json.loads(json.dumps(good))
    bad["brute_force"]["m"] = "66"
    row = evaluate(inst, 12, 1, bad)
    assert not row.ok
    assert "brute_force returned 66" in row.reason
    assert row.ordering_ok is None  # n below the ordering threshold


def test_evaluate_checks_ordering_on_large_moduli():
    inst = Instance(bits=20, p=1009, q=1013, e=17, n=1009 * 1013, m=7, c=pow(7, 17, 1009 * 1013))
    res = {
        "brute_force": {"ok": True, "m": "7", "elapsed_ms": 0.01},
        "factoring": {"ok": True, "m": "7", "p": "1009", "q": "1013", "elapsed_ms": 0.5},
    }
    row = evaluate(inst, 20, 1, res)
    assert row.ordering_ok is False
    assert "not faster" in row.reason


def test_run_suite_writes_log(tmp_path):
    random.seed(11)
    log = tmp_path / "bench.log"
    rows = run_suite([10, 12], 2, run_local, random.Random(11), log_path=str(log))
    assert len(rows) == 4
    assert all(r.ok for r in rows), [r.reason for r in rows if not r.ok]
    lines = log.read_text().splitlines()
    assert len(lines) == 4
    assert json.loads(lines[0])["event"] == "trial"

    summary = summarize(rows)
    assert sorted(summary) == [10, 12]
    assert summary[10]["passed"] == 2
    assert summary[12]["brute_median_ms"] >= 0

    out = tmp_path / "rows.csv"
    write_csv(rows, str(out))
    header = out.read_text().splitlines()[0]
    assert header.startswith("level_bits,trial,n,e,m")


def test_main_end_to_end(tmp_path):
    rc = bench_suite.main([
        "--levels", "10,11", "--trials", "1", "--seed", "7",
        "--log", str(tmp_path / "b.log"), "--out", str(tmp_path / "b.csv"),
        "--plot", str(tmp_path / "b.png"),
    ])
    assert rc == 0
    assert (tmp_path / "b.csv").exists()
    assert (tmp_path / "b.png").stat().st_size > 0


def test_levels_argument():
    assert bench_suite._levels("8, 12,16") == [8, 12, 16]
    with pytest.raises(argparse.ArgumentTypeError):
        bench_suite._levels("4")
    with pytest.raises(argparse.ArgumentTypeError):
        bench_suite._levels("a,b")


class FakeResponse:
    def __init__(self, payload):
        self.payload = payload

    def raise_for_status(self):
        pass

    def json(self):
        return self.payload


def test_remote_runner_posts_compare(monkeypatch):
    inst = Instance(bits=12, p=53, q=61, e=17, n=3233, m=65, c=2790)
    seen = {}

    def fake_post(url, json=None, timeout=None):
        seen.update(url=url, json=json, timeout=timeout)
        return FakeResponse({"ok": True})

    runner = RemoteRunner("http://bench.local:8082/", timeout_s=9)
    monkeypatch.setattr(runner.session, "post", fake_post)
    assert runner(inst) == {"ok": True}
    assert seen == {"url": "http://bench.local:8082/api/compare",
                    "json": {"e": "17", "n": "3233", "c": "2790"}, "timeout": 9}
