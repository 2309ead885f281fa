import pytest

from attack_worker import JOB_KINDS, attack_job


def test_job_kinds():
    assert set(JOB_KINDS) == {"brute_force", "factoring", "compare"}


def test_brute_force_job():
    out = attack_job("brute_force", "17", "3233", "2790")
    assert out["ok"] and out["m"] == "65"


def test_compare_job():
    out = attack_job("compare", 17, 3233, 2790)
    assert out["agree"] is True
    assert out["factoring"]["p"] == "53"


def test_attack_error_is_a_result_not_a_failure():
    out = attack_job("factoring", 17, 97, 5)
    assert out["ok"] is False
    assert out["error"] == "malformed_modulus"


def test_unknown_job_kind():
    with pytest.raises(ValueError):
        attack_job("rho", 17, 3233, 2790)
