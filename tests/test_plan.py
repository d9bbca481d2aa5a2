import pytest

from knockr import plan
from knockr.knockutil import ConfigError


def test_make_plan_defaults():
    p = plan.make_plan("example.com", [1234, 8923, 1233])
    assert p.target == "example.com"
    assert p.ports == (1234, 8923, 1233)
    assert p.transport == "tcp"
    assert p.delay == pytest.approx(0.1)
    assert p.timeout == pytest.approx(1.0)
    assert p.report is True


def test_make_plan_is_immutable():
    p = plan.make_plan("127.0.0.1", [1])
    with pytest.raises(AttributeError):
        p.ports = (2,)


def test_make_plan_normalises_transport():
    assert plan.make_plan("h", [1], transport="UDP").transport == "udp"


@pytest.mark.parametrize("kwargs", [
    dict(target="h", ports=[]),
    dict(target="", ports=[1]),
    dict(target="  ", ports=[1]),
    dict(target="h", ports=[0]),
    dict(target="h", ports=[1, 65536]),
    dict(target="h", ports=[1], transport="sctp"),
    dict(target="h", ports=[1], delay=-0.1),
    dict(target="h", ports=[1], timeout=0),
])
def test_make_plan_rejects_bad_input(kwargs):
    with pytest.raises(ConfigError):
        plan.make_plan(**kwargs)


def test_outcome_detail_is_optional():
    o = plan.KnockOutcome(22, "127.0.0.1:22", plan.OPEN)
    assert o.detail is None


@pytest.mark.parametrize("kwargs", [
    dict(delay=1e10),
    dict(timeout=1e10),
    dict(timeout=float("nan")),
    dict(delay=float("inf")),
])
def test_make_plan_rejects_overlong_durations(kwargs):
    with pytest.raises(ConfigError):
        plan.make_plan("h", [1], **kwargs)
