import pytest
from basalt_visc.core.models import Sample
from basalt_visc.io.mock_data import mock_samples
from basalt_visc.services.grouping import composition_signature, group_samples

def _s(i, sio2=53.5, t=1450.0, **kw):
    return Sample(id=i, SiO2=sio2, temperature=t, viscosity_value=2.0, **kw)

def test_signature_format():
    s = Sample(id=1, SiO2=53.5, Al2O3=15.33, FexOy=10.6, Na2O=2.32, K2O=1.87, CaO=7.58, MgO=7.48, TiO2=0.94)
    assert composition_signature(s) == "53.50-15.33-10.60-2.32-1.87-7.58-7.48-0.94"

def test_rounding_insensitive():
    a, b = _s(1, sio2=53.500001), _s(2, sio2=53.4999994)
    assert composition_signature(a) == composition_signature(b)
    assert len(group_samples([a, b])) == 1

def test_partition_and_order():
    samples = [_s(1, sio2=50), _s(2, sio2=48), _s(3, sio2=50), _s(4, sio2=47), _s(5, sio2=48)]
    groups = group_samples(samples)
    assert [g[0].SiO2 for g in groups.values()] == [50, 48, 47]
    assert [s.id for s in groups[composition_signature(samples[0])]] == [1, 3]
    assert sum(len(g) for g in groups.values()) == len(samples)
    ids = [s.id for g in groups.values() for s in g]
    assert sorted(ids) == [1, 2, 3, 4, 5]

def test_grouping_idempotent():
    samples = mock_samples()
    first, second = group_samples(samples), group_samples(samples)
    assert first == second
    assert list(first) == list(second)
    assert len(first) == 2

def test_empty_input():
    assert group_samples([]) == {}

@pytest.mark.parametrize("tie,rounded", [(0.125, 0.13), (0.375, 0.38), (15.625, 15.63)])
def test_binary_ties_round_up(tie, rounded):
    a = Sample(id=1, SiO2=50.0, MgO=tie)
    b = Sample(id=2, SiO2=50.0, MgO=rounded)
    assert composition_signature(a) == composition_signature(b)
    assert len(group_samples([a, b])) == 1

def test_negative_zero_signature():
    assert composition_signature(Sample(id=1, CaO=-0.0)) == composition_signature(Sample(id=2))
    assert composition_signature(Sample(id=1)).split("-")[0] == "0.00"
