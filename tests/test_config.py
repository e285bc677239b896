import pytest

from waysim.cache import Cache
from waysim.config import ConfigError, WayPrediction, WriteMissPolicy, log2, parseChoice


def test_default_geometry():
    cache = Cache(associativity=1)
    assert cache.nSets == 8192
    assert cache.offsetBits == 6
    assert cache.setBits == 13
    assert cache.tagBits == 45


def test_fully_associative():
    cache = Cache(size=1024, associativity=-1, cacheLine=64)
    assert cache.associativity == 16
    assert cache.nSets == 1
    assert cache.setBits == 0
    assert cache.tagBits == 58


def test_labels_are_accepted():
    cache = Cache(size=1024, associativity=2, wayPrediction="MultiColumn", writeMiss="nonallocate")
    assert cache.wayPrediction is WayPrediction.MULTI_COLUMN
    assert cache.writeMiss is WriteMissPolicy.WRITE_NON_ALLOCATE


@pytest.mark.parametrize("kwargs", [
    dict(cacheLine=48),
    dict(associativity=3),
    dict(size=1000),
    dict(victimSize=3),
    dict(size=1024, cacheLine=64, associativity=32),
    dict(size=32, cacheLine=64, associativity=1),
    dict(replacement="fifo"),
    dict(wayPrediction="random"),
    dict(writeHit="writearound"),
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ConfigError):
        Cache(**kwargs)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        parseChoice(WayPrediction, "psychic")


def test_log2():
    assert log2(1) == 0
    assert log2(64) == 6
    with pytest.raises(ConfigError):
        log2(0)
    with pytest.raises(ConfigError):
        log2(-4)
