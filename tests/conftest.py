import pytest


@pytest.fixture
def replay():
    """Apply accesses one by one, checking the cache invariants after each.

    Returns the list of hit flags.
    """
    def replay(cache, accesses, check=True):
        results = []
        for access in accesses:
            results.append(cache.access(access))
            if check:
                cache.check()
        return results
    return replay
