import pytest

from identitystore import MemoryCookieJar, MemoryStore, User


class FakeClock:
    """Manually advanced clock for cookie expiry tests."""

    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cookie(clock):
    return MemoryCookieJar(clock=clock)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def user(cookie, store):
    return User(cookie=cookie, local=store)


@pytest.fixture
def cookie_key(user):
    return user.options().cookie.key


@pytest.fixture
def local_key(user):
    return user.options().local_storage.key
