from contextlib import contextmanager
from unittest import mock


@contextmanager
def frozen_cache_time(start=1_700_000_000.0):
    """
    固定 Django 快取看到的時間

    Yields:
        單一元素的 list，修改 now[0] 即可推進時間
    """
    now = [start]
    fake_time = mock.Mock(time=lambda: now[0])
    with mock.patch('django.core.cache.backends.base.time', fake_time), \
            mock.patch('django.core.cache.backends.locmem.time', fake_time):
        yield now
