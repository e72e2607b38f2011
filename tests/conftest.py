import matplotlib

matplotlib.use("Agg")

import pytest

from core.mlfq import MLFQ


@pytest.fixture
def engine():
    """3단계, 퀀텀 [2, 4, 8] 엔진"""
    return MLFQ(3, [2, 4, 8])
