"""Shared test fixtures for gapchain tests."""

import random

import pytest

from gapchain.params import ClusterParams


MATCH_LIST = """\
# leading text before the first header is ignored
> query1
       0        0     10
      20       20     10
     500      520    250
> query1 Reverse
> query2
     100      200    150
     260      360    120
not a match line
"""


@pytest.fixture
def default_params():
    """Default ClusterParams instance."""
    return ClusterParams()


@pytest.fixture
def permissive_params():
    """Parameters that report every chain, whatever its score."""
    return ClusterParams(min_output_score=0)


@pytest.fixture
def collinear_anchors():
    """Two non-overlapping anchors on diagonal 0, 10 bases apart."""
    return [(0, 0, 10), (20, 20, 10)]


@pytest.fixture
def two_alignments():
    """Anchors from two unrelated alignments: diagonal 0 and diagonal 5000."""
    first = [(i * 150, i * 150, 120) for i in range(4)]
    second = [(i * 150, 5000 + i * 150, 100) for i in range(3)]
    return first + second


@pytest.fixture
def random_anchors():
    """A noisy, repeat-rich anchor set with a few true alignments."""
    random.seed(42)
    anchors = []
    for diag in (0, 300, 2000):
        pos = 10
        for _ in range(25):
            pos += random.randint(1, 60)
            drift = random.randint(-3, 3)
            anchors.append((pos, pos + diag + drift, random.randint(5, 40)))
    for _ in range(60):
        anchors.append((random.randint(0, 3000), random.randint(0, 3000), random.randint(5, 30)))
    # shared starts, as produced by tandem repeats
    for k in range(8):
        anchors.append((1500, 1500 + 2 * k, 12))
    return anchors


@pytest.fixture
def match_list():
    """Text of a small match list with three queries."""
    return MATCH_LIST


@pytest.fixture
def match_file(tmp_path, match_list):
    p = tmp_path / "matches.txt"
    p.write_text(match_list)
    return p
