import pytest

SCENARIO_A = """def f(n):
    for i in range(n):
        for j in range(n):
            pass
"""

SCENARIO_B = """function bsearch(arr, x) {
  let left = 0, right = arr.length;
  while (left < right) {
    let mid = (left + right) / 2;
  }
}
"""

SCENARIO_C = """def fib(n):
    if n < 2: return n
    return fib(n-1) + fib(n-2)
"""


@pytest.fixture
def scenario_a():
    return SCENARIO_A


@pytest.fixture
def scenario_b():
    return SCENARIO_B


@pytest.fixture
def scenario_c():
    return SCENARIO_C
