"""Shared test fixtures for codemetrics tests."""

import pytest

from codemetrics.config import MetricsConfiguration
from codemetrics.core import DiagnosticsCollector
from codemetrics.document import TextDocument


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# Complexity 7: function 1, if 1, && 1, else-if 1, || 1, for 1, ?: 1
COMPLEX_TS = """\
function check(a: number, b: number) {
  if (a && b) {
    return 1;
  } else if (a || b) {
    return 2;
  }
  for (let i = 0; i < 3; i++) {}
  return a ? 1 : 0;
}

const small = () => 1;
"""

# Complexity 5: function 1, for 1, if 1, and 1, elseif 1
COMPLEX_LUA = """\
local function process(items)
  for i, v in ipairs(items) do
    if v > 0 and v < 10 then
      print(v)
    elseif v == 0 then
      print("zero")
    else
      break
    end
  end
end
"""

COMPLEX_VUE = """\
<template>
  <div v-if="ok">{{ label }}</div>
</template>

<script lang="ts">
export default {
  methods: {
    pick(a, b) {
      if (a && b) {
        return 1;
      }
      while (a || b) {
        a--;
      }
      return 0;
    },
  },
};
</script>

<style>
div { color: red; }
</style>
"""


@pytest.fixture
def config():
    """Default configuration with diagnostics switched on."""
    return MetricsConfiguration(diagnostics_enabled=True)


@pytest.fixture
def publisher():
    """In-memory diagnostics publisher."""
    return DiagnosticsCollector()


@pytest.fixture
def ts_document():
    """TypeScript document holding one function of complexity 7."""
    return TextDocument(uri="file:///project/src/check.ts", language_id="typescript", text=COMPLEX_TS)


@pytest.fixture
def lua_document():
    """Lua document holding one function of complexity 5."""
    return TextDocument(uri="file:///project/process.lua", language_id="lua", text=COMPLEX_LUA)


@pytest.fixture
def vue_document():
    """Vue single-file component with one method of complexity 5."""
    return TextDocument(uri="file:///project/Pick.vue", language_id="vue", text=COMPLEX_VUE)
