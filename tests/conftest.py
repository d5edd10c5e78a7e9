import pytest

from hilal.api import load_baseline
from hilal.baseline.table import BaselineTable


@pytest.fixture
def toy_table():
    # lengths 29, 30, 29
    return BaselineTable(epoch_year=1400, first_offset=100, starts=(1000, 1029, 1059, 1088), name="toy")

@pytest.fixture
def chain_table():
    # lengths 29, 29, 29: moving month 101 one day later pushes every later month
    return BaselineTable(epoch_year=1400, first_offset=100, starts=(1000, 1029, 1058, 1087), name="chain")

@pytest.fixture
def wide_table():
    # lengths 30, 30, 29, 30
    return BaselineTable(epoch_year=1400, first_offset=100, starts=(1000, 1030, 1060, 1089, 1119), name="wide")

@pytest.fixture
def tabular_table():
    return load_baseline("tabular", start_year=1440, end_year=1450)
